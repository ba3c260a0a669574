from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, List, Optional

import typer

from prcheck.checkboxes import extract_checkboxes
from prcheck.config import load_settings
from prcheck.exceptions import InputReadError, PrCheckError
from prcheck.markdown_sections import parse_sections
from prcheck.report import (
    CheckResult,
    record_check,
    render_job_summary,
    summarize,
    write_job_summary,
    write_outputs,
)
from prcheck.schema import CheckboxDTO, SectionDTO, check_report
from prcheck.template_checks import (
    TEMPLATE_CHECK_NAME,
    TemplateValidation,
    validate_template,
)
from prcheck.template_fetch import DEFAULT_API_URL, fetch_pr_template, find_local_template

app = typer.Typer(add_completion=False)

_SKIP_MESSAGE = "No repository PR template found so this check is not applicable"


def _echo_quiet(_line: str) -> None:
    return None


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputReadError(str(path), exc) from exc


def _read_body(body_file: Path | None, body: str | None) -> str:
    if body_file is not None:
        return _read_text(body_file)
    return body or ""


def _resolve_template(
    *,
    template_file: Path | None,
    repo: str,
    token: str,
    ref: str,
    api_url: str,
    root: Path,
) -> str | None:
    if template_file is not None:
        return _read_text(template_file)
    if repo.strip():
        return fetch_pr_template(repo=repo, token=token, ref=ref, api_url=api_url)
    return find_local_template(root)


def _echo_debug(validation: TemplateValidation, echo: Callable[[str], None]) -> None:
    echo(f"Template section issues: {json.dumps(list(validation.issues))}")
    echo(f"Strict section issues: {json.dumps(list(validation.strict_issues))}")
    echo(f"Additional sections: {validation.additional_count}")


def _fail(exc: PrCheckError) -> typer.Exit:
    typer.secho(f"prcheck: {exc}", err=True, fg=typer.colors.RED)
    return typer.Exit(code=2)


@app.command("check-template")
def check_template(
    body_file: Optional[Path] = typer.Option(
        None, "--body-file", exists=True, dir_okay=False, help="File holding the PR description."
    ),
    body: Optional[str] = typer.Option(None, "--body", envvar="PR_BODY"),
    template_file: Optional[Path] = typer.Option(
        None, "--template-file", exists=True, dir_okay=False
    ),
    root: Path = typer.Option(Path("."), "--root", help="Checkout searched when no repo is given."),
    repo: str = typer.Option("", "--repo", envvar="GITHUB_REPOSITORY"),
    token: str = typer.Option("", "--token", envvar="GITHUB_TOKEN"),
    ref: str = typer.Option("", "--ref"),
    api_url: str = typer.Option(DEFAULT_API_URL, "--api-url", envvar="GITHUB_API_URL"),
    config: Optional[Path] = typer.Option(None, "--config"),
    strict_section: Optional[List[str]] = typer.Option(None, "--strict-section"),
    optional_section: Optional[List[str]] = typer.Option(None, "--optional-section"),
    max_additional_sections: Optional[int] = typer.Option(None, "--max-additional-sections"),
    max_failures: Optional[int] = typer.Option(None, "--max-failures"),
    json_output: bool = typer.Option(False, "--json"),
    summary_file: Optional[Path] = typer.Option(
        None, "--summary-file", envvar="GITHUB_STEP_SUMMARY"
    ),
    output_file: Optional[Path] = typer.Option(None, "--output-file", envvar="GITHUB_OUTPUT"),
    debug: bool = typer.Option(False, "--debug"),
) -> None:
    """Check a PR description against the repository's PR template."""
    echo = _echo_quiet if json_output else typer.echo
    try:
        settings = load_settings(
            root=root,
            config_path=config,
            template_overrides={
                "strict_sections": list(strict_section) if strict_section else None,
                "optional_sections": list(optional_section) if optional_section else None,
                "max_additional_sections": max_additional_sections,
            },
            report_overrides={"max_failures": max_failures},
        )
        body_text = _read_body(body_file, body)
        template_text = None
        if settings.template.require_pr_template:
            template_text = _resolve_template(
                template_file=template_file,
                repo=repo,
                token=token,
                ref=ref,
                api_url=api_url,
                root=root,
            )
    except PrCheckError as exc:
        raise _fail(exc) from exc

    results: list[CheckResult] = []
    if settings.template.require_pr_template and template_text is None:
        echo(f"[SKIP] {TEMPLATE_CHECK_NAME}: {_SKIP_MESSAGE}")
    elif template_text is not None:
        validation = validate_template(body_text, template_text, settings.template)
        if validation is not None:
            if debug:
                _echo_debug(validation, echo)
            for result in validation.results:
                record_check(results, result, echo=echo)

    summary = summarize(results, max_failures=settings.report.max_failures)
    if output_file is not None:
        write_outputs(summary, output_file)
    if summary_file is not None:
        write_job_summary(
            render_job_summary(results, max_failures=settings.report.max_failures),
            summary_file,
        )
    if json_output:
        typer.echo(check_report(results, summary).model_dump_json(indent=2))
    raise typer.Exit(code=1 if summary.failed_verdict else 0)


@app.command("sections")
def sections(
    path: Path = typer.Argument(..., exists=True, dir_okay=False),
    json_output: bool = typer.Option(False, "--json"),
) -> None:
    """List the sections and checkboxes prcheck sees in a markdown file."""
    try:
        parsed = parse_sections(_read_text(path))
    except PrCheckError as exc:
        raise _fail(exc) from exc
    if json_output:
        payload = [
            SectionDTO(
                heading=section.heading,
                heading_text=section.heading_text,
                checkboxes=[
                    CheckboxDTO(text=checkbox.text, checked=checkbox.checked)
                    for checkbox in extract_checkboxes(section.content)
                ],
            ).model_dump()
            for section in parsed
        ]
        typer.echo(json.dumps(payload, indent=2))
        return
    if not parsed:
        typer.echo("No sections found.")
        return
    for section in parsed:
        typer.echo(section.heading)
        for checkbox in extract_checkboxes(section.content):
            mark = "x" if checkbox.checked else " "
            typer.echo(f"  - [{mark}] {checkbox.text}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
