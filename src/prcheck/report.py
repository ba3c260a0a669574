from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

import typer

Echo = Callable[[str], None]

OUTCOME_SKIPPED = "skipped"
OUTCOME_PASSED = "passed"
OUTCOME_FAILED = "failed"


@dataclass(frozen=True)
class CheckResult:
    name: str
    passed: bool
    message: str


@dataclass(frozen=True)
class CheckSummary:
    total: int
    failed: int
    passed: int
    outcome: str

    @property
    def failed_verdict(self) -> bool:
        return self.outcome == OUTCOME_FAILED

    def outputs(self) -> dict[str, str]:
        return {
            "total-checks": str(self.total),
            "failed-checks": str(self.failed),
            "passed-checks": str(self.passed),
            "result": self.outcome,
        }


def record_check(
    results: list[CheckResult],
    result: CheckResult,
    *,
    echo: Echo = typer.echo,
) -> None:
    prefix = "PASS" if result.passed else "FAIL"
    echo(f"[{prefix}] {result.name}: {result.message}")
    results.append(result)


def summarize(results: Iterable[CheckResult], *, max_failures: int) -> CheckSummary:
    """Aggregate recorded checks against the failure-count threshold."""
    items = list(results)
    failed = sum(1 for item in items if not item.passed)
    if not items:
        outcome = OUTCOME_SKIPPED
    elif failed >= max_failures:
        outcome = OUTCOME_FAILED
    else:
        outcome = OUTCOME_PASSED
    return CheckSummary(
        total=len(items),
        failed=failed,
        passed=len(items) - failed,
        outcome=outcome,
    )


def _table_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def render_job_summary(results: Iterable[CheckResult], *, max_failures: int) -> str:
    items = list(results)
    summary = summarize(items, max_failures=max_failures)
    if summary.outcome == OUTCOME_SKIPPED:
        lines = [
            "### PR Quality Checks - Skipped",
            "",
            "No checks were enabled or applicable for this PR.",
        ]
        return "\n".join(lines) + "\n"

    status_text = "Failed" if summary.failed_verdict else "Passed"
    lines = [
        f"### PR Quality Checks - {status_text}",
        "",
        f"{summary.failed}/{summary.total} checks failed · {summary.passed} checks passed",
        "",
        "| Result | Check | Details |",
        "| --- | --- | --- |",
    ]
    ordered = [item for item in items if not item.passed] + [item for item in items if item.passed]
    for item in ordered:
        mark = "✅" if item.passed else "❌"
        lines.append(f"| {mark} | <code>{item.name}</code> | {_table_cell(item.message)} |")
    return "\n".join(lines) + "\n"


def write_outputs(summary: CheckSummary, path: Path) -> None:
    # GitHub Actions output files are appended to by every step.
    with path.open("a", encoding="utf-8") as handle:
        for key, value in summary.outputs().items():
            handle.write(f"{key}={value}\n")


def write_job_summary(text: str, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
