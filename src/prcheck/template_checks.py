from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from prcheck.config import TemplateSettings
from prcheck.markdown_sections import Section, parse_sections
from prcheck.report import CheckResult
from prcheck.template_compare import (
    SectionComparison,
    count_additional_sections,
    validate_template_sections,
)

TEMPLATE_CHECK_NAME = "pr-template"
STRICT_CHECK_NAME = "strict-pr-template-sections"
ADDITIONAL_SECTIONS_CHECK_NAME = "max-additional-pr-template-sections"

IDENTICAL_TEMPLATE_MESSAGE = "PR description is identical to the template (not filled in)"


@dataclass(frozen=True)
class TemplateEvaluation:
    template_sections: tuple[Section, ...]
    body_sections: tuple[Section, ...]
    comparison: SectionComparison

    @property
    def additional_count(self) -> int:
        return count_additional_sections(list(self.template_sections), list(self.body_sections))


@dataclass(frozen=True)
class TemplateCheck:
    name: str
    applies: Callable[[TemplateSettings], bool]
    evaluate: Callable[[TemplateSettings, TemplateEvaluation], CheckResult]


@dataclass(frozen=True)
class TemplateValidation:
    identical: bool
    passed: bool
    issues: tuple[str, ...]
    strict_passed: bool
    strict_issues: tuple[str, ...]
    additional_sections_passed: bool
    additional_count: int
    results: tuple[CheckResult, ...] = ()


def _structure_result(settings: TemplateSettings, evaluation: TemplateEvaluation) -> CheckResult:
    _ = settings
    issues = evaluation.comparison.template_issues
    return CheckResult(
        name=TEMPLATE_CHECK_NAME,
        passed=not issues,
        message="; ".join(issues) if issues else "PR description follows the PR template structure",
    )


def _strict_result(settings: TemplateSettings, evaluation: TemplateEvaluation) -> CheckResult:
    _ = settings
    issues = evaluation.comparison.strict_issues
    return CheckResult(
        name=STRICT_CHECK_NAME,
        passed=not issues,
        message="; ".join(issues) if issues else "All strict PR template sections are valid",
    )


def _additional_sections_result(
    settings: TemplateSettings, evaluation: TemplateEvaluation
) -> CheckResult:
    count = evaluation.additional_count
    maximum = settings.max_additional_sections
    passed = count <= maximum
    verdict = "within" if passed else "exceeds"
    return CheckResult(
        name=ADDITIONAL_SECTIONS_CHECK_NAME,
        passed=passed,
        message=f"PR has {count} additional section(s), {verdict} maximum of {maximum}",
    )


TEMPLATE_CHECKS: tuple[TemplateCheck, ...] = (
    TemplateCheck(
        name=TEMPLATE_CHECK_NAME,
        applies=lambda settings: True,
        evaluate=_structure_result,
    ),
    TemplateCheck(
        name=STRICT_CHECK_NAME,
        applies=lambda settings: bool(settings.strict_sections),
        evaluate=_strict_result,
    ),
    TemplateCheck(
        name=ADDITIONAL_SECTIONS_CHECK_NAME,
        applies=lambda settings: settings.max_additional_sections > 0,
        evaluate=_additional_sections_result,
    ),
)


def is_unfilled(body_text: str, template_text: str) -> bool:
    return body_text.strip() == template_text.strip()


def evaluate_template(
    body_text: str,
    template_text: str,
    settings: TemplateSettings,
) -> TemplateEvaluation:
    template_sections = parse_sections(template_text)
    body_sections = parse_sections(body_text)
    comparison = validate_template_sections(
        template_sections,
        body_sections,
        settings.strict_sections,
        settings.optional_sections,
    )
    return TemplateEvaluation(
        template_sections=tuple(template_sections),
        body_sections=tuple(body_sections),
        comparison=comparison,
    )


def validate_template(
    body_text: str,
    template_text: str | None,
    settings: TemplateSettings,
    *,
    checks: tuple[TemplateCheck, ...] = TEMPLATE_CHECKS,
) -> TemplateValidation | None:
    """Validate a description against its template.

    Returns ``None`` when the template is absent; the check does not apply.
    The body and template are parsed once; ``results`` holds the named
    results of the registered checks that apply to ``settings``. A body left
    identical to the template yields a single failing ``pr-template`` result.
    """
    if template_text is None:
        return None
    if is_unfilled(body_text, template_text):
        return TemplateValidation(
            identical=True,
            passed=False,
            issues=(IDENTICAL_TEMPLATE_MESSAGE,),
            strict_passed=True,
            strict_issues=(),
            additional_sections_passed=True,
            additional_count=0,
            results=(
                CheckResult(
                    name=TEMPLATE_CHECK_NAME,
                    passed=False,
                    message=IDENTICAL_TEMPLATE_MESSAGE,
                ),
            ),
        )
    evaluation = evaluate_template(body_text, template_text, settings)
    comparison = evaluation.comparison
    additional_count = evaluation.additional_count
    return TemplateValidation(
        identical=False,
        passed=comparison.template_passed,
        issues=comparison.template_issues,
        strict_passed=comparison.strict_passed,
        strict_issues=comparison.strict_issues,
        additional_sections_passed=(
            settings.max_additional_sections <= 0
            or additional_count <= settings.max_additional_sections
        ),
        additional_count=additional_count,
        results=tuple(
            check.evaluate(settings, evaluation)
            for check in checks
            if check.applies(settings)
        ),
    )


def template_check_results(
    body_text: str,
    template_text: str | None,
    settings: TemplateSettings,
    *,
    checks: tuple[TemplateCheck, ...] = TEMPLATE_CHECKS,
) -> list[CheckResult]:
    """Named results of the template checks, in registry order.

    Nothing is reported when the template is absent or not required.
    """
    if not settings.require_pr_template:
        return []
    validation = validate_template(body_text, template_text, settings, checks=checks)
    if validation is None:
        return []
    return list(validation.results)
