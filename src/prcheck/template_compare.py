from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from prcheck.checkboxes import Checkbox, extract_checkboxes, find_checkbox
from prcheck.markdown_sections import Section, find_section, heading_text_set

SINGLE_CHOICE_MAXIMUM = 1


@dataclass(frozen=True)
class SectionComparison:
    template_issues: tuple[str, ...]
    strict_issues: tuple[str, ...]

    @property
    def template_passed(self) -> bool:
        return not self.template_issues

    @property
    def strict_passed(self) -> bool:
        return not self.strict_issues


class _NameSet:
    def __init__(self, names: Iterable[str]):
        self._names = frozenset(name.lower() for name in names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._names


def _strict_checkbox_issues(
    section_name: str,
    template_checkboxes: list[Checkbox],
    body_checkboxes: list[Checkbox],
) -> list[str]:
    issues: list[str] = []
    for template_checkbox in template_checkboxes:
        match = find_checkbox(body_checkboxes, template_checkbox.text)
        if match is None:
            issues.append(
                f'Strict section "{section_name}" is missing checkbox: "{template_checkbox.text}"'
            )
        elif not match.checked:
            issues.append(
                f'Strict section "{section_name}" has unchecked checkbox: "{template_checkbox.text}"'
            )
    return issues


def _single_choice_issue(
    section_name: str,
    template_checkboxes: list[Checkbox],
    body_checkboxes: list[Checkbox],
) -> str | None:
    template_labels = {checkbox.text.lower() for checkbox in template_checkboxes}
    matching = [
        checkbox for checkbox in body_checkboxes if checkbox.text.lower() in template_labels
    ]
    checked_count = sum(1 for checkbox in matching if checkbox.checked)
    if not matching:
        return f'Section "{section_name}" is missing all template checkboxes'
    if checked_count == 0:
        return f'Section "{section_name}" has {len(matching)} checkbox(es) but none are checked'
    if checked_count > SINGLE_CHOICE_MAXIMUM:
        return (
            f'Section "{section_name}" has {checked_count} checkbox(es) checked, '
            f"exceeds maximum of {SINGLE_CHOICE_MAXIMUM}"
        )
    return None


def validate_template_sections(
    template_sections: list[Section],
    body_sections: list[Section],
    strict_names: Iterable[str],
    optional_names: Iterable[str],
) -> SectionComparison:
    """Compare body sections against template sections.

    Template sections are visited in template order. Optional sections are
    skipped before strict names are consulted, so a name listed in both is
    treated as optional. A template section is matched against the first body
    section with the same full heading line, ignoring case.

    General issues start with one combined ``Missing section(s)`` entry when
    any required section is absent, followed by per-section checkbox issues.
    """
    strict = _NameSet(strict_names)
    optional = _NameSet(optional_names)
    content_issues: list[str] = []
    strict_issues: list[str] = []
    missing_sections: list[str] = []

    for template_section in template_sections:
        name = template_section.heading_text
        if name in optional:
            continue

        body_section = find_section(body_sections, template_section.heading)
        if body_section is None:
            missing_sections.append(name)
            if name in strict:
                strict_issues.append(f'Strict section "{name}" is missing from the PR description')
            continue

        template_checkboxes = extract_checkboxes(template_section.content)
        body_checkboxes = extract_checkboxes(body_section.content)
        if name in strict:
            strict_issues.extend(
                _strict_checkbox_issues(name, template_checkboxes, body_checkboxes)
            )
        elif len(template_checkboxes) > 1:
            issue = _single_choice_issue(name, template_checkboxes, body_checkboxes)
            if issue is not None:
                content_issues.append(issue)

    template_issues: list[str] = []
    if missing_sections:
        quoted = ", ".join(f'"{name}"' for name in missing_sections)
        template_issues.append(f"Missing section(s): {quoted}")
    template_issues.extend(content_issues)
    return SectionComparison(
        template_issues=tuple(template_issues),
        strict_issues=tuple(strict_issues),
    )


def count_additional_sections(
    template_sections: list[Section],
    body_sections: list[Section],
) -> int:
    """Body sections whose heading text has no counterpart in the template."""
    known = heading_text_set(template_sections)
    return sum(1 for section in body_sections if section.heading_text.lower() not in known)
