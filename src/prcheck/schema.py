from __future__ import annotations

from typing import List

from pydantic import BaseModel

from prcheck.report import CheckResult, CheckSummary


class CheckResultDTO(BaseModel):
    name: str
    passed: bool
    message: str


class CheckSummaryDTO(BaseModel):
    total: int
    failed: int
    passed: int
    outcome: str


class CheckReportDTO(BaseModel):
    results: List[CheckResultDTO] = []
    summary: CheckSummaryDTO


class CheckboxDTO(BaseModel):
    text: str
    checked: bool


class SectionDTO(BaseModel):
    heading: str
    heading_text: str
    checkboxes: List[CheckboxDTO] = []


def check_report(results: List[CheckResult], summary: CheckSummary) -> CheckReportDTO:
    return CheckReportDTO(
        results=[
            CheckResultDTO(name=item.name, passed=item.passed, message=item.message)
            for item in results
        ],
        summary=CheckSummaryDTO(
            total=summary.total,
            failed=summary.failed,
            passed=summary.passed,
            outcome=summary.outcome,
        ),
    )
