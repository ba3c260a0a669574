from __future__ import annotations

from pathlib import Path

from prcheck.report import (
    CheckResult,
    CheckSummary,
    record_check,
    render_job_summary,
    summarize,
    write_job_summary,
    write_outputs,
)
from prcheck.schema import check_report


def test_record_check_echoes_and_appends() -> None:
    lines: list[str] = []
    results: list[CheckResult] = []
    record_check(results, CheckResult("pr-template", True, "ok"), echo=lines.append)
    record_check(results, CheckResult("strict-pr-template-sections", False, "bad"), echo=lines.append)
    assert lines == ["[PASS] pr-template: ok", "[FAIL] strict-pr-template-sections: bad"]
    assert [result.name for result in results] == ["pr-template", "strict-pr-template-sections"]


def test_summarize_applies_failure_threshold() -> None:
    results = [CheckResult("a", False, "x"), CheckResult("b", True, "y"), CheckResult("c", False, "z")]
    assert summarize(results, max_failures=2) == CheckSummary(total=3, failed=2, passed=1, outcome="failed")
    assert summarize(results, max_failures=3).outcome == "passed"
    assert summarize([], max_failures=1).outcome == "skipped"


def test_render_job_summary_lists_failures_first() -> None:
    results = [CheckResult("a", True, "fine"), CheckResult("b", False, "broken | pipe")]
    text = render_job_summary(results, max_failures=1)
    lines = text.splitlines()
    assert lines[0] == "### PR Quality Checks - Failed"
    assert lines[2] == "1/2 checks failed · 1 checks passed"
    assert lines[6] == "| ❌ | <code>b</code> | broken \\| pipe |"
    assert lines[7] == "| ✅ | <code>a</code> | fine |"


def test_render_job_summary_when_nothing_ran() -> None:
    text = render_job_summary([], max_failures=1)
    assert text.startswith("### PR Quality Checks - Skipped\n")
    assert "No checks were enabled or applicable for this PR." in text


def test_write_outputs_appends_github_output_lines(tmp_path: Path) -> None:
    output = tmp_path / "github_output"
    output.write_text("earlier=1\n", encoding="utf-8")
    write_outputs(CheckSummary(total=2, failed=1, passed=1, outcome="failed"), output)
    assert output.read_text(encoding="utf-8").splitlines() == [
        "earlier=1",
        "total-checks=2",
        "failed-checks=1",
        "passed-checks=1",
        "result=failed",
    ]


def test_write_job_summary_overwrites(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "summary.md"
    write_job_summary("first\n", target)
    write_job_summary("second\n", target)
    assert target.read_text(encoding="utf-8") == "second\n"


def test_check_report_dto_round_trips_counts() -> None:
    results = [CheckResult("a", False, "x")]
    report = check_report(results, summarize(results, max_failures=1))
    payload = report.model_dump()
    assert payload["results"] == [{"name": "a", "passed": False, "message": "x"}]
    assert payload["summary"] == {"total": 1, "failed": 1, "passed": 0, "outcome": "failed"}
