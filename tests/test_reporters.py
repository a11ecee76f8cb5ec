"""Tests for the terminal and JSON reporters."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from rich.console import Console

from covsummary.builder import JobCoverage, summarize_jobs
from covsummary.config import ThresholdConfig
from covsummary.models.summary import CoverageResultSummary
from covsummary.reporters.json_reporter import JSONReporter
from covsummary.reporters.terminal import CLIReporter

if TYPE_CHECKING:
    from pathlib import Path


def _summary() -> CoverageResultSummary:
    return summarize_jobs(
        [
            JobCoverage("core", 50.0, 60.0, 70.0, 80.0, 90.0, 5.0),
            JobCoverage("api", 70.0, 80.0, 90.0, 60.0, 50.0, 7.0),
        ]
    )


def _recording_reporter() -> tuple[CLIReporter, Console]:
    output = Console(record=True, width=200, force_terminal=False)
    return CLIReporter(output), output


class TestCLIReporter:
    def test_summary_table_rows_and_totals(self) -> None:
        cli_reporter, output = _recording_reporter()
        cli_reporter.print_summary_table(_summary())
        text = output.export_text()

        assert "Coverage Summary" in text
        assert "core" in text
        assert "api" in text
        assert "Total (2 jobs)" in text
        assert "60.0%" in text
        assert "12.0" in text

    def test_single_job_total_label(self) -> None:
        cli_reporter, output = _recording_reporter()
        cli_reporter.print_summary_table(summarize_jobs([JobCoverage("core", line_coverage=10.0)]))
        text = output.export_text()
        assert "Total (1 job)" in text
        assert "1 jobs" not in text

    def test_empty_summary(self) -> None:
        cli_reporter, output = _recording_reporter()
        cli_reporter.print_summary_table(CoverageResultSummary())
        assert "No coverage results" in output.export_text()

    def test_long_job_names_truncated(self) -> None:
        cli_reporter, output = _recording_reporter()
        summary = summarize_jobs([JobCoverage("x" * 60, line_coverage=10.0)])
        cli_reporter.print_summary_table(summary)
        text = output.export_text()
        assert "x" * 39 + "…" in text
        assert "x" * 41 not in text

    def test_coverage_colors(self) -> None:
        thresholds = ThresholdConfig(good=80.0, warning=50.0)
        assert CLIReporter._get_coverage_color(85.0, thresholds) == "green"
        assert CLIReporter._get_coverage_color(80.0, thresholds) == "green"
        assert CLIReporter._get_coverage_color(65.0, thresholds) == "yellow"
        assert CLIReporter._get_coverage_color(10.0, thresholds) == "red"

    def test_messages(self) -> None:
        cli_reporter, output = _recording_reporter()
        cli_reporter.print_success("done")
        cli_reporter.print_error("broken")
        cli_reporter.print_warning("careful")
        cli_reporter.print_info("fyi")
        text = output.export_text()
        for word in ("done", "broken", "careful", "fyi"):
            assert word in text


class TestJSONReporter:
    def test_generate_string(self) -> None:
        data = json.loads(JSONReporter().generate_string(_summary()))
        assert data["tool"] == "covsummary"
        assert "timestamp" in data
        assert data["complexity_aggregation"] == "sum"
        assert [job["job"] for job in data["jobs"]] == ["core", "api"]
        assert data["jobs"][0]["line"] == 50.0
        assert data["totals"] == {
            "count": 2,
            "line": 60.0,
            "method": 70.0,
            "class": 80.0,
            "branch": 70.0,
            "instruction": 70.0,
            "complexity": 12.0,
        }

    def test_generate_writes_file(self, tmp_path: Path) -> None:
        path = tmp_path / "reports" / "totals.json"
        result = JSONReporter().generate(path, _summary())
        assert result == path
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["totals"]["count"] == 2

    def test_empty_summary(self) -> None:
        data = json.loads(JSONReporter().generate_string(CoverageResultSummary()))
        assert data["jobs"] == []
        assert data["totals"]["count"] == 0
        assert data["totals"]["line"] == 0.0
