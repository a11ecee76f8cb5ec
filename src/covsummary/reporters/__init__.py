"""Reporters for outputting coverage summaries."""

from __future__ import annotations

from covsummary.reporters.json_reporter import JSONReporter
from covsummary.reporters.terminal import CLIReporter, reporter

__all__ = [
    "CLIReporter",
    "JSONReporter",
    "reporter",
]
