"""JSON reporter: machine-readable coverage summaries."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

    from covsummary.models.summary import CoverageResultSummary

logger = logging.getLogger(__name__)


class JSONReporter:
    """Serialize a coverage summary, its job results and totals to JSON."""

    def generate(self, output_path: Path, summary: CoverageResultSummary) -> Path:
        """Write a JSON report file and return its path."""
        report = _build_report(summary)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(report, indent=2, ensure_ascii=False, default=str),
            encoding="utf-8",
        )
        logger.info("JSON report written to %s", output_path)
        return output_path

    def generate_string(self, summary: CoverageResultSummary) -> str:
        """Return the JSON report as a string."""
        return json.dumps(_build_report(summary), indent=2, ensure_ascii=False, default=str)


def _build_report(summary: CoverageResultSummary) -> dict[str, Any]:
    """Build the JSON report structure."""
    return {
        "tool": "covsummary",
        "timestamp": datetime.now(tz=UTC).isoformat(),
        "complexity_aggregation": summary.complexity_aggregation.value,
        "jobs": [
            {"job": result.job, **result.metrics().to_dict()}
            for result in summary.coverage_results
        ],
        "totals": {"count": summary.count, **summary.totals().to_dict()},
    }
