"""Roll per-job coverage numbers up into a single summary."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from covsummary.models.summary import ComplexityAggregation, CoverageResultSummary

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JobCoverage:
    """Coverage numbers of the last successful build of one job."""

    job: str
    line_coverage: float = 0.0
    method_coverage: float = 0.0
    class_coverage: float = 0.0
    branch_coverage: float = 0.0
    instruction_coverage: float = 0.0
    complexity_score: float = 0.0

    def to_summary(self) -> CoverageResultSummary:
        """Return a leaf summary owned by this record's job."""
        return CoverageResultSummary(
            job=self.job,
            line_coverage=self.line_coverage,
            method_coverage=self.method_coverage,
            class_coverage=self.class_coverage,
            branch_coverage=self.branch_coverage,
            instruction_coverage=self.instruction_coverage,
            complexity_score=self.complexity_score,
        )


def summarize_jobs(
    records: Iterable[JobCoverage],
    *,
    complexity_aggregation: ComplexityAggregation = ComplexityAggregation.SUM,
) -> CoverageResultSummary:
    """Fold every job record into a fresh root summary.

    The root starts at zero, so its ``total_*`` properties are the per-job
    means (and the summed complexity score under the default policy).
    """
    summary = CoverageResultSummary(complexity_aggregation=complexity_aggregation)
    for record in records:
        logger.debug("Adding coverage of job %s", record.job)
        summary.add_coverage_result(record.to_summary())

    logger.info("Summarized coverage of %d job(s)", summary.count)
    return summary
