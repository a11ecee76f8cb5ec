"""covsummary — aggregate per-job code coverage into report totals."""

from covsummary.builder import JobCoverage, summarize_jobs
from covsummary.models.summary import (
    ComplexityAggregation,
    CoverageMetrics,
    CoverageResultSummary,
    CoverageTotals,
)
from covsummary.utils.rounding import round_half_even

__version__ = "0.1.0"

__all__ = [
    "ComplexityAggregation",
    "CoverageMetrics",
    "CoverageResultSummary",
    "CoverageTotals",
    "JobCoverage",
    "__version__",
    "round_half_even",
    "summarize_jobs",
]
