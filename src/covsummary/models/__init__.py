"""Data models for covsummary."""

from covsummary.models.summary import (
    ComplexityAggregation,
    CoverageMetrics,
    CoverageResultSummary,
    CoverageTotals,
)

__all__ = [
    "ComplexityAggregation",
    "CoverageMetrics",
    "CoverageResultSummary",
    "CoverageTotals",
]
