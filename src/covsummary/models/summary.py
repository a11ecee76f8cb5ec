"""Coverage result summary: per-job metrics folded into aggregate totals."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from covsummary.utils.rounding import round_half_even


class ComplexityAggregation(Enum):
    """How complexity scores of child results are combined into a total."""

    SUM = "sum"
    """Report the accumulated complexity score as-is."""

    MEAN = "mean"
    """Average the complexity score over child results, like the percentages."""


@dataclass(frozen=True)
class CoverageMetrics:
    """The six raw values stored by a summary."""

    line_coverage: float = 0.0
    method_coverage: float = 0.0
    class_coverage: float = 0.0
    branch_coverage: float = 0.0
    instruction_coverage: float = 0.0
    complexity_score: float = 0.0

    def to_dict(self) -> dict[str, float]:
        """Return the metrics as a JSON-compatible dict."""
        return {
            "line": self.line_coverage,
            "method": self.method_coverage,
            "class": self.class_coverage,
            "branch": self.branch_coverage,
            "instruction": self.instruction_coverage,
            "complexity": self.complexity_score,
        }


@dataclass(frozen=True)
class CoverageTotals:
    """Rounded totals reported for a summary."""

    line_coverage: float
    method_coverage: float
    class_coverage: float
    branch_coverage: float
    instruction_coverage: float
    complexity_score: float

    def to_dict(self) -> dict[str, float]:
        """Return the totals as a JSON-compatible dict."""
        return {
            "line": self.line_coverage,
            "method": self.method_coverage,
            "class": self.class_coverage,
            "branch": self.branch_coverage,
            "instruction": self.instruction_coverage,
            "complexity": self.complexity_score,
        }


@dataclass
class CoverageResultSummary:
    """Coverage metrics of one job, optionally aggregated from child results.

    Before any child is added the six metric fields hold the job's own values.
    Once :meth:`add_coverage_result` is used they hold the running sum of every
    added child on top of the starting values, and the ``total_*`` properties
    divide that sum by the number of children.

    Not thread-safe: concurrent calls to :meth:`add_coverage_result` on the
    same instance must be serialized by the caller.
    """

    job: Any = None
    """Owning job. Passed through untouched."""

    line_coverage: float = 0.0
    """Line coverage percentage (0.0-100.0), or the sum over children."""

    method_coverage: float = 0.0
    """Method coverage percentage (0.0-100.0), or the sum over children."""

    class_coverage: float = 0.0
    """Class coverage percentage (0.0-100.0), or the sum over children."""

    branch_coverage: float = 0.0
    """Branch coverage percentage (0.0-100.0), or the sum over children."""

    instruction_coverage: float = 0.0
    """Instruction coverage percentage (0.0-100.0), or the sum over children."""

    complexity_score: float = 0.0
    """Complexity score (not a percentage), or the sum over children."""

    coverage_results: list[CoverageResultSummary] = field(default_factory=list)
    """Child results in the order they were added."""

    complexity_aggregation: ComplexityAggregation = field(
        default=ComplexityAggregation.SUM, compare=False
    )
    """Policy used by :attr:`total_complexity_score`."""

    def add_coverage_result(self, coverage_result: CoverageResultSummary) -> CoverageResultSummary:
        """Fold ``coverage_result`` into this summary and return ``self``.

        The child is recorded as a snapshot, so changing ``coverage_result``
        afterwards does not alter this summary.
        """
        self.line_coverage += coverage_result.line_coverage
        self.method_coverage += coverage_result.method_coverage
        self.class_coverage += coverage_result.class_coverage
        self.branch_coverage += coverage_result.branch_coverage
        self.instruction_coverage += coverage_result.instruction_coverage
        self.complexity_score += coverage_result.complexity_score

        self.coverage_results.append(coverage_result.snapshot())
        return self

    def snapshot(self) -> CoverageResultSummary:
        """Return an independent copy of this summary's current values."""
        return CoverageResultSummary(
            job=self.job,
            line_coverage=self.line_coverage,
            method_coverage=self.method_coverage,
            class_coverage=self.class_coverage,
            branch_coverage=self.branch_coverage,
            instruction_coverage=self.instruction_coverage,
            complexity_score=self.complexity_score,
            coverage_results=list(self.coverage_results),
            complexity_aggregation=self.complexity_aggregation,
        )

    def metrics(self) -> CoverageMetrics:
        """Return the stored (unrounded) metric values."""
        return CoverageMetrics(
            line_coverage=self.line_coverage,
            method_coverage=self.method_coverage,
            class_coverage=self.class_coverage,
            branch_coverage=self.branch_coverage,
            instruction_coverage=self.instruction_coverage,
            complexity_score=self.complexity_score,
        )

    @property
    def count(self) -> int:
        """Return the number of child results added so far."""
        return len(self.coverage_results)

    def _average(self, accumulated: float) -> float:
        if not self.coverage_results:
            return 0.0
        return round_half_even(accumulated / len(self.coverage_results))

    @property
    def total_line_coverage(self) -> float:
        """Return mean line coverage over child results."""
        return self._average(self.line_coverage)

    @property
    def total_method_coverage(self) -> float:
        """Return mean method coverage over child results."""
        return self._average(self.method_coverage)

    @property
    def total_class_coverage(self) -> float:
        """Return mean class coverage over child results."""
        return self._average(self.class_coverage)

    @property
    def total_branch_coverage(self) -> float:
        """Return mean branch coverage over child results."""
        return self._average(self.branch_coverage)

    @property
    def total_instruction_coverage(self) -> float:
        """Return mean instruction coverage over child results."""
        return self._average(self.instruction_coverage)

    @property
    def total_complexity_score(self) -> float:
        """Return the complexity total according to :attr:`complexity_aggregation`."""
        if not self.coverage_results:
            return 0.0
        if self.complexity_aggregation is ComplexityAggregation.MEAN:
            return self._average(self.complexity_score)
        return round_half_even(self.complexity_score)

    def totals(self) -> CoverageTotals:
        """Return every rounded total at once."""
        return CoverageTotals(
            line_coverage=self.total_line_coverage,
            method_coverage=self.total_method_coverage,
            class_coverage=self.total_class_coverage,
            branch_coverage=self.total_branch_coverage,
            instruction_coverage=self.total_instruction_coverage,
            complexity_score=self.total_complexity_score,
        )
