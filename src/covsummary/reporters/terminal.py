"""Terminal reporter with rich output formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from covsummary.config import ThresholdConfig

if TYPE_CHECKING:
    from covsummary.models.summary import CoverageResultSummary

console = Console()

_MAX_JOB_NAME_LENGTH = 40


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


class CLIReporter:
    """Rich terminal output for coverage summaries."""

    def __init__(self, output: Console | None = None) -> None:
        """Initialize the CLI reporter."""
        self.console = output or console

    def print_header(self, title: str) -> None:
        """Print a bold header."""
        self.console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def print_info(self, message: str) -> None:
        """Print an info message."""
        self.console.print(f"[dim]{message}[/dim]")

    @staticmethod
    def _get_coverage_color(percentage: float, thresholds: ThresholdConfig) -> str:
        """Return a Rich color name for a coverage percentage."""
        if percentage >= thresholds.good:
            return "green"
        if percentage >= thresholds.warning:
            return "yellow"
        return "red"

    def _percent_cell(
        self, value: float, thresholds: ThresholdConfig, *, bold: bool = False
    ) -> str:
        color = self._get_coverage_color(value, thresholds)
        style = f"bold {color}" if bold else color
        return f"[{style}]{value:.1f}%[/{style}]"

    def print_summary_table(
        self,
        summary: CoverageResultSummary,
        thresholds: ThresholdConfig | None = None,
    ) -> None:
        """Print one row per job result followed by the aggregated totals."""
        thresholds = thresholds or ThresholdConfig()
        if not summary.coverage_results:
            self.console.print("  [dim]No coverage results[/dim]")
            return

        table = Table(title="Coverage Summary", title_style="bold cyan")
        table.add_column("Job", style="bold")
        for column in ("Line", "Method", "Class", "Branch", "Instruction"):
            table.add_column(column, justify="right")
        table.add_column("Complexity", justify="right")

        for result in summary.coverage_results:
            table.add_row(
                _truncate(str(result.job), _MAX_JOB_NAME_LENGTH),
                self._percent_cell(result.line_coverage, thresholds),
                self._percent_cell(result.method_coverage, thresholds),
                self._percent_cell(result.class_coverage, thresholds),
                self._percent_cell(result.branch_coverage, thresholds),
                self._percent_cell(result.instruction_coverage, thresholds),
                f"{result.complexity_score:.1f}",
            )

        totals = summary.totals()
        table.add_section()
        table.add_row(
            f"[bold]Total ({summary.count} job{'' if summary.count == 1 else 's'})[/bold]",
            self._percent_cell(totals.line_coverage, thresholds, bold=True),
            self._percent_cell(totals.method_coverage, thresholds, bold=True),
            self._percent_cell(totals.class_coverage, thresholds, bold=True),
            self._percent_cell(totals.branch_coverage, thresholds, bold=True),
            self._percent_cell(totals.instruction_coverage, thresholds, bold=True),
            f"[bold]{totals.complexity_score:.1f}[/bold]",
        )

        self.console.print(table)


reporter = CLIReporter()
