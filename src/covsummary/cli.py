"""covsummary CLI — top-level command group."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console

from covsummary import __version__
from covsummary.builder import summarize_jobs
from covsummary.config import (
    CONFIG_FILENAME,
    REPORT_FORMATS,
    CovSummaryConfig,
    load_config,
    validate_config,
)
from covsummary.models.summary import ComplexityAggregation
from covsummary.records import RecordFormatError, read_job_records
from covsummary.reporters.json_reporter import JSONReporter
from covsummary.reporters.terminal import reporter

logger = logging.getLogger(__name__)
console = Console()


def _config_to_dict(config: CovSummaryConfig) -> dict[str, Any]:
    """Convert the configuration to a dictionary for display."""
    result = asdict(config)
    result.pop("raw", None)
    return result


def _load_valid_config(path: str) -> CovSummaryConfig:
    try:
        config = load_config(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        reporter.print_error(f"Failed to load configuration: {e}")
        raise click.Abort from e

    errors = validate_config(config)
    if errors:
        for error in errors:
            reporter.print_error(error)
        raise click.Abort
    return config


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="covsummary")
@click.pass_context
def cli(ctx: click.Context, *, verbose: bool) -> None:
    """covsummary — aggregate per-job coverage into report totals."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command("summarize")
@click.argument(
    "records_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help=f"Directory containing {CONFIG_FILENAME}.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(REPORT_FORMATS),
    default=None,
    help="Output format (defaults to report.format from the config).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the JSON report to this file instead of stdout.",
)
@click.option(
    "--complexity",
    type=click.Choice([policy.value for policy in ComplexityAggregation]),
    default=None,
    help="How complexity scores are combined (defaults to the config).",
)
def summarize(
    records_file: Path,
    path: str,
    output_format: str | None,
    output_path: Path | None,
    complexity: str | None,
) -> None:
    """Aggregate the job coverage records in RECORDS_FILE.

    Example:
      covsummary summarize coverage-jobs.json
      covsummary summarize coverage-jobs.json --format json -o totals.json
    """
    config = _load_valid_config(path)

    try:
        records = read_job_records(records_file)
    except RecordFormatError as e:
        reporter.print_error(str(e))
        raise click.Abort from e

    policy = (
        ComplexityAggregation(complexity) if complexity else config.summary.complexity_policy
    )
    summary = summarize_jobs(records, complexity_aggregation=policy)

    output_format = output_format or config.report.format
    if output_format == "json":
        target = output_path or (
            Path(config.report.output_path) if config.report.output_path else None
        )
        json_reporter = JSONReporter()
        if target is not None:
            json_reporter.generate(target, summary)
            reporter.print_success(f"Report written to {target}")
        else:
            click.echo(json_reporter.generate_string(summary))
        return

    reporter.print_summary_table(summary, config.thresholds)


@cli.group("config")
def config_group() -> None:
    """Inspect `.covsummary.yml` configuration."""


@config_group.command("show")
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Directory containing the configuration file.",
)
@click.option(
    "--json-output",
    "as_json",
    is_flag=True,
    help="Output as JSON instead of YAML.",
)
def config_show(path: str, *, as_json: bool) -> None:
    """Display the resolved configuration."""
    try:
        config = load_config(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        reporter.print_error(f"Failed to load configuration: {e}")
        raise click.Abort from e

    config_dict = _config_to_dict(config)
    if as_json:
        click.echo(json.dumps(config_dict, indent=2))
    else:
        console.print("[bold cyan]Configuration:[/bold cyan]")
        click.echo(yaml.safe_dump(config_dict, sort_keys=False, default_flow_style=False))


@config_group.command("validate")
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Directory containing the configuration file.",
)
def config_validate(path: str) -> None:
    """Validate `.covsummary.yml` and list any problems."""
    try:
        config = load_config(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        reporter.print_error(f"Failed to load configuration: {e}")
        raise click.Abort from e

    errors = validate_config(config)
    if not errors:
        reporter.print_success("Configuration is valid!")
        return

    reporter.print_error(f"Found {len(errors)} configuration error(s):")
    for idx, error in enumerate(errors, start=1):
        console.print(f"  {idx}. [red]{error}[/red]")
    raise click.Abort
