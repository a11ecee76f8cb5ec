"""Configuration parsing from ``.covsummary.yml``."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from covsummary.models.summary import ComplexityAggregation

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".covsummary.yml"

REPORT_FORMATS = ("terminal", "json")

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")


def _resolve_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var = match.group(1)
        resolved = os.environ.get(var)
        if resolved is None:
            logger.warning("Environment variable %s is not set (referenced in config)", var)
            return ""
        return resolved

    return _ENV_VAR_RE.sub(_replace, value)


def _resolve_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively resolve environment variables in a dictionary."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str):
            result[key] = _resolve_env_vars(value)
        elif isinstance(value, dict):
            result[key] = _resolve_dict(value)
        elif isinstance(value, list):
            result[key] = [
                _resolve_env_vars(item) if isinstance(item, str) else item for item in value
            ]
        else:
            result[key] = value
    return result


@dataclass
class SummaryConfig:
    """How job results are aggregated."""

    complexity_aggregation: str = ComplexityAggregation.SUM.value
    """Complexity policy: ``sum`` or ``mean``."""

    @property
    def complexity_policy(self) -> ComplexityAggregation:
        """Return the configured policy, falling back to ``sum`` when unknown."""
        try:
            return ComplexityAggregation(self.complexity_aggregation.lower())
        except ValueError:
            logger.warning(
                "Unknown complexity aggregation %r, using 'sum'", self.complexity_aggregation
            )
            return ComplexityAggregation.SUM


@dataclass
class ThresholdConfig:
    """Coverage levels used to colour totals in terminal output."""

    good: float = 80.0
    """Percentage at or above which a total is shown green (default: 80%)."""

    warning: float = 50.0
    """Percentage at or above which a total is shown yellow (default: 50%)."""


@dataclass
class ReportConfig:
    """Reporting and output configuration."""

    format: str = "terminal"
    """Default output format: terminal or json."""

    output_path: str = ""
    """File to write the JSON report to (empty = stdout)."""


@dataclass
class CovSummaryConfig:
    """Complete covsummary configuration."""

    summary: SummaryConfig = field(default_factory=SummaryConfig)
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    raw: dict[str, Any] = field(default_factory=dict)
    """Resolved YAML content as loaded."""


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a config section, treating anything but a mapping as empty."""
    section = raw.get(name, {})
    if not isinstance(section, dict):
        logger.warning("Ignoring config section %r: expected a mapping", name)
        return {}
    return section


def load_config(root: str | Path) -> CovSummaryConfig:
    """Load and parse ``.covsummary.yml`` from ``root``.

    Falls back to defaults and environment variables when the YAML file is
    missing or incomplete.
    """
    root_path = Path(root).resolve()
    config_file = root_path / CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_file.is_file():
        parsed = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        if isinstance(parsed, dict):
            raw = _resolve_dict(parsed)
        logger.debug("Loaded configuration from %s", config_file)

    summary_raw = _section(raw, "summary")
    summary = SummaryConfig(
        complexity_aggregation=str(
            summary_raw.get(
                "complexity_aggregation",
                os.environ.get(
                    "COVSUMMARY_COMPLEXITY_AGGREGATION", ComplexityAggregation.SUM.value
                ),
            )
        ),
    )

    thresholds_raw = _section(raw, "thresholds")
    thresholds = ThresholdConfig(
        good=float(thresholds_raw.get("good", 80.0)),
        warning=float(thresholds_raw.get("warning", 50.0)),
    )

    report_raw = _section(raw, "report")
    report = ReportConfig(
        format=str(
            report_raw.get("format", os.environ.get("COVSUMMARY_REPORT_FORMAT", "terminal"))
        ),
        output_path=str(report_raw.get("output_path", "")),
    )

    return CovSummaryConfig(summary=summary, thresholds=thresholds, report=report, raw=raw)


def _validate_summary_config(summary: SummaryConfig) -> list[str]:
    """Validate aggregation settings."""
    errors: list[str] = []
    valid = [policy.value for policy in ComplexityAggregation]
    if summary.complexity_aggregation.lower() not in valid:
        errors.append(
            f"summary.complexity_aggregation must be one of: {', '.join(valid)} "
            f"(got: {summary.complexity_aggregation})"
        )
    return errors


def _validate_threshold_config(thresholds: ThresholdConfig) -> list[str]:
    """Validate colour threshold settings."""
    max_percentage = 100.0
    errors: list[str] = []

    if not 0.0 <= thresholds.good <= max_percentage:
        errors.append(f"thresholds.good must be between 0 and 100 (got: {thresholds.good})")

    if not 0.0 <= thresholds.warning <= max_percentage:
        errors.append(
            f"thresholds.warning must be between 0 and 100 (got: {thresholds.warning})"
        )

    if thresholds.warning > thresholds.good:
        errors.append(
            f"thresholds.warning ({thresholds.warning}) must not exceed "
            f"thresholds.good ({thresholds.good})"
        )

    return errors


def _validate_report_config(report: ReportConfig) -> list[str]:
    """Validate output settings."""
    errors: list[str] = []
    if report.format not in REPORT_FORMATS:
        errors.append(
            f"report.format must be one of: {', '.join(REPORT_FORMATS)} (got: {report.format})"
        )
    return errors


def validate_config(config: CovSummaryConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    errors: list[str] = []
    errors.extend(_validate_summary_config(config.summary))
    errors.extend(_validate_threshold_config(config.thresholds))
    errors.extend(_validate_report_config(config.report))
    return errors
