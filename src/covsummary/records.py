"""Read and write job coverage record files.

A record file is a JSON document holding coverage numbers that were already
computed elsewhere, either ``{"jobs": [...]}`` or a bare list of objects::

    {"job": "core", "line": 81.5, "method": 77.0, "class": 90.0,
     "branch": 64.2, "instruction": 80.1, "complexity": 12.0}

Missing metric keys default to ``0.0``.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from covsummary.builder import JobCoverage

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

logger = logging.getLogger(__name__)

# JSON key -> JobCoverage field
_METRIC_KEYS = {
    "line": "line_coverage",
    "method": "method_coverage",
    "class": "class_coverage",
    "branch": "branch_coverage",
    "instruction": "instruction_coverage",
    "complexity": "complexity_score",
}


class RecordFormatError(ValueError):
    """Raised when a record file does not have the expected structure."""


def read_job_records(path: Path) -> list[JobCoverage]:
    """Parse a record file into :class:`JobCoverage` entries.

    Raises:
        RecordFormatError: If the file is not valid JSON or an entry is malformed.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise RecordFormatError(f"{path}: invalid JSON (not UTF-8 encoded)") from exc
    except json.JSONDecodeError as exc:
        raise RecordFormatError(f"{path}: invalid JSON ({exc.msg})") from exc

    if isinstance(data, dict):
        data = data.get("jobs")
    if not isinstance(data, list):
        raise RecordFormatError(f"{path}: expected a list of job records")

    records = [_parse_record(entry, index, path) for index, entry in enumerate(data)]
    logger.debug("Read %d job record(s) from %s", len(records), path)
    return records


def write_job_records(records: Iterable[JobCoverage], output_path: Path) -> None:
    """Serialize job records to a JSON file."""
    payload = {"jobs": [_serialize_record(record) for record in records]}
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def _parse_record(entry: Any, index: int, path: Path) -> JobCoverage:
    """Convert one JSON object into a JobCoverage."""
    if not isinstance(entry, dict):
        raise RecordFormatError(f"{path}: record {index} is not an object")

    job = entry.get("job")
    if not isinstance(job, str) or not job:
        raise RecordFormatError(f"{path}: record {index} has no job name")

    values: dict[str, float] = {}
    for key, attr in _METRIC_KEYS.items():
        raw = entry.get(key, 0.0)
        if isinstance(raw, bool) or not isinstance(raw, int | float):
            raise RecordFormatError(
                f"{path}: record {index} ({job}) has non-numeric {key!r}: {raw!r}"
            )
        values[attr] = float(raw)

    return JobCoverage(job=job, **values)


def _serialize_record(record: JobCoverage) -> dict[str, Any]:
    """Convert a JobCoverage into a JSON-compatible dict."""
    payload: dict[str, Any] = {"job": record.job}
    for key, attr in _METRIC_KEYS.items():
        payload[key] = getattr(record, attr)
    return payload
