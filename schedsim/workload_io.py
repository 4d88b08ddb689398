from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Mapping, Sequence

from .errors import InvalidProcessError, WorkloadError
from .models import Process

logger = logging.getLogger(__name__)

# Accepted column names, canonical name first.
FIELD_ALIASES = {
    "pid": ("pid", "id"),
    "burst_time": ("burst_time", "burst"),
    "arrival_time": ("arrival_time", "arrival"),
    "priority": ("priority",),
}

# Column order of header-less CSV files.
POSITIONAL_FIELDS = ("pid", "burst_time", "arrival_time", "priority")


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    CSV files may carry a header row naming their columns; without one
    each row is read as ``id,burst,arrival[,priority]``.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise WorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8-sig") as f:
        try:
            raw = json.load(f)
        except UnicodeDecodeError as exc:
            raise WorkloadError(f"Workload {path} is not valid UTF-8: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise WorkloadError(f"Invalid JSON workload {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        try:
            rows = [row for row in csv.reader(f) if any(cell.strip() for cell in row)]
        except UnicodeDecodeError as exc:
            raise WorkloadError(f"Workload {path} is not valid UTF-8: {exc}") from exc

    if not rows:
        return []

    if _is_int(rows[0][0]):
        return [_process_from_row(row) for row in rows]

    header = [cell.strip().lower() for cell in rows[0]]
    processes: List[Process] = []
    for row in rows[1:]:
        if len(row) != len(header):
            raise WorkloadError(f"Invalid process entry: {row!r} (expected {len(header)} columns: {','.join(header)})")
        processes.append(_process_from_mapping(dict(zip(header, row))))
    return processes


def _is_int(value: str) -> bool:
    try:
        int(value.strip())
    except ValueError:
        return False
    return True


def _process_from_row(row: Sequence[str]) -> Process:
    if len(row) not in (3, 4):
        raise WorkloadError(f"Invalid process entry: {row!r} (expected id,burst,arrival[,priority])")
    return _process_from_mapping(dict(zip(POSITIONAL_FIELDS, row)))


def _lookup(mapping: Mapping, field: str):
    for key in FIELD_ALIASES[field]:
        if key in mapping:
            return mapping[key]
    raise KeyError(field)


def _to_int(value) -> int:
    if isinstance(value, bool):
        raise TypeError("boolean is not a number")
    if isinstance(value, float) and not value.is_integer():
        raise TypeError(f"{value} is not a whole number")
    if isinstance(value, str):
        value = value.strip()
    return int(value)


def _process_from_mapping(mapping) -> Process:
    if not isinstance(mapping, Mapping):
        raise WorkloadError(f"Invalid process entry: {mapping!r}")

    try:
        pid = _to_int(_lookup(mapping, "pid"))
        arrival_time = _to_int(_lookup(mapping, "arrival_time"))
        burst_time = _to_int(_lookup(mapping, "burst_time"))
    except (KeyError, TypeError, ValueError) as exc:
        raise WorkloadError(f"Invalid process entry: {dict(mapping)!r}") from exc

    priority_val = mapping.get("priority")
    try:
        priority = _to_int(priority_val) if priority_val not in (None, "") else 0
    except (TypeError, ValueError) as exc:
        raise WorkloadError(f"Invalid priority in process entry: {dict(mapping)!r}") from exc

    try:
        return Process(
            pid=pid,
            arrival_time=arrival_time,
            burst_time=burst_time,
            priority=priority,
        )
    except InvalidProcessError as exc:
        raise WorkloadError(str(exc)) from exc

