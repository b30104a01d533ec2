from __future__ import annotations

import csv
import json
import logging
import re
from pathlib import Path
from typing import Iterable, List

from .errors import InvalidInputError
from .models import ProcessSpec

logger = logging.getLogger(__name__)

FIELDS = ["name", "arrival", "burst", "priority"]

_ALIASES = {
    "name": ("name", "pid"),
    "arrival": ("arrival", "arrival_time"),
    "burst": ("burst", "burst_time"),
    "priority": ("priority",),
}

_INT_TEXT = re.compile(r"[+-]?\d+")


def load_workload(path: str | Path) -> List[ProcessSpec]:
    """
    Load a workload from a JSON or CSV file into a list of ProcessSpec objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in (".json", ".csv"):
        raise InvalidInputError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    try:
        processes = _load_json(path) if suffix == ".json" else _load_csv(path)
    except json.JSONDecodeError as exc:
        raise InvalidInputError(f"Malformed JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise InvalidInputError(f"Cannot read workload {path}: {exc.strerror or exc}") from exc

    logger.info("loaded %d processes from %s", len(processes), path)
    return processes


def save_workload(path: str | Path, processes: Iterable[ProcessSpec]) -> None:
    path = Path(path)
    suffix = path.suffix.lower()
    rows = [
        {"name": p.name, "arrival": p.arrival, "burst": p.burst, "priority": p.priority}
        for p in processes
    ]

    if suffix == ".json":
        path.write_text(json.dumps(rows, indent=2) + "\n", encoding="utf-8")
    elif suffix == ".csv":
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=FIELDS)
            writer.writeheader()
            writer.writerows(rows)
    else:
        raise InvalidInputError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    logger.info("saved %d processes to %s", len(rows), path)


def _load_json(path: Path) -> List[ProcessSpec]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise InvalidInputError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[ProcessSpec]:
    processes: List[ProcessSpec] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row, from_text=True))
    return processes


def _lookup(mapping, field_name: str):
    for key in _ALIASES[field_name]:
        if key in mapping:
            return mapping[key]
    raise KeyError(field_name)


def _as_int(value, from_text: bool = False) -> int:
    """
    Strict integer conversion. JSON values must be whole numbers; CSV cells
    (``from_text``) must be integer text.
    """
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if from_text and isinstance(value, str) and _INT_TEXT.fullmatch(value.strip()):
        return int(value.strip())
    raise ValueError(f"expected an integer, got {value!r}")


def _process_from_mapping(mapping, from_text: bool = False) -> ProcessSpec:
    try:
        name = str(_lookup(mapping, "name"))
        arrival = _as_int(_lookup(mapping, "arrival"), from_text)
        burst = _as_int(_lookup(mapping, "burst"), from_text)
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidInputError(f"Invalid process entry: {mapping!r}") from exc

    try:
        priority_val = _lookup(mapping, "priority")
    except KeyError:
        priority_val = None
    try:
        priority = _as_int(priority_val, from_text) if priority_val not in (None, "") else 0
    except ValueError as exc:
        raise InvalidInputError(f"Invalid priority in entry: {mapping!r}") from exc

    return ProcessSpec(name=name, arrival=arrival, burst=burst, priority=priority)
