from __future__ import annotations

from typing import Optional, Sequence

from .errors import EmptyProcessSetError, InvalidInputError, MissingParameterError
from .models import IDLE, ProcessSpec


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_processes(processes: Sequence[ProcessSpec]) -> None:
    if not processes:
        raise EmptyProcessSetError("process set is empty; add at least one process")

    seen: set[str] = set()
    for idx, p in enumerate(processes):
        if not isinstance(p.name, str) or not p.name.strip():
            raise InvalidInputError(f"process #{idx + 1} must have a non-empty name")
        if p.name == IDLE:
            raise InvalidInputError(f"process name '{IDLE}' is reserved for idle time")
        if p.name in seen:
            raise InvalidInputError(f"duplicate process name '{p.name}'")
        seen.add(p.name)

        for field_name in ("arrival", "burst", "priority"):
            value = getattr(p, field_name)
            if not _is_int(value):
                raise InvalidInputError(
                    f"process '{p.name}' {field_name} must be an integer (got {value!r})"
                )
        if p.arrival < 0:
            raise InvalidInputError(
                f"process '{p.name}' arrival must be >= 0 (got {p.arrival})"
            )
        if p.burst <= 0:
            raise InvalidInputError(
                f"process '{p.name}' burst must be > 0 (got {p.burst})"
            )


def validate_quantum(quantum: Optional[int]) -> int:
    if quantum is None:
        raise MissingParameterError("Round Robin requires a quantum (use --quantum)")
    if not _is_int(quantum) or quantum <= 0:
        raise MissingParameterError(
            f"Round Robin quantum must be a positive integer (got {quantum!r})"
        )
    return quantum
