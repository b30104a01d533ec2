from __future__ import annotations

import logging
import random
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import InvalidInputError
from .models import ProcessSpec

logger = logging.getLogger(__name__)

SAMPLE_ARRIVAL_RANGE = (0, 4)
SAMPLE_BURST_RANGE = (1, 8)
SAMPLE_PRIORITY_RANGE = (1, 5)


class ProcessSet:
    """
    Caller-owned, editable collection of processes.

    Simulations receive a snapshot from ``specs()``; nothing the engine does
    changes the set.
    """

    def __init__(self, processes: Iterable[ProcessSpec] = ()) -> None:
        self._processes: List[ProcessSpec] = list(processes)

    def __len__(self) -> int:
        return len(self._processes)

    def __iter__(self) -> Iterator[ProcessSpec]:
        return iter(self._processes)

    def __getitem__(self, index: int) -> ProcessSpec:
        return self._processes[index]

    def add(self, name: str, arrival: int, burst: int, priority: int = 0) -> ProcessSpec:
        spec = ProcessSpec(name=name, arrival=arrival, burst=burst, priority=priority)
        self._processes.append(spec)
        return spec

    def remove(self, index: int) -> ProcessSpec:
        try:
            return self._processes.pop(index)
        except IndexError as exc:
            raise InvalidInputError(
                f"no process at index {index} (set has {len(self._processes)})"
            ) from exc

    def clear(self) -> None:
        self._processes.clear()

    def specs(self) -> Tuple[ProcessSpec, ...]:
        return tuple(self._processes)

    @classmethod
    def sample(cls, count: int = 6, seed: Optional[int] = None) -> "ProcessSet":
        """
        Random demo workload named P1..Pn.
        """
        if count <= 0:
            raise InvalidInputError(f"sample size must be positive (got {count})")

        rng = random.Random(seed)
        result = cls()
        for i in range(1, count + 1):
            result.add(
                f"P{i}",
                arrival=rng.randint(*SAMPLE_ARRIVAL_RANGE),
                burst=rng.randint(*SAMPLE_BURST_RANGE),
                priority=rng.randint(*SAMPLE_PRIORITY_RANGE),
            )
        logger.debug("generated %d sample processes (seed=%s)", count, seed)
        return result
