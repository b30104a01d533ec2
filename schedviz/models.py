from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

IDLE = "Idle"


@dataclass(frozen=True)
class ProcessSpec:
    name: str
    arrival: int
    burst: int
    priority: int = 0


@dataclass
class ProcessResult:
    name: str
    arrival: int
    burst: int
    priority: int
    start: int
    completion: int
    turnaround: int
    waiting: int
    response: int


@dataclass(frozen=True)
class TimelineBlock:
    """
    One contiguous run of identical timeline entries, covering [start, end).
    """

    label: str
    start: int
    end: int

    @property
    def is_idle(self) -> bool:
        return self.label == IDLE

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass
class Metrics:
    avg_waiting: float
    avg_turnaround: float
    avg_response: float
    cpu_utilization: float
    makespan: int
    busy_time: int
    throughput: float


@dataclass
class SimulationOptions:
    quantum: Optional[int] = None


@dataclass
class SimulationResult:
    algorithm: str
    display_name: str
    preemptive: bool
    quantum: Optional[int] = None
    processes: List[ProcessResult] = field(default_factory=list)
    timeline: List[str] = field(default_factory=list)
    metrics: Optional[Metrics] = None

    def blocks(self) -> List[TimelineBlock]:
        from .timeline import collapse_timeline

        return collapse_timeline(self.timeline)
