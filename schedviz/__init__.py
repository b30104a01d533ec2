"""
schedviz package.

Deterministic CPU scheduling simulator (FCFS, SJF, SRTF, Round Robin and
both Priority variants) with a terminal front end for charts and metrics.
"""

from .algorithms import ALGORITHMS, run_simulation
from .errors import (
    EmptyProcessSetError,
    InvalidInputError,
    MissingParameterError,
    SchedulerError,
    UnknownAlgorithmError,
)
from .models import IDLE, ProcessResult, ProcessSpec, SimulationOptions, SimulationResult, TimelineBlock
from .process_set import ProcessSet
from .timeline import collapse_timeline

simulate = run_simulation

__all__ = [
    "ALGORITHMS",
    "IDLE",
    "EmptyProcessSetError",
    "InvalidInputError",
    "MissingParameterError",
    "ProcessResult",
    "ProcessSet",
    "ProcessSpec",
    "SchedulerError",
    "SimulationOptions",
    "SimulationResult",
    "TimelineBlock",
    "UnknownAlgorithmError",
    "collapse_timeline",
    "run_simulation",
    "simulate",
]
