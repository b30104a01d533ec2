from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Iterable, List, Optional, Sequence

from .errors import UnknownAlgorithmError
from .metrics import compute_metrics
from .models import IDLE, ProcessResult, ProcessSpec, SimulationOptions, SimulationResult
from .validate import validate_processes, validate_quantum

logger = logging.getLogger(__name__)


@dataclass
class _WorkingProcess:
    """
    Private per-run copy of a ProcessSpec carrying the mutable scheduling state.
    """

    index: int
    spec: ProcessSpec
    remaining: int
    start: Optional[int] = None

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def arrival(self) -> int:
        return self.spec.arrival

    def finalize(self, completion: int) -> ProcessResult:
        if self.start is None:
            raise RuntimeError(f"process '{self.spec.name}' finished without being dispatched")
        turnaround = completion - self.spec.arrival
        return ProcessResult(
            name=self.spec.name,
            arrival=self.spec.arrival,
            burst=self.spec.burst,
            priority=self.spec.priority,
            start=self.start,
            completion=completion,
            turnaround=turnaround,
            waiting=turnaround - self.spec.burst,
            response=self.start - self.spec.arrival,
        )


def _working_copies(processes: Sequence[ProcessSpec]) -> List[_WorkingProcess]:
    return [_WorkingProcess(index=i, spec=p, remaining=p.burst) for i, p in enumerate(processes)]


class ReadyQueue:
    """
    FIFO of working records; membership is tracked by record index.
    """

    def __init__(self) -> None:
        self._queue: Deque[_WorkingProcess] = deque()
        self._members: set[int] = set()

    def __len__(self) -> int:
        return len(self._queue)

    def __contains__(self, proc: _WorkingProcess) -> bool:
        return proc.index in self._members

    def push(self, proc: _WorkingProcess) -> None:
        if proc.index in self._members:
            return
        self._queue.append(proc)
        self._members.add(proc.index)

    def pop(self) -> _WorkingProcess:
        proc = self._queue.popleft()
        self._members.discard(proc.index)
        return proc

    def names(self) -> List[str]:
        return [p.name for p in self._queue]


def _build_result(
    key: str,
    processes: List[ProcessResult],
    timeline: List[str],
    quantum: Optional[int] = None,
) -> SimulationResult:
    result = SimulationResult(
        algorithm=key,
        display_name=DISPLAY_NAMES[key],
        preemptive=key in PREEMPTIVE,
        quantum=quantum,
        processes=processes,
        timeline=timeline,
    )
    result.metrics = compute_metrics(processes)
    return result


# Non-preemptive batch schedulers ---------------------------------------------


def _run_to_completion(
    processes: Sequence[ProcessSpec],
    pick: Callable[[List[_WorkingProcess], int], _WorkingProcess],
) -> tuple[List[ProcessResult], List[str]]:
    pending = _working_copies(processes)

    time = 0
    timeline: List[str] = []
    results: List[ProcessResult] = []

    while pending:
        p = pick(pending, time)

        start = max(time, p.arrival)
        if start > time:
            timeline.extend([IDLE] * (start - time))
        p.start = start

        completion = start + p.spec.burst
        timeline.extend([p.name] * p.spec.burst)
        p.remaining = 0

        logger.debug("t=%d: %s runs until %d", start, p.name, completion)
        results.append(p.finalize(completion))

        pending = [q for q in pending if q.index != p.index]
        time = completion

    return results, timeline


def _pick_earliest(pending: List[_WorkingProcess], time: int) -> _WorkingProcess:
    return min(pending, key=lambda p: (p.arrival, p.index))


def _shortest_key_picker(key: Callable[[_WorkingProcess], int]):
    """
    Pick the arrived process with the smallest key; with nothing arrived yet,
    jump to the earliest arrival.
    """

    def pick(pending: List[_WorkingProcess], time: int) -> _WorkingProcess:
        ready = [p for p in pending if p.arrival <= time]
        if not ready:
            return _pick_earliest(pending, time)
        return min(ready, key=lambda p: (key(p), p.arrival, p.index))

    return pick


def schedule_fcfs(processes: Sequence[ProcessSpec], quantum: Optional[int] = None) -> SimulationResult:
    """
    First-Come First-Serve (non-preemptive).

    Processes run in order of arrival; equal arrivals keep their input order.
    """
    results, timeline = _run_to_completion(processes, _pick_earliest)
    return _build_result("FCFS", results, timeline)


def schedule_sjf(processes: Sequence[ProcessSpec], quantum: Optional[int] = None) -> SimulationResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    scheduled, choose the one with the smallest burst time (ties: earlier
    arrival, then input order).
    """
    results, timeline = _run_to_completion(processes, _shortest_key_picker(lambda p: p.spec.burst))
    return _build_result("SJF", results, timeline)


def schedule_priority_np(processes: Sequence[ProcessSpec], quantum: Optional[int] = None) -> SimulationResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority.
    """
    results, timeline = _run_to_completion(processes, _shortest_key_picker(lambda p: p.spec.priority))
    return _build_result("PriorityNP", results, timeline)


# Preemptive unit-step schedulers ---------------------------------------------


def _run_unit_steps(
    processes: Sequence[ProcessSpec],
    key: Callable[[_WorkingProcess], int],
) -> tuple[List[ProcessResult], List[str]]:
    procs = _working_copies(processes)

    time = 0
    timeline: List[str] = []
    results: List[ProcessResult] = []
    previous: Optional[_WorkingProcess] = None

    while any(p.remaining > 0 for p in procs):
        ready = [p for p in procs if p.arrival <= time and p.remaining > 0]

        if not ready:
            timeline.append(IDLE)
            previous = None
            time += 1
            continue

        current = min(ready, key=lambda p: (key(p), p.arrival, p.index))
        if current.start is None:
            current.start = time
        if previous is not None and previous.index != current.index and previous.remaining > 0:
            logger.debug("t=%d: %s preempts %s", time, current.name, previous.name)

        current.remaining -= 1
        timeline.append(current.name)
        previous = current

        if current.remaining == 0:
            logger.debug("t=%d: %s completes", time + 1, current.name)
            results.append(current.finalize(time + 1))

        time += 1

    return results, timeline


def schedule_srtf(processes: Sequence[ProcessSpec], quantum: Optional[int] = None) -> SimulationResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    Re-evaluated every time unit, so a newly arrived shorter job displaces the
    running one at the next unit boundary.
    """
    results, timeline = _run_unit_steps(processes, lambda p: p.remaining)
    return _build_result("SRTF", results, timeline)


def schedule_priority_p(processes: Sequence[ProcessSpec], quantum: Optional[int] = None) -> SimulationResult:
    """
    Priority scheduling (preemptive). Lower value wins.
    """
    results, timeline = _run_unit_steps(processes, lambda p: p.spec.priority)
    return _build_result("PriorityP", results, timeline)


# Round Robin -----------------------------------------------------------------


def schedule_rr(processes: Sequence[ProcessSpec], quantum: Optional[int] = None) -> SimulationResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while a slice runs (or exactly when it ends) are
    queued ahead of the process whose slice just expired.
    """
    quantum = validate_quantum(quantum)
    procs = _working_copies(processes)

    time = 0
    timeline: List[str] = []
    results: List[ProcessResult] = []
    ready = ReadyQueue()

    def admit_arrivals(current_time: int, running: Optional[_WorkingProcess] = None) -> None:
        for p in sorted(procs, key=lambda q: (q.arrival, q.index)):
            if running is not None and p.index == running.index:
                continue
            if p.arrival <= current_time and p.remaining > 0 and p not in ready:
                ready.push(p)

    while any(p.remaining > 0 for p in procs):
        admit_arrivals(time)

        if not ready:
            timeline.append(IDLE)
            time += 1
            continue

        current = ready.pop()
        if current.start is None:
            current.start = time

        run_time = min(quantum, current.remaining)
        timeline.extend([current.name] * run_time)
        time += run_time
        current.remaining -= run_time

        admit_arrivals(time, running=current)

        if current.remaining > 0:
            ready.push(current)
            logger.debug("t=%d: %s requeued, queue=%s", time, current.name, ready.names())
        else:
            logger.debug("t=%d: %s completes", time, current.name)
            results.append(current.finalize(time))

    return _build_result("RR", results, timeline, quantum=quantum)


ALGORITHMS: Dict[str, Callable[..., SimulationResult]] = {
    "FCFS": schedule_fcfs,
    "SJF": schedule_sjf,
    "SRTF": schedule_srtf,
    "RR": schedule_rr,
    "PriorityNP": schedule_priority_np,
    "PriorityP": schedule_priority_p,
}

DISPLAY_NAMES = {
    "FCFS": "First Come First Serve",
    "SJF": "Shortest Job First",
    "SRTF": "Shortest Remaining Time First",
    "RR": "Round Robin",
    "PriorityNP": "Priority (non-preemptive)",
    "PriorityP": "Priority (preemptive)",
}

PREEMPTIVE = {"SRTF", "RR", "PriorityP"}

_ALIASES = {
    "priority-np": "PriorityNP",
    "priority_np": "PriorityNP",
    "priority": "PriorityNP",
    "priority-p": "PriorityP",
    "priority_p": "PriorityP",
    "round-robin": "RR",
}


def resolve_algorithm(name: str) -> str:
    """
    Map a user-supplied algorithm name (any case, CLI aliases) to its registry key.
    """
    lowered = name.strip().lower()
    for key in ALGORITHMS:
        if key.lower() == lowered:
            return key
    if lowered in _ALIASES:
        return _ALIASES[lowered]
    raise UnknownAlgorithmError(
        f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})"
    )


def run_simulation(
    algorithm: str,
    processes: Iterable[ProcessSpec],
    options: Optional[SimulationOptions] = None,
    *,
    quantum: Optional[int] = None,
) -> SimulationResult:
    """
    Validate the inputs and dispatch to the requested algorithm.

    The quantum is only consulted for Round Robin; it may come from
    ``options`` or the ``quantum`` keyword, the keyword taking precedence.
    """
    key = resolve_algorithm(algorithm)
    specs = tuple(processes)
    validate_processes(specs)

    if quantum is None and options is not None:
        quantum = options.quantum

    if key == "RR":
        validate_quantum(quantum)
    else:
        quantum = None

    logger.debug("running %s on %d processes (quantum=%s)", key, len(specs), quantum)
    return ALGORITHMS[key](specs, quantum=quantum)
