from __future__ import annotations

from typing import Dict, Sequence

from .errors import EmptyProcessSetError
from .models import Metrics, ProcessResult


def compute_metrics(processes: Sequence[ProcessResult]) -> Metrics:
    """
    Aggregate per-process results into averages and CPU utilization.

    Utilization is the total burst divided by the last completion time, so
    idle units before the first arrival or between jobs lower it.
    """
    if not processes:
        raise EmptyProcessSetError("cannot compute metrics for an empty process set")

    n = len(processes)
    makespan = max(p.completion for p in processes)
    busy_time = sum(p.burst for p in processes)

    return Metrics(
        avg_waiting=sum(p.waiting for p in processes) / n,
        avg_turnaround=sum(p.turnaround for p in processes) / n,
        avg_response=sum(p.response for p in processes) / n,
        cpu_utilization=100 * busy_time / makespan,
        makespan=makespan,
        busy_time=busy_time,
        throughput=n / makespan,
    )


def format_metrics(metrics: Metrics) -> Dict[str, str]:
    """
    Display strings: two decimals, utilization with a percent suffix.
    """
    return {
        "avg_waiting": f"{metrics.avg_waiting:.2f}",
        "avg_turnaround": f"{metrics.avg_turnaround:.2f}",
        "avg_response": f"{metrics.avg_response:.2f}",
        "cpu_utilization": f"{metrics.cpu_utilization:.2f}%",
        "throughput": f"{metrics.throughput:.3f}",
    }
