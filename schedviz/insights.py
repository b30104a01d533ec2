from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .algorithms import resolve_algorithm


@dataclass(frozen=True)
class AlgorithmInsight:
    title: str
    description: str
    complexity: str
    use_case: str
    advantages: Tuple[str, ...]
    disadvantages: Tuple[str, ...]


INSIGHTS: Dict[str, AlgorithmInsight] = {
    "FCFS": AlgorithmInsight(
        title="First Come First Serve (FCFS)",
        description=(
            "Non-preemptive. Executes processes in order of arrival. "
            "Simple but can cause long wait times."
        ),
        complexity="O(n)",
        use_case="Simple batch systems",
        advantages=("Easy to implement", "Fair for simple tasks", "Minimal overhead"),
        disadvantages=("Long wait for big tasks", "Inefficient wait times", "Convoy effect"),
    ),
    "SJF": AlgorithmInsight(
        title="Shortest Job First (SJF)",
        description=(
            "Non-preemptive. Chooses the process with the shortest burst time. "
            "Efficient but can starve longer jobs."
        ),
        complexity="O(n log n)",
        use_case="Batch systems with predictable burst times",
        advantages=(
            "Optimal average waiting time",
            "Good for batch workloads",
            "Minimizes completion time",
        ),
        disadvantages=(
            "Starvation of long processes",
            "Requires burst time prediction",
            "Not suitable for interactive systems",
        ),
    ),
    "SRTF": AlgorithmInsight(
        title="Shortest Remaining Time First (SRTF)",
        description=(
            "Preemptive version of SJF. Always picks the process with the "
            "least remaining time."
        ),
        complexity="O(n log n)",
        use_case="Real-time systems with short tasks",
        advantages=(
            "Responsive to short processes",
            "Efficient CPU usage",
            "Minimizes turnaround time",
        ),
        disadvantages=(
            "Frequent context switches",
            "Starvation of long tasks",
            "Requires accurate burst estimates",
        ),
    ),
    "RR": AlgorithmInsight(
        title="Round Robin (RR)",
        description=(
            "Preemptive. Each process gets a fixed time slice (quantum). "
            "Fair for all, good for time-sharing systems."
        ),
        complexity="O(n*q)",
        use_case="Interactive and time-sharing systems",
        advantages=("Fair time allocation", "Responsive for short tasks", "Avoids starvation"),
        disadvantages=(
            "High context switching overhead",
            "Poor for long tasks",
            "Quantum size tuning required",
        ),
    ),
    "PriorityNP": AlgorithmInsight(
        title="Priority Scheduling (Non-Preemptive)",
        description=(
            "Executes the highest priority process first. "
            "Lower priority may wait longer."
        ),
        complexity="O(n log n)",
        use_case="Systems with static priority rules",
        advantages=("Simple priority control", "Efficient for critical tasks", "Easy to implement"),
        disadvantages=(
            "Starvation of low-priority tasks",
            "No dynamic adjustment",
            "Can be unfair without aging",
        ),
    ),
    "PriorityP": AlgorithmInsight(
        title="Priority Scheduling (Preemptive)",
        description="Interrupts the running process if a higher priority one arrives.",
        complexity="O(n log n)",
        use_case="Real-time systems with strict priority needs",
        advantages=(
            "Immediate response for high-priority tasks",
            "Dynamic task control",
            "Supports aging to reduce starvation",
        ),
        disadvantages=(
            "Complex implementation",
            "Starvation of low-priority tasks",
            "Priority inversion risk",
        ),
    ),
}


def get_insight(algorithm: str) -> AlgorithmInsight:
    return INSIGHTS[resolve_algorithm(algorithm)]
