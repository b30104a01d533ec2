from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .algorithms import ALGORITHMS, resolve_algorithm, run_simulation
from .errors import SchedulerError
from .gantt import ColorMap, build_rich_gantt, render_gantt
from .insights import INSIGHTS, AlgorithmInsight
from .logging_setup import configure_logging
from .metrics import format_metrics
from .models import IDLE, ProcessSpec, SimulationResult
from .process_set import ProcessSet
from .workload_io import load_workload, save_workload

logger = logging.getLogger(__name__)

DEFAULT_COMPARE_QUANTUM = 2
DEFAULT_STEP_DELAY = 0.3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedviz",
        description="CPU scheduling visualizer (FCFS, SJF, SRTF, RR, PriorityNP, PriorityP).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ...). Defaults to $SCHEDVIZ_LOG_LEVEL or WARNING.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help="Algorithm to use (fcfs, sjf, srtf, rr, priority-np, priority-p).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (required by rr, ignored otherwise).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print a plain-text Gantt chart instead of the colored one.",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Replay the timeline one time unit at a time before the summary.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=DEFAULT_STEP_DELAY,
        help=f"Seconds to wait between steps when --step is used (default: {DEFAULT_STEP_DELAY}).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        help="Algorithms to compare (default: all six).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_COMPARE_QUANTUM,
        help=f"Time quantum used for rr when included (default: {DEFAULT_COMPARE_QUANTUM}).",
    )

    describe_parser = subparsers.add_parser("describe", help="Show what an algorithm does and its trade-offs.")
    describe_parser.add_argument(
        "algorithm",
        nargs="?",
        default=None,
        help="Algorithm to describe (default: all).",
    )

    sample_parser = subparsers.add_parser("sample", help="Generate a random sample workload.")
    sample_parser.add_argument("--count", "-n", type=int, default=6, help="Number of processes (default: 6).")
    sample_parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible set.")
    sample_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the workload to this .json or .csv file instead of printing it.",
    )

    return parser


def _print_processes(processes: List[ProcessSpec], console: Console) -> None:
    table = Table(title="Processes", box=box.SIMPLE_HEAVY)
    for h in ("#", "Name", "Arrival", "Burst", "Priority"):
        table.add_column(h, justify="center" if h == "Name" else "right")
    for idx, p in enumerate(processes):
        table.add_row(str(idx), p.name, str(p.arrival), str(p.burst), str(p.priority))
    console.print(table)


def _print_result(result: SimulationResult, console: Console, plain: bool = False) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.display_name}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    blocks = result.blocks()
    if plain:
        console.print(render_gantt(blocks), highlight=False)
    else:
        panel, time_marks = build_rich_gantt(blocks)
        console.print(panel)
        if time_marks:
            console.print(time_marks, highlight=False)

    console.print()

    headers = [
        "Name",
        "Arrival",
        "Burst",
        "Priority",
        "Start",
        "Completion",
        "Turnaround",
        "Waiting",
        "Response",
    ]

    proc_table = Table(title="Per-process results", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h == "Name" else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            p.name,
            str(p.arrival),
            str(p.burst),
            str(p.priority),
            str(p.start),
            str(p.completion),
            str(p.turnaround),
            str(p.waiting),
            str(p.response),
        )

    console.print(proc_table)
    console.print()

    if result.metrics:
        shown = format_metrics(result.metrics)
        sys_table = Table(title="Metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg waiting", shown["avg_waiting"])
        sys_table.add_row("Avg turnaround", shown["avg_turnaround"])
        sys_table.add_row("Avg response", shown["avg_response"])
        sys_table.add_row("CPU utilization", shown["cpu_utilization"])
        sys_table.add_row("Throughput (proc/time)", shown["throughput"])
        sys_table.add_row("Makespan", str(result.metrics.makespan))

        console.print(sys_table)


def _animate_result(result: SimulationResult, console: Console, delay: float) -> None:
    """
    Replay the per-unit timeline, growing a bar for the running process.
    """
    if not result.timeline:
        console.print("[red]No execution to animate.[/red]")
        return

    console.print(f"[bold]Simulating {result.display_name}[/bold] (duration {len(result.timeline)} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    color_for = ColorMap()
    run_length = 0
    previous = None
    for t, label in enumerate(result.timeline):
        run_length = run_length + 1 if label == previous else 1
        previous = label
        if label == IDLE:
            console.print(f"t={t:2d}: [dim]idle[/dim]")
        else:
            color = color_for(label)
            console.print(f"t={t:2d}: {label} [{color}]{'█' * run_length}[/{color}]")
        time.sleep(delay)


def _print_comparison(processes: List[ProcessSpec], algorithms: List[str], quantum: int, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("CPU utilization", justify="right")

    for alg in algorithms:
        key = resolve_algorithm(alg)
        result = run_simulation(key, processes, quantum=quantum if key == "RR" else None)
        shown = format_metrics(result.metrics)
        summary_table.add_row(
            result.display_name,
            "" if result.quantum is None else str(result.quantum),
            shown["avg_waiting"],
            shown["avg_turnaround"],
            shown["avg_response"],
            shown["cpu_utilization"],
        )

    console.print(summary_table)


def _insight_panel(insight: AlgorithmInsight) -> Panel:
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Description", insight.description)
    table.add_row("Time complexity", insight.complexity)
    table.add_row("Best use case", insight.use_case)
    table.add_row("Advantages", "\n".join(f"+ {a}" for a in insight.advantages))
    table.add_row("Disadvantages", "\n".join(f"- {d}" for d in insight.disadvantages))
    return Panel(table, title=insight.title, box=box.ROUNDED)


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))
    console = console or Console()

    try:
        if args.command == "run":
            processes = load_workload(Path(args.workload))
            result = run_simulation(args.algorithm, processes, quantum=args.quantum)
            if args.step:
                try:
                    _animate_result(result, console, delay=args.step_delay)
                except KeyboardInterrupt:
                    console.print("[yellow]Animation skipped.[/yellow]")
            _print_result(result, console, plain=args.plain)
            return 0

        if args.command == "compare":
            processes = load_workload(Path(args.workload))
            _print_comparison(processes, args.algorithms, args.quantum, console)
            return 0

        if args.command == "describe":
            keys = [resolve_algorithm(args.algorithm)] if args.algorithm else list(INSIGHTS)
            for key in keys:
                console.print(_insight_panel(INSIGHTS[key]))
            return 0

        if args.command == "sample":
            sample = ProcessSet.sample(args.count, seed=args.seed)
            if args.output:
                save_workload(args.output, sample.specs())
                console.print(f"Wrote {len(sample)} processes to {args.output}")
            else:
                _print_processes(list(sample.specs()), console)
            return 0
    except SchedulerError as exc:
        logger.debug("rejected input", exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
