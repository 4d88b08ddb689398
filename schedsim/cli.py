from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, DEFAULT_ALGORITHMS, TITLES, run_algorithm
from .config import DEFAULT_GANTT_MODE, DEFAULT_QUANTUM, GANTT_MODES, SimulationConfig
from .errors import SchedulerError
from .gantt import build_rich_gantt, render_gantt
from .metrics import cpu_busy_time
from .models import Process, ScheduleResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, Priority, RR).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every scheduling decision.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run scheduling algorithms on a workload file.")
    _add_common_arguments(run_parser)
    run_parser.add_argument(
        "--gantt",
        choices=GANTT_MODES,
        default=DEFAULT_GANTT_MODE,
        help="Gantt detail for preemptive algorithms: one slice per completion (coarse) "
        "or one per run segment (exact). Default: %(default)s.",
    )
    run_parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject FCFS input that is not sorted by arrival time.",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print the Gantt strip as plain text.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    _add_common_arguments(compare_parser)

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "workload",
        help="Path to a CSV (id,burst,arrival[,priority]) or JSON workload file.",
    )
    parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=sorted(ALGORITHMS),
        default=list(DEFAULT_ALGORITHMS),
        help="Algorithms to run: "
        + ", ".join(f"{name} ({title})" for name, title in TITLES.items())
        + " (default: %(default)s).",
    )
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help="Time quantum for round-robin (default: %(default)s).",
    )


def _configure_logging(verbose: bool) -> None:
    # Handlers live on the package logger; each call replaces the previous one.
    package_logger = logging.getLogger("schedsim")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _print_title(console: Console, title: str) -> None:
    rule = "-" * (len(title) * 2)
    console.print(rule, markup=False)
    console.print(" " * (len(title) // 2), title, markup=False)
    console.print(rule, markup=False)


def _print_result(console: Console, result: ScheduleResult, plain: bool = False) -> None:
    _print_title(console, result.algorithm)
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    if plain:
        console.print(render_gantt(result.gantt), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.gantt)
        console.print(panel)
        if time_marks:
            console.print(time_marks, highlight=False)

    console.print()

    headers = ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]
    footers = [
        "",
        "",
        "",
        "",
        f"Average\n{result.average_wait:.2f}",
        f"Average\n{result.average_turnaround:.2f}",
        f"Throughput\n{result.throughput:.2f}/t",
    ]

    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=True)
    for header, footer in zip(headers, footers):
        table.add_column(header, footer=footer, justify="right")

    for row in result.rows:
        table.add_row(
            str(row.pid),
            str(row.priority),
            str(row.burst_time),
            str(row.arrival_time),
            str(row.wait),
            str(row.turnaround),
            str(row.completion),
        )

    console.print(table)
    console.print()


def _print_comparison(
    console: Console,
    workload: Path,
    processes: Sequence[Process],
    algorithms: Sequence[str],
    config: SimulationConfig,
) -> None:
    summary_table = Table(title=f"Algorithm comparison: {escape(str(workload))}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Throughput", justify="right")
    summary_table.add_column("Makespan", justify="right")
    summary_table.add_column("CPU busy", justify="right")

    for alg in algorithms:
        result = run_algorithm(alg, processes, config=config)
        summary_table.add_row(
            TITLES[alg],
            "" if result.quantum is None else str(result.quantum),
            f"{result.average_wait:.2f}",
            f"{result.average_turnaround:.2f}",
            f"{result.throughput:.2f}",
            str(result.last_completion),
            str(cpu_busy_time(result.gantt)),
        )

    console.print(summary_table)


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    console = Console()

    try:
        config = SimulationConfig(
            quantum=args.quantum,
            gantt_mode=getattr(args, "gantt", DEFAULT_GANTT_MODE),
            strict_order=getattr(args, "strict", False),
        )
    except ValueError as exc:
        parser.error(str(exc))

    workload_path = Path(args.workload)
    try:
        processes = load_workload(workload_path)

        if args.command == "run":
            for alg in args.algorithms:
                result = run_algorithm(alg, processes, config=config)
                _print_result(console, result, plain=args.plain)
            return 0

        if args.command == "compare":
            _print_comparison(console, workload_path, processes, args.algorithms, config)
            return 0
    except OSError as exc:
        console.print(f"[red]Cannot read workload {workload_path}: {escape(str(exc.strerror or exc))}[/red]")
        return 1
    except SchedulerError as exc:
        logger.debug("Scheduling failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1
