from __future__ import annotations

from typing import Iterable, List, Sequence

from .errors import EmptyWorkloadError, MetricsError
from .models import ScheduleResult, ScheduleRow, TimeSlice


def summarize_process_metrics(rows: Sequence[ScheduleRow]) -> dict:
    """
    Return the averages of the per-process metrics and the run's throughput.

    Throughput is processes completed per unit of simulated time, measured
    up to the latest completion. An empty run or one whose last completion
    is at time 0 has no finite throughput and is reported as an error.
    """
    if not rows:
        raise EmptyWorkloadError("metrics")

    last_completion = max(row.completion for row in rows)
    if last_completion <= 0:
        raise MetricsError(f"Throughput undefined: last completion time is {last_completion}")

    n = len(rows)
    return {
        "avg_waiting": sum(row.wait for row in rows) / n,
        "avg_turnaround": sum(row.turnaround for row in rows) / n,
        "throughput": n / last_completion,
    }


def build_result(
    algorithm: str,
    rows: List[ScheduleRow],
    gantt: Iterable[TimeSlice],
    quantum: int | None = None,
) -> ScheduleResult:
    summary = summarize_process_metrics(rows)
    return ScheduleResult(
        algorithm=algorithm,
        quantum=quantum,
        rows=tuple(rows),
        gantt=tuple(gantt),
        average_wait=summary["avg_waiting"],
        average_turnaround=summary["avg_turnaround"],
        throughput=summary["throughput"],
    )


def cpu_busy_time(slices: Iterable[TimeSlice]) -> int:
    return sum(slice_.duration for slice_ in slices)
