from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Sequence

from .config import DEFAULT_CONFIG, SimulationConfig
from .errors import EmptyWorkloadError, UnsortedWorkloadError
from .gantt import GanttRecorder
from .metrics import build_result
from .models import Process, ScheduleResult, ScheduleRow

logger = logging.getLogger(__name__)

FCFS_TITLE = "First-come, first-serve"
SJF_TITLE = "Shortest-job-first"
PRIORITY_TITLE = "Priority"
RR_TITLE = "Round-robin"


def _require_processes(processes: Sequence[Process], title: str) -> None:
    if not processes:
        raise EmptyWorkloadError(title)


def _is_arrival_sorted(processes: Sequence[Process]) -> bool:
    return all(a.arrival_time <= b.arrival_time for a, b in zip(processes, processes[1:]))


def schedule_fcfs(processes: Sequence[Process], config: Optional[SimulationConfig] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive).

    Processes run in the order given; the caller is responsible for
    presenting them sorted by arrival time. Out-of-order input is logged
    and scheduled as given, or rejected when ``config.strict_order`` is set.
    """
    config = config or DEFAULT_CONFIG
    _require_processes(processes, FCFS_TITLE)

    if not _is_arrival_sorted(processes):
        if config.strict_order:
            raise UnsortedWorkloadError(f"{FCFS_TITLE}: processes must be sorted by arrival time")
        logger.warning("%s: processes are not sorted by arrival time; scheduling in input order", FCFS_TITLE)

    recorder = GanttRecorder(config.gantt_mode)
    rows: List[ScheduleRow] = []
    service_time = 0

    for p in processes:
        wait = max(0, service_time - p.arrival_time)
        start = p.arrival_time + wait
        service_time = start + p.burst_time

        recorder.record(p.pid, start, service_time)
        rows.append(ScheduleRow.from_wait(p, wait))

    return build_result(FCFS_TITLE, rows, recorder.slices)


def schedule_srtf(processes: Sequence[Process], config: Optional[SimulationConfig] = None) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    Time advances one unit at a time. Each unit goes to the arrived,
    unfinished process with the least remaining burst; on a tie the one
    listed first in the input wins. Idle stretches jump straight to the
    next arrival. Rows are reported in input order.
    """
    config = config or DEFAULT_CONFIG
    _require_processes(processes, SJF_TITLE)

    n = len(processes)
    remaining = [p.burst_time for p in processes]
    rows: List[Optional[ScheduleRow]] = [None] * n
    recorder = GanttRecorder(config.gantt_mode)

    time = 0
    done = 0

    while done < n:
        shortest: Optional[int] = None
        for i, p in enumerate(processes):
            if remaining[i] == 0 or p.arrival_time > time:
                continue
            if shortest is None or remaining[i] < remaining[shortest]:
                shortest = i

        if shortest is None:
            # CPU idle until the next pending arrival.
            time = min(p.arrival_time for i, p in enumerate(processes) if remaining[i] > 0)
            logger.debug("%s: idle until t=%d", SJF_TITLE, time)
            continue

        p = processes[shortest]
        recorder.segment(p.pid, time, time + 1)
        time += 1
        remaining[shortest] -= 1

        if remaining[shortest] == 0:
            done += 1
            wait = time - p.burst_time - p.arrival_time
            rows[shortest] = ScheduleRow.from_wait(p, wait)
            recorder.completion(p.pid, time, p.burst_time)
            logger.debug("%s: process %s completed at t=%d (wait %d)", SJF_TITLE, p.pid, time, wait)

    return build_result(SJF_TITLE, [row for row in rows if row is not None], recorder.slices)


def schedule_priority(processes: Sequence[Process], config: Optional[SimulationConfig] = None) -> ScheduleResult:
    """
    "Priority" scheduling, non-preemptive.

    Despite the name the priority field is not consulted: processes are
    ordered by arrival time, then by burst time, and run to completion in
    that order.
    """
    config = config or DEFAULT_CONFIG
    _require_processes(processes, PRIORITY_TITLE)

    ordered = sorted(processes, key=lambda p: (p.arrival_time, p.burst_time))

    recorder = GanttRecorder(config.gantt_mode)
    rows: List[ScheduleRow] = []
    time = 0

    for p in ordered:
        if p.arrival_time > time:
            logger.debug("%s: idle from t=%d to t=%d", PRIORITY_TITLE, time, p.arrival_time)
            wait = 0
            time = p.arrival_time
        else:
            wait = time - p.arrival_time

        time += p.burst_time
        recorder.record(p.pid, time - p.burst_time, time)
        rows.append(ScheduleRow.from_wait(p, wait))

    return build_result(PRIORITY_TITLE, rows, recorder.slices)


def schedule_rr(processes: Sequence[Process], config: Optional[SimulationConfig] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes are admitted to the ready queue in ascending arrival order
    (ties keep their input order). A preempted process goes to the back of
    the queue behind any process that arrived while it was running.
    """
    config = config or DEFAULT_CONFIG
    _require_processes(processes, RR_TITLE)
    quantum = config.quantum

    ordered = sorted(processes, key=lambda p: p.arrival_time)
    n = len(ordered)
    remaining = [p.burst_time for p in ordered]
    completion: Dict[int, int] = {}
    recorder = GanttRecorder(config.gantt_mode)

    ready: Deque[int] = deque()
    admitted = 0
    time = 0

    def admit_arrivals(current_time: int) -> None:
        # ``admitted`` is the index of the next process to admit; it only
        # moves forward, so each process enters the queue exactly once.
        nonlocal admitted
        while admitted < n and ordered[admitted].arrival_time <= current_time:
            ready.append(admitted)
            admitted += 1

    admit_arrivals(time)

    while ready or admitted < n:
        if not ready:
            time = ordered[admitted].arrival_time
            logger.debug("%s: idle until t=%d", RR_TITLE, time)
            admit_arrivals(time)
            continue

        idx = ready.popleft()
        p = ordered[idx]
        run_time = min(quantum, remaining[idx])

        recorder.segment(p.pid, time, time + run_time)
        time += run_time
        remaining[idx] -= run_time

        admit_arrivals(time)

        if remaining[idx] > 0:
            logger.debug("%s: process %s preempted at t=%d (%d left)", RR_TITLE, p.pid, time, remaining[idx])
            ready.append(idx)
        else:
            completion[idx] = time
            recorder.completion(p.pid, time, p.burst_time)
            logger.debug("%s: process %s completed at t=%d", RR_TITLE, p.pid, time)

    rows = [
        ScheduleRow.from_wait(p, completion[idx] - p.burst_time - p.arrival_time)
        for idx, p in enumerate(ordered)
    ]
    return build_result(RR_TITLE, rows, recorder.slices, quantum=quantum)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_srtf,
    "srtf": schedule_srtf,
    "priority": schedule_priority,
    "rr": schedule_rr,
}

TITLES = {
    "fcfs": FCFS_TITLE,
    "sjf": SJF_TITLE,
    "srtf": SJF_TITLE,
    "priority": PRIORITY_TITLE,
    "rr": RR_TITLE,
}

# Order in which "schedsim run" prints the schedulers by default.
DEFAULT_ALGORITHMS = ("fcfs", "sjf", "priority", "rr")


def run_algorithm(
    name: str,
    processes: Sequence[Process],
    config: Optional[SimulationConfig] = None,
) -> ScheduleResult:
    """
    Dispatch to the requested algorithm.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (use one of: {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(processes, config=config)


def run_all(
    processes: Sequence[Process],
    config: Optional[SimulationConfig] = None,
    names: Sequence[str] = DEFAULT_ALGORITHMS,
) -> List[ScheduleResult]:
    return [run_algorithm(name, processes, config=config) for name in names]
