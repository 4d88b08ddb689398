"""
schedsim package.

Simulates classical CPU scheduling disciplines (FCFS, SRTF, a
non-preemptive shortest-job variant and round-robin) over a fixed set of
processes and reports per-process and aggregate metrics.
"""

from .algorithms import (
    ALGORITHMS,
    run_algorithm,
    run_all,
    schedule_fcfs,
    schedule_priority,
    schedule_rr,
    schedule_srtf,
)
from .config import SimulationConfig
from .models import Process, ScheduleResult, ScheduleRow, TimeSlice

__all__ = [
    "ALGORITHMS",
    "Process",
    "ScheduleResult",
    "ScheduleRow",
    "SimulationConfig",
    "TimeSlice",
    "run_algorithm",
    "run_all",
    "schedule_fcfs",
    "schedule_priority",
    "schedule_rr",
    "schedule_srtf",
]
