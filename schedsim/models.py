from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import InvalidProcessError


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0

    def __post_init__(self) -> None:
        if self.arrival_time < 0:
            raise InvalidProcessError(f"Process {self.pid}: arrival time must be >= 0, got {self.arrival_time}")
        if self.burst_time <= 0:
            raise InvalidProcessError(f"Process {self.pid}: burst time must be > 0, got {self.burst_time}")


@dataclass(frozen=True)
class TimeSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start: int
    stop: int

    def __post_init__(self) -> None:
        if not 0 <= self.start < self.stop:
            raise ValueError(f"Invalid time slice for process {self.pid}: [{self.start}, {self.stop}]")

    @property
    def duration(self) -> int:
        return self.stop - self.start


@dataclass(frozen=True)
class ScheduleRow:
    pid: int
    priority: int
    burst_time: int
    arrival_time: int
    wait: int
    turnaround: int
    completion: int

    @classmethod
    def from_wait(cls, process: Process, wait: int) -> "ScheduleRow":
        """
        Derive turnaround and completion from a process and its waiting time.
        """
        return cls(
            pid=process.pid,
            priority=process.priority,
            burst_time=process.burst_time,
            arrival_time=process.arrival_time,
            wait=wait,
            turnaround=process.burst_time + wait,
            completion=process.arrival_time + wait + process.burst_time,
        )


@dataclass(frozen=True)
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    rows: Tuple[ScheduleRow, ...]
    gantt: Tuple[TimeSlice, ...]
    average_wait: float
    average_turnaround: float
    throughput: float

    @property
    def last_completion(self) -> int:
        return max(row.completion for row in self.rows)
