from __future__ import annotations


class SchedulerError(ValueError):
    """
    Base class for every error raised by the simulator.
    """


class EmptyWorkloadError(SchedulerError):
    def __init__(self, algorithm: str) -> None:
        super().__init__(f"{algorithm}: no processes to schedule")
        self.algorithm = algorithm


class UnsortedWorkloadError(SchedulerError):
    """
    Raised in strict mode when an order-sensitive algorithm receives
    processes that are not sorted by arrival time.
    """


class MetricsError(SchedulerError):
    pass


class InvalidProcessError(SchedulerError):
    pass


class WorkloadError(SchedulerError):
    pass
