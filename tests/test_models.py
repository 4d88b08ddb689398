import pytest

from schedsim.errors import InvalidProcessError
from schedsim.models import Process, ScheduleRow, TimeSlice


def test_priority_defaults_to_zero():
    assert Process(1, arrival_time=0, burst_time=2).priority == 0


@pytest.mark.parametrize("arrival, burst", [(-1, 3), (0, 0), (2, -4)])
def test_process_bounds(arrival, burst):
    with pytest.raises(InvalidProcessError):
        Process(1, arrival_time=arrival, burst_time=burst)


def test_process_is_immutable():
    p = Process(1, arrival_time=0, burst_time=2)
    with pytest.raises(AttributeError):
        p.burst_time = 5


@pytest.mark.parametrize("start, stop", [(3, 3), (5, 2), (-1, 2)])
def test_time_slice_bounds(start, stop):
    with pytest.raises(ValueError):
        TimeSlice(1, start, stop)


def test_row_from_wait():
    row = ScheduleRow.from_wait(Process(4, arrival_time=3, burst_time=5, priority=2), wait=2)
    assert (row.turnaround, row.completion, row.priority) == (7, 10, 2)
