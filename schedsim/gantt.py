from __future__ import annotations

from typing import Dict, List, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import DEFAULT_GANTT_MODE, GANTT_MODES
from .models import TimeSlice

CELL_WIDTH = 8


class GanttRecorder:
    """
    Collects the execution intervals of one algorithm run.

    Non-preemptive algorithms call :meth:`record` for every interval.
    Preemptive algorithms report both each run segment (:meth:`segment`)
    and each completion (:meth:`completion`); the mode decides which of
    the two ends up in the chart. In "coarse" mode a completed process
    contributes a single slice of its full burst ending at its completion
    time, which approximates rather than reproduces the interleaving.
    """

    def __init__(self, mode: str = DEFAULT_GANTT_MODE) -> None:
        if mode not in GANTT_MODES:
            raise ValueError(f"Unknown gantt mode {mode!r}")
        self.mode = mode
        self._slices: List[TimeSlice] = []

    @property
    def exact(self) -> bool:
        return self.mode == "exact"

    def record(self, pid: int, start: int, stop: int) -> None:
        # Extend the previous slice when the same process keeps the CPU.
        if self._slices:
            last = self._slices[-1]
            if last.pid == pid and last.stop == start:
                self._slices[-1] = TimeSlice(pid=pid, start=last.start, stop=stop)
                return
        self._slices.append(TimeSlice(pid=pid, start=start, stop=stop))

    def segment(self, pid: int, start: int, stop: int) -> None:
        if self.exact:
            self.record(pid, start, stop)

    def completion(self, pid: int, completion: int, burst_time: int) -> None:
        if not self.exact:
            self._slices.append(TimeSlice(pid=pid, start=completion - burst_time, stop=completion))

    @property
    def slices(self) -> List[TimeSlice]:
        return list(self._slices)


def _cell(pid: int) -> str:
    label = str(pid)
    padding = " " * ((CELL_WIDTH - len(label)) // 2)
    return f"{padding}{label}{padding}"


def _time_marks(slices: Sequence[TimeSlice]) -> str:
    marks = "\t".join(str(sl.start) for sl in slices)
    return f"{marks}\t{slices[-1].stop}"


def render_gantt(slices: Sequence[TimeSlice]) -> str:
    """
    Plain-text Gantt strip: one cell per slice, then the start time of
    every slice with the final stop time closing the strip.

    Slices are drawn in the order recorded. Coarse slices from preemptive
    algorithms follow completion order and may overlap, so their time
    marks are not guaranteed to increase (e.g. "6  4  14").
    """
    if not slices:
        return "Gantt schedule\n(no execution)"

    line = "|" + "".join(f"{_cell(sl.pid)}|" for sl in slices)
    return "\n".join(["Gantt schedule", line, _time_marks(slices)])


def build_rich_gantt(slices: Sequence[TimeSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt strip and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt schedule")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    strip = Text("|")
    for sl in slices:
        strip.append(_cell(sl.pid), style=f"bold black on {pid_color(sl.pid)}")
        strip.append("|")

    table = Table.grid(padding=(0, 0))
    table.add_row(strip)

    panel = Panel.fit(table, title="Gantt schedule")
    return panel, _time_marks(slices)
