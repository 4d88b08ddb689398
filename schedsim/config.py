from __future__ import annotations

from dataclasses import dataclass

# Round-robin time slice, in simulated time units.
DEFAULT_QUANTUM = 6

# "coarse": one slice per completed process (default).
# "exact": one slice per contiguous run segment.
GANTT_MODES = ("coarse", "exact")
DEFAULT_GANTT_MODE = "coarse"


@dataclass(frozen=True)
class SimulationConfig:
    """
    Knobs shared by the scheduling algorithms.

    Algorithms ignore the settings that do not apply to them; FCFS and
    the priority variant never preempt, so neither the quantum nor the
    Gantt mode changes their output.
    """

    quantum: int = DEFAULT_QUANTUM
    gantt_mode: str = DEFAULT_GANTT_MODE
    strict_order: bool = False

    def __post_init__(self) -> None:
        if self.quantum is None or self.quantum <= 0:
            raise ValueError(f"Round Robin requires a positive quantum, got {self.quantum!r}")
        if self.gantt_mode not in GANTT_MODES:
            raise ValueError(
                f"Unknown gantt mode {self.gantt_mode!r} (use one of: {', '.join(GANTT_MODES)})"
            )


DEFAULT_CONFIG = SimulationConfig()
