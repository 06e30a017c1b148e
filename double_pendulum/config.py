"""
Constants of the double pendulum simulation.

All values are in the pixel/second units of the drawing surface: lengths are
canvas pixels, the time step is simulation seconds and the tick interval is
wall-clock seconds.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SimulationConfig:
    """Process-wide simulation constants. Lengths never change at runtime."""

    g: float = 9.8
    time_step: float = 0.05  # integration step (simulation time)
    tick_interval: float = 0.005  # delay between ticks (wall clock)

    origin: Tuple[float, float] = (350.0, 60.0)
    length1: float = 150.0
    length2: float = 150.0

    canvas_width: int = 700
    canvas_height: int = 500
    graph_width: int = 500
    graph_height: int = 500
    phase_scaling: float = 0.8

    initial_mass1: float = 10.0
    initial_mass2: float = 10.0
    initial_phi1_deg: float = 50.0
    initial_phi2_deg: float = 65.0

    refresh_interval: float = 0.05  # UI redraw period
    max_plot_points: int = 4000  # phase trace points sent per redraw

    @property
    def phi_min(self) -> float:
        return -math.pi * self.phase_scaling

    @property
    def phi_max(self) -> float:
        return math.pi * self.phase_scaling


DEFAULT_CONFIG = SimulationConfig()
