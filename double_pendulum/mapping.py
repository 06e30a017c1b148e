"""
Coordinate transforms from angular state to drawable values.

Two independent mappings:
- pendulum geometry in canvas pixels (anchor, bobs, rods)
- phase-plot coordinates for the (phi1, phi2) trajectory
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from double_pendulum.config import DEFAULT_CONFIG, SimulationConfig
from double_pendulum.physics import PendulumState

Point = Tuple[float, float]


@dataclass(frozen=True)
class Line:
    x0: float
    y0: float
    x: float
    y: float


@dataclass(frozen=True)
class Circle:
    """A bob; its radius is the mass value itself."""

    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class Geometry:
    anchor: Point
    line1: Line
    line2: Line
    circle1: Circle
    circle2: Circle

    @property
    def bob1(self) -> Point:
        return (self.circle1.x, self.circle1.y)

    @property
    def bob2(self) -> Point:
        return (self.circle2.x, self.circle2.y)


def polar_to_xy(origin: Point, angle: float, length: float) -> Point:
    """Endpoint of a rod of ``length`` hanging from ``origin`` at ``angle``."""
    ox, oy = origin
    return ox + length * math.sin(angle), oy + length * math.cos(angle)


def pendulum_geometry(state: PendulumState, origin: Point = DEFAULT_CONFIG.origin) -> Geometry:
    x1, y1 = polar_to_xy(origin, state.phi1, state.length1)
    x2, y2 = polar_to_xy((x1, y1), state.phi2, state.length2)
    ox, oy = origin
    return Geometry(
        anchor=(ox, oy),
        line1=Line(ox, oy, x1, y1),
        line2=Line(x1, y1, x2, y2),
        circle1=Circle(x1, y1, state.mass1),
        circle2=Circle(x2, y2, state.mass2),
    )


def scale_phi(phi: float, axis_length: float, scaling: float = DEFAULT_CONFIG.phase_scaling) -> float:
    """Map an angle onto a plot axis of ``axis_length``.

    Linear and unclamped: ``-scaling*pi`` maps to 0 and ``scaling*pi`` maps to
    ``axis_length``; angles outside that range land off the plot.
    """
    min_phi = -math.pi * scaling
    max_phi = math.pi * scaling
    return axis_length * (phi - min_phi) / (max_phi * 2)


def phase_point(state: PendulumState, config: SimulationConfig = DEFAULT_CONFIG) -> Point:
    return (
        scale_phi(state.phi1, config.graph_width, config.phase_scaling),
        scale_phi(state.phi2, config.graph_height, config.phase_scaling),
    )
