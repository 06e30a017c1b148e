"""
Rendering collaborator: receives geometry and phase points from the
simulation and turns them into plotly figures.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

import plotly.graph_objects as go

from double_pendulum.config import DEFAULT_CONFIG, SimulationConfig
from double_pendulum.mapping import Circle, Geometry, Line, Point

ROD_COLOR = "red"
BOB_COLOR = "rgba(0,0,0,1)"
TRACE_COLOR = "green"


class Renderer(Protocol):
    def draw_pendulum(self, geometry: Geometry) -> None:
        ...

    def begin_trace(self, start: Point) -> None:
        ...

    def extend_trace(self, point: Point) -> None:
        ...


@dataclass
class Frame:
    geometry: Optional[Geometry] = None
    trace: List[Point] = field(default_factory=list)
    version: int = 0


class FrameBuffer:
    """Holds the most recent pendulum geometry and the phase trace.

    Written from the tick thread and read from the UI thread.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._geometry: Optional[Geometry] = None
        self._trace: List[Point] = []
        self._version = 0

    def draw_pendulum(self, geometry: Geometry) -> None:
        with self._lock:
            self._geometry = geometry
            self._version += 1

    def begin_trace(self, start: Point) -> None:
        with self._lock:
            self._trace = [start]
            self._version += 1

    def extend_trace(self, point: Point) -> None:
        with self._lock:
            self._trace.append(point)
            self._version += 1

    def latest(self, max_points: Optional[int] = None) -> Frame:
        """Snapshot of the current frame, the trace thinned to ``max_points``."""
        with self._lock:
            return Frame(geometry=self._geometry, trace=decimate(self._trace, max_points), version=self._version)


def decimate(points: Sequence[Point], limit: Optional[int]) -> List[Point]:
    """Every n-th point so that at most ``limit`` (at least two) remain, keeping the last one.

    The full trace is left alone; this only thins what gets drawn.
    """
    n = len(points)
    if limit is None or n <= limit:
        return list(points)
    stride = -(-n // (max(limit, 2) - 1))
    sampled = list(points[::stride])
    if (n - 1) % stride:
        sampled.append(points[-1])
    return sampled


def _line_trace(line: Line) -> go.Scatter:
    return go.Scatter(
        x=[line.x0, line.x],
        y=[line.y0, line.y],
        mode="lines",
        line=dict(color=ROD_COLOR, width=5),
        hoverinfo="skip",
        showlegend=False,
    )


def _circle_shape(circle: Circle) -> dict:
    return dict(
        type="circle",
        xref="x",
        yref="y",
        x0=circle.x - circle.radius,
        y0=circle.y - circle.radius,
        x1=circle.x + circle.radius,
        y1=circle.y + circle.radius,
        fillcolor=BOB_COLOR,
        line=dict(width=0),
        layer="above",
    )


def pendulum_figure(geometry: Optional[Geometry], config: SimulationConfig = DEFAULT_CONFIG) -> go.Figure:
    """Rods and bobs in canvas pixels (y axis pointing down)."""
    fig = go.Figure()
    if geometry is not None:
        fig.add_trace(_line_trace(geometry.line1))
        fig.add_trace(_line_trace(geometry.line2))
        fig.update_layout(shapes=[_circle_shape(geometry.circle1), _circle_shape(geometry.circle2)])

    fig.update_layout(
        template="plotly_white",
        width=config.canvas_width,
        height=config.canvas_height,
        margin=dict(l=0, r=0, t=0, b=0),
        xaxis=dict(range=[0, config.canvas_width], visible=False, scaleanchor="y", scaleratio=1.0),
        yaxis=dict(range=[config.canvas_height, 0], visible=False),
        dragmode=False,
    )
    return fig


def phase_figure(trace: Sequence[Point], config: SimulationConfig = DEFAULT_CONFIG) -> go.Figure:
    """phi1 against phi2 as a connected polyline in plot coordinates."""
    w, h = config.graph_width, config.graph_height
    fig = go.Figure()
    if trace:
        xs = [p[0] for p in trace]
        ys = [p[1] for p in trace]
        fig.add_trace(go.Scattergl(x=xs, y=ys, mode="lines", line=dict(color=TRACE_COLOR, width=1), hoverinfo="skip", showlegend=False))

    fig.update_layout(
        template="plotly_white",
        width=w,
        height=h,
        margin=dict(l=0, r=0, t=0, b=0),
        xaxis=dict(range=[0, w], visible=False),
        yaxis=dict(range=[h, 0], visible=False),
        annotations=[
            dict(x=w / 2, y=h - 20, text="φ₁", showarrow=False, font=dict(size=32, family="serif"), xanchor="left"),
            dict(x=20, y=h / 2, text="φ₂", showarrow=False, font=dict(size=32, family="serif"), xanchor="left"),
        ],
        dragmode=False,
    )
    return fig

