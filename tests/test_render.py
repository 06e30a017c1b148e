import pytest

from double_pendulum.config import SimulationConfig
from double_pendulum.mapping import pendulum_geometry
from double_pendulum.physics import PendulumState
from double_pendulum.render import FrameBuffer, decimate, pendulum_figure, phase_figure


def test_pendulum_figure_draws_rods_and_bobs(config):
    s = PendulumState(phi1=0.0, phi2=0.0, mass1=8.0, mass2=12.0)
    fig = pendulum_figure(pendulum_geometry(s, config.origin), config)

    assert len(fig.data) == 2
    assert list(fig.data[0].x) == [350.0, 350.0]
    assert list(fig.data[0].y) == [60.0, 210.0]
    assert list(fig.data[1].y) == [210.0, 360.0]

    shapes = fig.layout.shapes
    assert len(shapes) == 2
    assert shapes[0].x1 - shapes[0].x0 == 16.0
    assert shapes[1].y1 - shapes[1].y0 == 24.0
    # canvas convention: y grows downwards
    assert tuple(fig.layout.yaxis.range) == (config.canvas_height, 0)


def test_empty_pendulum_figure():
    fig = pendulum_figure(None)
    assert len(fig.data) == 0


def test_phase_figure(config):
    trace = [(10.0, 20.0), (11.0, 22.0), (13.0, 21.0)]
    fig = phase_figure(trace, config)
    assert len(fig.data) == 1
    assert list(fig.data[0].x) == [10.0, 11.0, 13.0]
    assert list(fig.data[0].y) == [20.0, 22.0, 21.0]
    assert [a.text for a in fig.layout.annotations] == ["φ₁", "φ₂"]


def test_phase_figure_sized_to_graph():
    config = SimulationConfig(graph_width=300, graph_height=200)
    fig = phase_figure([], config)
    assert len(fig.data) == 0
    assert (fig.layout.width, fig.layout.height) == (300, 200)


def test_frame_buffer_tracks_latest():
    buf = FrameBuffer()
    assert buf.latest().geometry is None

    geo = pendulum_geometry(PendulumState(phi1=0.2, phi2=0.4))
    buf.draw_pendulum(geo)
    buf.begin_trace((1.0, 1.0))
    buf.extend_trace((2.0, 2.0))
    frame = buf.latest()
    assert frame.geometry == geo
    assert frame.trace == [(1.0, 1.0), (2.0, 2.0)]

    buf.begin_trace((5.0, 5.0))
    assert buf.latest().trace == [(5.0, 5.0)]
    assert buf.latest().version > frame.version


def test_frame_is_a_snapshot():
    buf = FrameBuffer()
    buf.begin_trace((0.0, 0.0))
    frame = buf.latest()
    buf.extend_trace((1.0, 1.0))
    assert frame.trace == [(0.0, 0.0)]


def test_decimate_short_trace_untouched():
    pts = [(float(i), 0.0) for i in range(10)]
    assert decimate(pts, 10) == pts
    assert decimate(pts, None) == pts


@pytest.mark.parametrize("n,limit", [(11, 10), (100, 10), (1001, 10), (40000, 4000), (12345, 7)])
def test_decimate_bounds_and_endpoints(n, limit):
    pts = [(float(i), float(-i)) for i in range(n)]
    out = decimate(pts, limit)
    assert len(out) <= limit
    assert out[0] == pts[0]
    assert out[-1] == pts[-1]
    xs = [p[0] for p in out]
    assert xs == sorted(set(xs))


def test_latest_thins_long_trace_but_keeps_buffer():
    buf = FrameBuffer()
    buf.begin_trace((0.0, 0.0))
    for i in range(1, 20000):
        buf.extend_trace((float(i), 0.0))
    thin = buf.latest(500)
    assert len(thin.trace) <= 500
    assert thin.trace[-1] == (19999.0, 0.0)
    assert len(buf.latest().trace) == 20000
