import math

import pytest

from double_pendulum.config import SimulationConfig
from double_pendulum.physics import PendulumState


class ManualTicker:
    """Stands in for the threaded ticker; ticks only when ``fire`` is called."""

    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    @property
    def active(self):
        return self.started and not self.cancelled

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self, n=1):
        for _ in range(n):
            assert self.active
            self.callback()


class RecordingRenderer:
    def __init__(self):
        self.geometries = []
        self.traces = []

    def draw_pendulum(self, geometry):
        self.geometries.append(geometry)

    def begin_trace(self, start):
        self.traces.append([start])

    def extend_trace(self, point):
        self.traces[-1].append(point)


@pytest.fixture
def config():
    return SimulationConfig()


@pytest.fixture
def reference_state():
    """masses 10/10, lengths 150/150, 50 and 65 degrees, at rest."""
    return PendulumState(
        phi1=50 * math.pi / 180,
        phi2=65 * math.pi / 180,
        mass1=10.0,
        mass2=10.0,
        length1=150.0,
        length2=150.0,
        gravity=9.8,
    )


@pytest.fixture
def tickers():
    return []


@pytest.fixture
def ticker_factory(tickers):
    def factory(interval, callback):
        t = ManualTicker(interval, callback)
        tickers.append(t)
        return t
    return factory


@pytest.fixture
def renderer():
    return RecordingRenderer()
