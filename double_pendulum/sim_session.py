from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from double_pendulum.config import DEFAULT_CONFIG, SimulationConfig
from double_pendulum.mapping import Point, pendulum_geometry, phase_point
from double_pendulum.physics import PendulumState, semi_implicit_euler_step
from double_pendulum.render import Renderer
from double_pendulum.scheduler import Ticker

logger = logging.getLogger(__name__)

TickerFactory = Callable[[float, Callable[[], None]], Ticker]


class InvalidParameterError(ValueError):
    pass


@dataclass(frozen=True)
class Parameters:
    """Masses and initial angles (radians) for one run."""

    mass1: float
    mass2: float
    phi1: float
    phi2: float


def read_parameters(mass1, mass2, phi1_deg, phi2_deg) -> Parameters:
    """Parse raw form values (angles in degrees) into run parameters.

    Raises InvalidParameterError for non-numeric input or non-positive masses.
    """
    try:
        m1 = float(mass1)
        m2 = float(mass2)
        p1 = float(phi1_deg)
        p2 = float(phi2_deg)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"not a number: {exc}") from exc

    for name, value in (("mass1", m1), ("mass2", m2), ("phi1", p1), ("phi2", p2)):
        if not math.isfinite(value):
            raise InvalidParameterError(f"{name} must be finite, got {value}")
    if m1 <= 0 or m2 <= 0:
        raise InvalidParameterError(f"masses must be positive, got {m1} and {m2}")
    return Parameters(mass1=m1, mass2=m2, phi1=p1 * math.pi / 180, phi2=p2 * math.pi / 180)


class SimulationController:
    """Owns the pendulum state, the phase trace and the tick sequence.

    While idle, parameter edits only redraw the pendulum. ``submit`` resets
    the velocities and the trace and (re)starts ticking; every tick performs
    one integration step and forwards geometry plus one phase point to the
    renderer. At most one ticker is live at any time.
    """

    def __init__(
        self,
        renderer: Renderer,
        config: SimulationConfig = DEFAULT_CONFIG,
        ticker_factory: Optional[TickerFactory] = None,
    ) -> None:
        self.config = config
        self.renderer = renderer
        self._ticker_factory = ticker_factory or Ticker
        self._state = PendulumState.from_config(config)
        self._trace: List[Point] = []
        self._ticker: Optional[Ticker] = None
        self._ticks = 0
        self._lock = threading.Lock()
        self._submit_lock = threading.Lock()

    @property
    def state(self) -> PendulumState:
        with self._lock:
            return replace(self._state)

    @property
    def trace(self) -> List[Point]:
        with self._lock:
            return list(self._trace)

    @property
    def running(self) -> bool:
        return self._ticker is not None and self._ticker.active

    @property
    def ticks(self) -> int:
        return self._ticks

    def preview(
        self,
        mass1: Optional[float] = None,
        mass2: Optional[float] = None,
        phi1: Optional[float] = None,
        phi2: Optional[float] = None,
    ) -> None:
        """Apply slider edits and redraw once without stepping.

        Ignored while a run is active; velocities are never touched here.
        """
        with self._lock:
            if self.running:
                logger.debug("preview ignored while running")
                return
            changes = {k: float(v) for k, v in
                       (("mass1", mass1), ("mass2", mass2), ("phi1", phi1), ("phi2", phi2)) if v is not None}
            self._state = replace(self._state, **changes)
            geometry = pendulum_geometry(self._state, self.config.origin)
        self.renderer.draw_pendulum(geometry)

    def submit(self, params: Parameters) -> None:
        """Reset to rest at the given masses/angles and start a new run."""
        with self._submit_lock:
            old = self._ticker
            if old is not None:
                # join outside self._lock: an in-flight tick may be waiting on it
                old.cancel()
                logger.info("cancelled run after %d ticks", self._ticks)

            with self._lock:
                self._state = replace(
                    self._state,
                    mass1=float(params.mass1),
                    mass2=float(params.mass2),
                    phi1=float(params.phi1),
                    phi2=float(params.phi2),
                    omega1=0.0,
                    omega2=0.0,
                )
                self._ticks = 0
                start = phase_point(self._state, self.config)
                self._trace = [start]
                geometry = pendulum_geometry(self._state, self.config.origin)
                self.renderer.draw_pendulum(geometry)
                self.renderer.begin_trace(start)

                self._ticker = self._ticker_factory(self.config.tick_interval, self.tick)
                self._ticker.start()
            logger.info(
                "started run: m1=%s m2=%s phi1=%.4f phi2=%.4f",
                params.mass1, params.mass2, params.phi1, params.phi2,
            )

    def tick(self) -> None:
        """One integration step, one geometry, one phase point."""
        with self._lock:
            self._state = semi_implicit_euler_step(self._state, self.config.time_step)
            self._ticks += 1
            geometry = pendulum_geometry(self._state, self.config.origin)
            point = phase_point(self._state, self.config)
            self._trace.append(point)
            self.renderer.draw_pendulum(geometry)
            self.renderer.extend_trace(point)

    def shutdown(self) -> None:
        with self._submit_lock:
            if self._ticker is not None:
                self._ticker.cancel()
                logger.info("shut down after %d ticks", self._ticks)
            self._ticker = None
