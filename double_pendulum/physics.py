"""
Numerical physics for the double pendulum.

This module provides:
- The mutable pendulum state record
- Angular accelerations from the double pendulum equations of motion
- A semi-implicit Euler integrator (one fixed step, no sub-stepping)
- Energy computation for drift monitoring
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Tuple

from double_pendulum.config import DEFAULT_CONFIG, SimulationConfig


@dataclass
class PendulumState:
    """Angles (rad), angular velocities (rad/s), masses and fixed geometry.

    Angles are measured from the vertical (downwards is 0 rad) and are never
    wrapped, so they grow without bound on a long run.
    """

    phi1: float
    phi2: float
    omega1: float = 0.0
    omega2: float = 0.0
    mass1: float = DEFAULT_CONFIG.initial_mass1
    mass2: float = DEFAULT_CONFIG.initial_mass2
    length1: float = DEFAULT_CONFIG.length1
    length2: float = DEFAULT_CONFIG.length2
    gravity: float = DEFAULT_CONFIG.g

    @classmethod
    def from_config(cls, config: SimulationConfig = DEFAULT_CONFIG) -> "PendulumState":
        return cls(
            phi1=math.radians(config.initial_phi1_deg),
            phi2=math.radians(config.initial_phi2_deg),
            mass1=float(config.initial_mass1),
            mass2=float(config.initial_mass2),
            length1=float(config.length1),
            length2=float(config.length2),
            gravity=float(config.g),
        )

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.phi1, self.phi2, self.omega1, self.omega2)


def angular_accelerations(state: PendulumState) -> Tuple[float, float]:
    """Return (a1, a2) for the given state.

    The common denominator ``mu - cos^2(delta)`` is bounded below by
    ``mass1 / mass2``, so it is well defined for positive masses. Nothing is
    checked here: a broken mass invariant yields NaN/Inf or a division error.
    """
    g = state.gravity
    l1 = state.length1
    l2 = state.length2
    w1 = state.omega1
    w2 = state.omega2

    mu = 1.0 + state.mass1 / state.mass2
    delta = state.phi1 - state.phi2
    sin_delta = math.sin(delta)
    cos_delta = math.cos(delta)
    denom = mu - cos_delta * cos_delta

    num1 = g * (math.sin(state.phi2) * cos_delta - mu * math.sin(state.phi1))
    num1 -= (l2 * w2 * w2 + l1 * w1 * w1 * cos_delta) * sin_delta
    a1 = num1 / (l1 * denom)

    num2 = mu * g * (math.sin(state.phi1) * cos_delta - math.sin(state.phi2))
    num2 += (mu * l1 * w1 * w1 + l2 * w2 * w2 * cos_delta) * sin_delta
    a2 = num2 / (l2 * denom)

    return a1, a2


def semi_implicit_euler_step(state: PendulumState, dt: float) -> PendulumState:
    """Advance ``state`` by one step of ``dt`` and return the new state.

    Velocities are updated from the accelerations at the pre-step state, then
    angles are updated using the new velocities. The input is left untouched.
    """
    a1, a2 = angular_accelerations(state)
    omega1 = state.omega1 + a1 * dt
    omega2 = state.omega2 + a2 * dt
    phi1 = state.phi1 + omega1 * dt
    phi2 = state.phi2 + omega2 * dt
    return replace(state, phi1=phi1, phi2=phi2, omega1=omega1, omega2=omega2)


def total_energy(state: PendulumState) -> float:
    """Total mechanical energy in the angular form of the Lagrangian.

    Potential energy is zero at the anchor height; a bob hanging straight down
    sits at -length.
    """
    m1, m2 = state.mass1, state.mass2
    l1, l2 = state.length1, state.length2
    w1, w2 = state.omega1, state.omega2

    kinetic = 0.5 * (m1 + m2) * (l1 * w1) ** 2 + 0.5 * m2 * (l2 * w2) ** 2
    kinetic += m2 * l1 * l2 * w1 * w2 * math.cos(state.phi1 - state.phi2)
    potential = -state.gravity * ((m1 + m2) * l1 * math.cos(state.phi1) + m2 * l2 * math.cos(state.phi2))
    return kinetic + potential
