"""Double pendulum simulator: semi-implicit Euler physics with a live
pendulum view and a phi1/phi2 phase plot."""

from double_pendulum.config import DEFAULT_CONFIG, SimulationConfig
from double_pendulum.mapping import Geometry, pendulum_geometry, phase_point, scale_phi
from double_pendulum.physics import PendulumState, angular_accelerations, semi_implicit_euler_step, total_energy
from double_pendulum.sim_session import InvalidParameterError, Parameters, SimulationController, read_parameters

__all__ = [
    "DEFAULT_CONFIG",
    "Geometry",
    "InvalidParameterError",
    "Parameters",
    "PendulumState",
    "SimulationConfig",
    "SimulationController",
    "angular_accelerations",
    "pendulum_geometry",
    "phase_point",
    "read_parameters",
    "scale_phi",
    "semi_implicit_euler_step",
    "total_energy",
]
