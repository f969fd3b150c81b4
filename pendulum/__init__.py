"""
Double Pendulum Simulation

This package integrates the equations of motion of a chaotic double pendulum
with a fixed-step RK4 integrator and records the path of the lower mass in a
bounded trail buffer for fading-trail rendering.
"""

from pendulum.params import PhysicalConstants, PointMassParams
from pendulum.state import DynamicalState, create_state
from pendulum.dynamics import PointMassPendulum, RodPendulum, derivative, total_energy
from pendulum.integrator import advance, integrate, rk4_step, step
from pendulum.trail import TrailBuffer, create_trail
from pendulum.simulator import PendulumSimulator
from pendulum.timestep_analysis import estimate_convergence_order, run_timestep_analysis

__all__ = [
    "PhysicalConstants",
    "PointMassParams",
    "DynamicalState",
    "create_state",
    "RodPendulum",
    "PointMassPendulum",
    "derivative",
    "total_energy",
    "step",
    "rk4_step",
    "advance",
    "integrate",
    "TrailBuffer",
    "create_trail",
    "PendulumSimulator",
    "run_timestep_analysis",
    "estimate_convergence_order",
]
