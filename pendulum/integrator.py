"""
Fixed-step fourth-order Runge-Kutta integration
"""

import math
from typing import Callable, Optional, Tuple

import numpy as np

from pendulum.dynamics import Derivative, derivative
from pendulum.params import PhysicalConstants
from pendulum.state import DynamicalState

DerivativeFn = Callable[[DynamicalState], Derivative]


def _offset(state: DynamicalState, slope: Derivative, h: float) -> DynamicalState:
    return DynamicalState(
        state.angle0 + slope[0] * h,
        state.angle1 + slope[1] * h,
        state.momentum0 + slope[2] * h,
        state.momentum1 + slope[3] * h,
    )


def rk4_step(state: DynamicalState, dt: float, derivative_fn: DerivativeFn) -> DynamicalState:
    """
    Advance a state by one classical RK4 step

    Args:
        state: Start state (not modified)
        dt: Time increment (s)
        derivative_fn: Maps a state to its time derivative

    Returns:
        New state; equal to the start state when dt is 0
    """
    k1 = derivative_fn(state)
    k2 = derivative_fn(_offset(state, k1, dt / 2))
    k3 = derivative_fn(_offset(state, k2, dt / 2))
    k4 = derivative_fn(_offset(state, k3, dt))
    start = state.as_tuple()
    return DynamicalState(
        *(start[i] + (k1[i] + 2 * k2[i] + 2 * k3[i] + k4[i]) * dt / 6 for i in range(4))
    )


def step(
    state: DynamicalState, dt: float, constants: Optional[PhysicalConstants] = None
) -> DynamicalState:
    """One RK4 step of the reference double pendulum"""
    if constants is None:
        constants = PhysicalConstants()
    return rk4_step(state, dt, lambda s: derivative(s, constants))


def advance(
    state: DynamicalState, dt_total: float, dt_max: float, derivative_fn: DerivativeFn
) -> DynamicalState:
    """
    Integrate dt_total with equal RK4 sub-steps no longer than dt_max

    Args:
        state: Start state
        dt_total: Interval to integrate (s)
        dt_max: Largest allowed sub-step (s)
        derivative_fn: Maps a state to its time derivative

    Returns:
        State at the end of the interval
    """
    if not dt_max > 0:
        raise ValueError(f"dt_max must be positive, got {dt_max!r}")
    if dt_total == 0:
        return state
    steps = max(1, int(math.ceil(abs(dt_total) / dt_max)))
    dt = dt_total / steps
    for _ in range(steps):
        state = rk4_step(state, dt, derivative_fn)
    return state


def integrate(
    state: DynamicalState, duration: float, dt: float, derivative_fn: DerivativeFn
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Fixed-step trajectory

    Args:
        state: Initial state
        duration: Simulated time span (s)
        dt: Step size (s)
        derivative_fn: Maps a state to its time derivative

    Returns:
        Tuple of (time_array, state_history) with shapes (n+1,) and (n+1, 4)
    """
    if not dt > 0:
        raise ValueError(f"dt must be positive, got {dt!r}")
    if duration < 0:
        raise ValueError(f"duration must be non-negative, got {duration!r}")
    n_steps = int(round(duration / dt))
    t = np.arange(n_steps + 1) * dt
    history = np.zeros((n_steps + 1, 4))
    history[0] = state.as_tuple()
    for i in range(1, n_steps + 1):
        state = rk4_step(state, dt, derivative_fn)
        history[i] = state.as_tuple()
    return t, history
