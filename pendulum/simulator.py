"""
Main pendulum simulator class
"""

import logging
import math
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from pendulum.analysis import EnergyAnalyzer
from pendulum.dynamics import Point, PointMassPendulum, RodPendulum
from pendulum.integrator import integrate, rk4_step
from pendulum.params import PhysicalConstants
from pendulum.state import DynamicalState, create_state
from pendulum.trail import TrailBuffer

logger = logging.getLogger(__name__)

Model = Union[RodPendulum, PointMassPendulum]


class PendulumSimulator:
    """Owns one double pendulum: its state, its dynamics model and its trail"""

    def __init__(
        self,
        constants: Optional[PhysicalConstants] = None,
        model: Optional[Model] = None,
        trail_capacity: int = 400,
        max_step_ms: float = 30.0,
        initial_state: Optional[DynamicalState] = None,
        seed: Optional[int] = None,
        reset_on_non_finite: bool = True,
    ) -> None:
        """
        Initialize simulator

        Args:
            constants: Constants of the reference model (ignored when model is given)
            model: Dynamics model; defaults to RodPendulum(constants)
            trail_capacity: Number of lower-mass positions kept in the trail
            max_step_ms: Largest wall-clock interval simulated per tick (ms)
            initial_state: Start state; random near-inverted start if omitted
            seed: Seed for the random start states of this instance
            reset_on_non_finite: Restart from a fresh state when a step overflows
        """
        if not max_step_ms > 0:
            raise ValueError(f"max_step_ms must be positive, got {max_step_ms!r}")
        self.model = model if model is not None else RodPendulum(constants)
        self.trail = TrailBuffer(trail_capacity)
        self.max_step_ms = max_step_ms
        self.reset_on_non_finite = reset_on_non_finite
        self.rng = np.random.default_rng(seed)
        self.analyzer = EnergyAnalyzer()
        self._running = True
        self.state = initial_state if initial_state is not None else create_state(self.rng.random)
        self.sim_time = 0.0
        self.steps = 0

    @property
    def running(self) -> bool:
        return self._running

    def pause(self) -> None:
        self._running = False

    def resume(self) -> None:
        self._running = True

    def toggle_running(self) -> bool:
        self._running = not self._running
        return self._running

    def reset(self, initial_state: Optional[DynamicalState] = None) -> None:
        """Start over from a given or fresh random state with an empty trail"""
        self.state = initial_state if initial_state is not None else create_state(self.rng.random)
        self.trail.reset()
        self.sim_time = 0.0
        self.steps = 0
        logger.debug("Pendulum reset to %s", self.state)

    def advance(self, dt: float) -> DynamicalState:
        """
        Advance the pendulum by dt seconds and record the lower mass

        A zero interval leaves the state untouched and records nothing.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt!r}")
        if dt == 0:
            return self.state
        new_state = rk4_step(self.state, dt, self.model.derivative)
        if self.reset_on_non_finite and not new_state.is_finite():
            logger.warning(
                "Non-finite state after %d steps (t=%.3fs), resetting pendulum", self.steps, self.sim_time
            )
            self.reset()
            return self.state
        self.state = new_state
        self.sim_time += dt
        self.steps += 1
        _, lower = self.model.positions(self.state)
        self.trail.push(lower)
        return self.state

    def tick(self, elapsed_ms: float) -> float:
        """
        Advance by one animation frame

        Args:
            elapsed_ms: Wall-clock time since the previous frame (ms); a
                non-finite reading counts as zero

        Returns:
            Simulated time actually advanced (s)
        """
        if not self._running:
            return 0.0
        if not math.isfinite(elapsed_ms):
            return 0.0
        dt = min(max(elapsed_ms, 0.0), self.max_step_ms) / 1000.0
        self.advance(dt)
        return dt

    @property
    def angles(self) -> Tuple[float, float]:
        return (self.state.angle0, self.state.angle1)

    def positions(self) -> Tuple[Point, Point]:
        return self.model.positions(self.state)

    def energy(self) -> float:
        return self.model.energy(self.state)

    def simulate(
        self, duration: float = 10.0, dt: float = 0.001
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Run a fixed-step simulation from the current state

        The live state and trail are not modified.

        Args:
            duration: Simulated time span (s)
            dt: Time step (s)

        Returns:
            Tuple of (time_array, state_history, energy_history)
        """
        t, history = integrate(self.state, duration, dt, self.model.derivative)
        energies = np.array([self.model.energy(DynamicalState.from_sequence(row)) for row in history])
        return t, history, energies

    def analyze_energy(
        self, t: np.ndarray, states: np.ndarray, energies: np.ndarray
    ) -> Dict[str, Any]:
        return self.analyzer.analyze(t, states, energies)
