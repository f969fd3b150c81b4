"""
Dynamical state representation
"""

import math
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class DynamicalState:
    """State vector of the double pendulum"""

    angle0: float  # Upper rod angle from the downward vertical (rad), unbounded
    angle1: float  # Lower rod angle from the downward vertical (rad), unbounded
    momentum0: float  # Canonical momentum conjugate to angle0
    momentum1: float  # Canonical momentum conjugate to angle1

    @classmethod
    def from_sequence(cls, values: Iterable[float]) -> "DynamicalState":
        angle0, angle1, momentum0, momentum1 = (float(v) for v in values)
        return cls(angle0, angle1, momentum0, momentum1)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.angle0, self.angle1, self.momentum0, self.momentum1)

    def as_array(self) -> np.ndarray:
        return np.array(self.as_tuple(), dtype=np.float64)

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in self.as_tuple())

    def __neg__(self) -> "DynamicalState":
        return DynamicalState(-self.angle0, -self.angle1, -self.momentum0, -self.momentum1)


def create_state(
    uniform: Optional[Callable[[], float]] = None,
    low: float = 3 * math.pi / 4,
    spread: float = math.pi / 2,
    seed: Optional[int] = None,
) -> DynamicalState:
    """
    Create a random initial state near the inverted position

    Args:
        uniform: Zero-argument generator of reals in [0, 1)
        low: Lower bound of the angle range (rad)
        spread: Width of the angle range (rad)
        seed: Seed for the default generator, ignored when uniform is given

    Returns:
        State with both angles in [low, low + spread) and zero momenta
    """
    if uniform is None:
        uniform = np.random.default_rng(seed).random
    angle0 = float(uniform()) * spread + low
    angle1 = float(uniform()) * spread + low
    return DynamicalState(angle0, angle1, 0.0, 0.0)
