"""
Pendulum physical parameters
"""

import math
from dataclasses import dataclass, field


def _require_positive(name: str, value: float) -> None:
    if not (math.isfinite(value) and value > 0):
        raise ValueError(f"{name} must be a positive finite number, got {value!r}")


@dataclass(frozen=True)
class PhysicalConstants:
    """Physical constants of the reference double pendulum (equal rods, equal masses)"""

    g: float = 1.2  # gravitational acceleration
    m: float = 1.0  # mass of each rod
    l: float = 1.0  # length of each rod
    ml2: float = field(init=False, repr=False, default=0.0)  # Will be calculated

    def __post_init__(self) -> None:
        """Validate and calculate derived parameters"""
        if not math.isfinite(self.g):
            raise ValueError(f"g must be finite, got {self.g!r}")
        _require_positive("m", self.m)
        _require_positive("l", self.l)
        object.__setattr__(self, "ml2", self.m * self.l * self.l)


@dataclass(frozen=True)
class PointMassParams:
    """Parameters of a double pendulum with two point masses on massless rods"""

    g: float = 3.0
    m1: float = 1.5  # upper mass
    m2: float = 1.0  # lower mass
    l1: float = 1.0  # upper rod length
    l2: float = 1.25  # lower rod length

    def __post_init__(self) -> None:
        if not math.isfinite(self.g):
            raise ValueError(f"g must be finite, got {self.g!r}")
        for name in ("m1", "m2", "l1", "l2"):
            _require_positive(name, getattr(self, name))
