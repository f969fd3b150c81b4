"""
Double pendulum equations of motion

Hamilton's equations in canonical momenta for two pendulum models:

- RodPendulum: two identical uniform rods (the reference model)
- PointMassPendulum: two point masses on massless rods of unequal length
"""

import math
from typing import Optional, Tuple

from pendulum.params import PhysicalConstants, PointMassParams
from pendulum.state import DynamicalState

Derivative = Tuple[float, float, float, float]
Point = Tuple[float, float]


def _sin(x: float) -> float:
    # math.sin raises on infinity; overflowed states propagate NaN instead
    return math.sin(x) if math.isfinite(x) else math.nan


def _cos(x: float) -> float:
    return math.cos(x) if math.isfinite(x) else math.nan


def denominator(delta: float) -> float:
    """16 - 9*cos²(delta); lies in [7, 16] for every real delta"""
    cos01 = _cos(delta)
    return 16 - 9 * cos01 * cos01


def derivative(state: DynamicalState, constants: PhysicalConstants) -> Derivative:
    """
    Time derivative of the reference model state

    Args:
        state: Current angles and canonical momenta
        constants: Gravitational acceleration, rod mass and rod length

    Returns:
        Tuple of (dangle0, dangle1, dmomentum0, dmomentum1)
    """
    angle0, angle1, p0, p1 = state.angle0, state.angle1, state.momentum0, state.momentum1
    g, l = constants.g, constants.l
    ml2 = constants.ml2
    cos01 = _cos(angle0 - angle1)
    sin01 = _sin(angle0 - angle1)
    denom = 16 - 9 * cos01 * cos01
    dangle0 = 6 / ml2 * (2 * p0 - 3 * cos01 * p1) / denom
    dangle1 = 6 / ml2 * (8 * p1 - 3 * cos01 * p0) / denom
    dp0 = ml2 / -2 * (+dangle0 * dangle1 * sin01 + 3 * g / l * _sin(angle0))
    dp1 = ml2 / -2 * (-dangle0 * dangle1 * sin01 + 3 * g / l * _sin(angle1))
    return (dangle0, dangle1, dp0, dp1)


def total_energy(state: DynamicalState, constants: PhysicalConstants) -> float:
    """
    Total mechanical energy of the reference model

    Conserved quantity of the equations in derivative(): kinetic energy of
    the two rods plus a potential of -3/2*m*g*l*(cos(angle0) + cos(angle1)),
    measured from the pivot height.
    """
    dangle0, dangle1, _, _ = derivative(state, constants)
    m, g, l = constants.m, constants.g, constants.l
    cos01 = _cos(state.angle0 - state.angle1)
    kinetic = constants.ml2 / 6 * (
        4 * dangle0 * dangle0 + dangle1 * dangle1 + 3 * dangle0 * dangle1 * cos01
    )
    potential = -3 * m * g * l / 2 * (_cos(state.angle0) + _cos(state.angle1))
    return kinetic + potential


def mass_positions(
    state: DynamicalState, length: float = 1.0, length1: Optional[float] = None
) -> Tuple[Point, Point]:
    """
    Cartesian positions of the two rod ends relative to the pivot

    Angle 0 hangs straight down and y points up.

    Args:
        state: Current state
        length: Upper rod length
        length1: Lower rod length (defaults to the upper rod length)

    Returns:
        ((x0, y0), (x1, y1))
    """
    if length1 is None:
        length1 = length
    x0 = length * _sin(state.angle0)
    y0 = -length * _cos(state.angle0)
    x1 = x0 + length1 * _sin(state.angle1)
    y1 = y0 - length1 * _cos(state.angle1)
    return (x0, y0), (x1, y1)


class RodPendulum:
    """Reference model: two identical uniform rods hinged end to end"""

    def __init__(self, constants: Optional[PhysicalConstants] = None) -> None:
        self.constants = constants if constants is not None else PhysicalConstants()

    def derivative(self, state: DynamicalState) -> Derivative:
        return derivative(state, self.constants)

    def energy(self, state: DynamicalState) -> float:
        return total_energy(state, self.constants)

    def positions(self, state: DynamicalState) -> Tuple[Point, Point]:
        return mass_positions(state, self.constants.l)


class PointMassPendulum:
    """Two point masses on massless rods, masses and lengths independent"""

    def __init__(self, params: Optional[PointMassParams] = None) -> None:
        self.params = params if params is not None else PointMassParams()

    def derivative(self, state: DynamicalState) -> Derivative:
        """
        Hamilton's equations for the point-mass double pendulum

        The shared denominator m1 + m2*sin²(delta) is at least m1 > 0.
        """
        g = self.params.g
        m1, m2 = self.params.m1, self.params.m2
        l1, l2 = self.params.l1, self.params.l2
        a1, a2 = state.angle0, state.angle1
        p1, p2 = state.momentum0, state.momentum1
        cos12 = _cos(a1 - a2)
        sin12 = _sin(a1 - a2)
        reduced = m1 + m2 * sin12 * sin12
        c1 = (p1 * p2 * sin12) / (l1 * l2 * reduced)
        c2 = _sin(2 * (a1 - a2)) * (
            l2 * l2 * m2 * p1 * p1
            + l1 * l1 * (m1 + m2) * p2 * p2
            - 2 * l1 * l2 * m2 * p1 * p2 * cos12
        ) / (2 * l1 * l1 * l2 * l2 * reduced * reduced)
        da1 = (l2 * p1 - l1 * p2 * cos12) / (l1 * l1 * l2 * reduced)
        da2 = (l1 * (m1 + m2) * p2 - l2 * m2 * p1 * cos12) / (l1 * l2 * l2 * m2 * reduced)
        dp1 = -(m1 + m2) * g * l1 * _sin(a1) - c1 + c2
        dp2 = -m2 * g * l2 * _sin(a2) + c1 - c2
        return (da1, da2, dp1, dp2)

    def energy(self, state: DynamicalState) -> float:
        g = self.params.g
        m1, m2 = self.params.m1, self.params.m2
        l1, l2 = self.params.l1, self.params.l2
        da1, da2, _, _ = self.derivative(state)
        potential = -(m1 + m2) * g * l1 * _cos(state.angle0) - m2 * g * l2 * _cos(state.angle1)
        kinetic = m1 / 2 * l1 * l1 * da1 * da1 + m2 / 2 * (
            l1 * l1 * da1 * da1
            + l2 * l2 * da2 * da2
            + 2 * l1 * l2 * da1 * da2 * _cos(state.angle0 - state.angle1)
        )
        return potential + kinetic

    def positions(self, state: DynamicalState) -> Tuple[Point, Point]:
        return mass_positions(state, self.params.l1, self.params.l2)
