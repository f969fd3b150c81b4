"""
Step size analysis functions
"""

from typing import Any, Dict, Optional, Sequence

import numpy as np

from pendulum.analysis import compare_with_reference
from pendulum.params import PhysicalConstants
from pendulum.simulator import PendulumSimulator
from pendulum.state import DynamicalState

CANONICAL_START = DynamicalState(2.5, 2.6, 0.0, 0.0)


def estimate_convergence_order(dts: Sequence[float], errors: Sequence[float]) -> float:
    """
    Estimate the order p of a method from errors that scale like dt**p

    Args:
        dts: Step sizes
        errors: Global error measured at each step size

    Returns:
        Least-squares slope of log(error) against log(dt)
    """
    if len(dts) != len(errors) or len(dts) < 2:
        raise ValueError("need at least two (dt, error) pairs of equal length")
    slope = np.polyfit(np.log(np.asarray(dts, dtype=float)), np.log(np.asarray(errors, dtype=float)), 1)[0]
    return float(slope)


def run_timestep_analysis(
    dts: Sequence[float],
    duration: float = 1.0,
    initial_state: Optional[DynamicalState] = None,
    constants: Optional[PhysicalConstants] = None,
) -> Dict[float, Dict[str, Any]]:
    """
    Run the same start state with several step sizes

    Args:
        dts: Step sizes in seconds
        duration: Simulated time span in seconds
        initial_state: Start state (defaults to CANONICAL_START)
        constants: Physical constants of the reference model

    Returns:
        Dictionary with results for each step size
    """
    if initial_state is None:
        initial_state = CANONICAL_START
    constants = constants if constants is not None else PhysicalConstants()
    results: Dict[float, Dict[str, Any]] = {}

    for dt in dts:
        simulator = PendulumSimulator(constants, initial_state=initial_state)
        t, state, energy = simulator.simulate(duration=duration, dt=dt)
        analysis = simulator.analyze_energy(t, state, energy)
        accuracy = compare_with_reference(t, state, constants)

        results[dt] = {
            "time": t,
            "state": state,
            "energy": energy,
            "analysis": analysis,
            "accuracy": accuracy,
            "final_error": accuracy["final_error"],
        }

    return results
