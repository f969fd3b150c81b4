"""
Double Pendulum Simulation

Command-line report: runs the canonical start state with several step sizes,
prints the energy drift and global error of each, the estimated order of the
integrator, and a short energy and angle trace of a random pendulum.
"""

from pendulum import (
    DynamicalState,
    PendulumSimulator,
    PhysicalConstants,
    TrailBuffer,
    estimate_convergence_order,
    run_timestep_analysis,
    step,
)

__all__ = [
    "DynamicalState",
    "PendulumSimulator",
    "PhysicalConstants",
    "TrailBuffer",
    "estimate_convergence_order",
    "run_timestep_analysis",
    "step",
]


if __name__ == "__main__":
    dts = [0.1, 0.05, 0.02, 0.01]
    results = run_timestep_analysis(dts, duration=1.0)

    # Print results
    print("Step Size Analysis Results:")
    print("-" * 80)
    for dt, data in results.items():
        analysis = data["analysis"]
        print(f"\nStep: {dt * 1000:.0f}ms")
        print(f"  Initial energy: {analysis['initial_energy']:.8f}")
        print(f"  Max relative drift: {analysis['max_rel_drift']:.3e}")
        print(f"  Final error vs reference: {data['final_error']:.3e}")
        print(f"  Energy conserved: {analysis['is_conserved']}")

    order = estimate_convergence_order(dts, [results[dt]["final_error"] for dt in dts])
    print(f"\nEstimated convergence order: {order:.2f}")

    print("\nEnergy trace (60 Hz):")
    simulator = PendulumSimulator(seed=0)
    for _ in range(10):
        simulator.advance(1 / 60.0)
        print(f"{simulator.energy():< 16.8f} {simulator.state.angle0:f} {simulator.state.angle1:f}")
