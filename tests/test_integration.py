"""
Integration tests for the full analysis workflow.

Tests the run_timestep_analysis function which runs the same pendulum with
several step sizes and compares each run against the reference solution.
"""

import pytest

from pendulum_simulation import (
    DynamicalState,
    PendulumSimulator,
    PhysicalConstants,
    estimate_convergence_order,
    run_timestep_analysis,
)


class TestIntegration:
    """Test suite for integration tests"""

    def test_run_timestep_analysis_returns_results(self) -> None:
        """Test that run_timestep_analysis returns results for all step sizes"""
        dts = [0.05, 0.02, 0.01]
        results = run_timestep_analysis(dts, duration=0.5)

        assert len(results) == len(dts)

        for dt in dts:
            assert dt in results

    def test_results_contain_required_keys(self) -> None:
        """Test that results contain all required data"""
        results = run_timestep_analysis([0.01], duration=0.5)

        for dt, data in results.items():
            assert "time" in data
            assert "state" in data
            assert "energy" in data
            assert "analysis" in data
            assert "accuracy" in data
            assert "final_error" in data

    def test_analysis_in_results(self) -> None:
        """Test that energy analysis results are included for each step size"""
        results = run_timestep_analysis([0.05, 0.01], duration=0.5)

        for dt, data in results.items():
            analysis = data["analysis"]

            assert "max_rel_drift" in analysis
            assert "is_conserved" in analysis
            assert "flips" in analysis

    def test_rk4_is_fourth_order(self) -> None:
        """Test that halving the step divides the global error by about 16"""
        dts = [0.1, 0.05, 0.02, 0.01]
        results = run_timestep_analysis(dts, duration=1.0)
        errors = [results[dt]["final_error"] for dt in dts]
        order = estimate_convergence_order(dts, errors)

        assert 3.5 < order < 4.5
        assert errors == sorted(errors, reverse=True)

    def test_custom_start_and_constants(self) -> None:
        """Test that the start state and constants are passed through"""
        start = DynamicalState(1.0, 0.5, 0.0, 0.0)
        results = run_timestep_analysis(
            [0.01], duration=0.2, initial_state=start, constants=PhysicalConstants(g=1.0)
        )
        data = results[0.01]

        assert list(data["state"][0]) == [1.0, 0.5, 0.0, 0.0]
        assert data["analysis"]["initial_energy"] == pytest.approx(
            -1.5 * (0.5403023058681398 + 0.8775825618903728)
        )

    def test_estimate_convergence_order_exact(self) -> None:
        """Test the slope estimate on synthetic errors"""
        dts = [0.1, 0.05, 0.025]
        errors = [3.0 * dt**4 for dt in dts]

        assert estimate_convergence_order(dts, errors) == pytest.approx(4.0)

    def test_estimate_convergence_order_needs_two_points(self) -> None:
        """Test that one sample is not enough for a slope"""
        with pytest.raises(ValueError):
            estimate_convergence_order([0.1], [1e-3])

    def test_live_simulation_many_frames(self) -> None:
        """Test an animation-like session of ten seconds at 60 Hz"""
        simulator = PendulumSimulator(seed=7, trail_capacity=256)
        for _ in range(600):
            simulator.tick(1000.0 / 60.0)

        assert simulator.steps == 600
        assert simulator.trail.count == 256
        assert len(list(simulator.trail.weighted_segments())) == 255
        assert simulator.sim_time == pytest.approx(10.0)
