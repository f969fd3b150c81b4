"""
Test suite for the Double Pendulum Simulation.

This package contains unit tests organized by component:
- test_params.py: Tests for PhysicalConstants and PointMassParams
- test_state.py: Tests for DynamicalState and initial state generation
- test_dynamics.py: Tests for the equations of motion and energy
- test_integrator.py: Tests for the RK4 integrator
- test_trail.py: Tests for the trail ring buffer
- test_simulator.py: Tests for PendulumSimulator
- test_analysis.py: Tests for energy analysis and reference comparison
- test_integration.py: Integration tests for the step size analysis workflow
- test_app.py: Tests for the dashboard helpers
"""
