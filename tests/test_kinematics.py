"""
Unit Tests for the Kinematics Core
==================================
Generator, differentiators, integrators and edit propagation.
Run: python -m pytest tests/ -v
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from kineso.errors import (
    InsufficientSamplesError, IndexOutOfRangeError,
)
from kineso.generator import compute_kinematics, generate
from kineso.differentiator import (
    velocity_from_position, acceleration_from_position,
    acceleration_from_velocity,
)
from kineso.integrator import position_from_velocity, velocity_from_acceleration
from kineso.parameters import KinematicParameters
from kineso.rounding import to_fixed, round_fixed
from kineso.sync import apply_edit, propagate
from kineso.trajectory import Trajectory


@pytest.fixture
def demo():
    """Demo defaults: x0=0, v0=5, a=2 over 0..10 s at dt=0.1."""
    return compute_kinematics(0.0, 5.0, 2.0, 0.0, 10.0, 0.1)


class TestGenerator:
    """Closed-form sampling, rounding and truncation."""

    def test_reference_scenario(self, demo):
        assert demo.n_points == 101
        assert demo.times[0] == 0.0
        assert demo.positions[0] == 0.0
        assert demo.velocities[0] == 5.0
        assert abs(demo.times[100] - 10.0) < 1e-9
        assert abs(demo.positions[100] - 150.0) < 1e-6
        assert abs(demo.velocities[100] - 25.0) < 1e-6

    def test_equal_lengths_and_uniform_spacing(self):
        traj = compute_kinematics(1.0, -3.0, 0.7, 2.0, 7.5, 0.25)
        n = len(traj.times)
        assert n > 0
        assert len(traj.positions) == len(traj.velocities) == \
            len(traj.accelerations) == n
        assert abs(traj.times[0] - 2.0) < 1e-9
        assert np.allclose(np.diff(traj.times), 0.25, atol=1e-7)

    def test_acceleration_is_constant(self, demo):
        assert np.all(demo.accelerations == 2.0)

    def test_values_rounded_to_eight_decimals(self):
        traj = compute_kinematics(0.0, 1.0 / 3.0, 0.0, 0.0, 1.0, 0.1)
        assert traj.velocities[0] == round(1.0 / 3.0, 8)

    def test_rounding_ties_go_away_from_zero(self):
        # 0.001953125 is exactly halfway between 0.00195312 and 0.00195313
        traj = compute_kinematics(0.0, 0.001953125, 0.0, 0.0, 0.0, 0.1)
        assert traj.velocities[0] == 0.00195313
        traj = compute_kinematics(0.0, -0.001953125, 0.0, 0.0, 0.0, 0.1)
        assert traj.velocities[0] == -0.00195313

    def test_formula_uses_absolute_time(self):
        """x(t) is evaluated at absolute t, not t - t0."""
        traj = compute_kinematics(0.0, 1.0, 2.0, 2.0, 3.0, 0.5)
        assert abs(traj.positions[0] - (2.0 + 4.0)) < 1e-9
        assert abs(traj.velocities[0] - 5.0) < 1e-9

    def test_idempotent(self):
        first = compute_kinematics(3.0, 2.0, -1.5, 0.0, 4.0, 0.05)
        second = compute_kinematics(3.0, 2.0, -1.5, 0.0, 4.0, 0.05)
        for attr in ('times', 'positions', 'velocities', 'accelerations'):
            assert np.array_equal(getattr(first, attr), getattr(second, attr))

    def test_truncation_at_max_points(self):
        traj = compute_kinematics(0, 0, 0, 0, 1000, 0.001, max_points=1000)
        assert traj.n_points == 1000

    def test_custom_max_points(self):
        traj = compute_kinematics(0, 1, 0, 0, 100, 0.1, max_points=25)
        assert traj.n_points == 25

    def test_zero_step_returns_empty(self):
        traj = compute_kinematics(0, 5, 2, 0, 10, 0)
        assert traj.is_empty
        assert len(traj.positions) == len(traj.velocities) == \
            len(traj.accelerations) == 0

    def test_negative_step_returns_empty(self):
        assert compute_kinematics(0, 5, 2, 0, 10, -0.1).n_points == 0

    def test_single_point_window(self):
        traj = compute_kinematics(0, 5, 2, 3, 3, 0.1)
        assert traj.n_points == 1
        assert traj.times[0] == 3.0

    def test_generate_from_parameters(self, demo):
        traj = generate(KinematicParameters())
        assert np.array_equal(traj.positions, demo.positions)


class TestDifferentiators:
    """Finite-difference estimators."""

    def test_velocity_from_position_stencil(self):
        vs = velocity_from_position([0.0, 1.0, 4.0, 9.0], 1.0)
        assert np.allclose(vs, [1.0, 2.0, 4.0, 5.0])

    def test_acceleration_from_position_reuses_nearest_triple(self):
        acc = acceleration_from_position([0.0, 1.0, 3.0, 7.0, 8.0], 0.5)
        assert np.allclose(acc, [4.0, 4.0, 8.0, -12.0, -12.0])

    def test_acceleration_from_position_three_samples(self):
        acc = acceleration_from_position([0.0, 1.0, 4.0], 1.0)
        assert np.allclose(acc, [2.0, 2.0, 2.0])

    def test_acceleration_from_velocity_stencil(self):
        acc = acceleration_from_velocity([1.0, 3.0, 2.0], 0.5)
        assert np.allclose(acc, [4.0, 1.0, -2.0])

    def test_interior_velocity_matches_analytic(self, demo):
        vs = velocity_from_position(demo.positions, demo.dt)
        rel = np.abs(vs[1:-1] - demo.velocities[1:-1]) / np.abs(demo.velocities[1:-1])
        assert np.max(rel) < 1e-3

    def test_interior_acceleration_matches_analytic(self, demo):
        acc = acceleration_from_position(demo.positions, demo.dt)
        assert np.allclose(acc, 2.0, atol=1e-3)

    def test_boundary_velocity_is_biased(self, demo):
        """One-sided ends are off by a·dt/2 for constant acceleration."""
        vs = velocity_from_position(demo.positions, demo.dt)
        assert abs(vs[0] - 5.1) < 1e-6
        assert abs(vs[-1] - 24.9) < 1e-6

    def test_output_length_matches_input(self, demo):
        assert len(velocity_from_position(demo.positions, 0.1)) == demo.n_points
        assert len(acceleration_from_position(demo.positions, 0.1)) == demo.n_points
        assert len(acceleration_from_velocity(demo.velocities, 0.1)) == demo.n_points

    @pytest.mark.parametrize('func, samples', [
        (velocity_from_position, [1.0]),
        (velocity_from_position, []),
        (acceleration_from_velocity, [2.0]),
        (acceleration_from_position, [0.0, 1.0]),
    ])
    def test_insufficient_samples(self, func, samples):
        with pytest.raises(InsufficientSamplesError):
            func(samples, 0.1)

    def test_insufficient_samples_is_value_error(self):
        with pytest.raises(ValueError):
            acceleration_from_position([0.0], 0.1)


class TestIntegrators:
    """Trapezoidal and forward-Euler integration."""

    def test_trapezoid_steps(self):
        xs = position_from_velocity([1.0, 3.0, 5.0], 2.0, 0.5)
        assert np.allclose(xs, [2.0, 3.0, 5.0])

    def test_euler_ignores_last_sample(self):
        vs = velocity_from_acceleration([2.0, 4.0, 100.0], 1.0, 0.5)
        assert np.allclose(vs, [1.0, 2.0, 4.0])

    def test_trapezoid_reproduces_generated_positions(self, demo):
        xs = position_from_velocity(demo.velocities, demo.x0, demo.dt)
        assert np.allclose(xs, demo.positions, atol=1e-6)

    def test_euler_reproduces_generated_velocities(self, demo):
        vs = velocity_from_acceleration(demo.accelerations, demo.v0, demo.dt)
        assert np.allclose(vs, demo.velocities, atol=1e-6)

    def test_euler_is_not_trapezoidal(self):
        """A ramp in acceleration exposes the first-order method."""
        acc = [0.0, 1.0, 2.0]
        euler = velocity_from_acceleration(acc, 0.0, 1.0)
        trapezoid = position_from_velocity(acc, 0.0, 1.0)
        assert euler[-1] == 1.0
        assert trapezoid[-1] == 2.0

    def test_empty_and_single_sample(self):
        assert len(position_from_velocity([], 1.0, 0.1)) == 0
        assert len(velocity_from_acceleration([], 1.0, 0.1)) == 0
        assert np.array_equal(position_from_velocity([7.0], 1.5, 0.1), [1.5])
        assert np.array_equal(velocity_from_acceleration([7.0], 2.5, 0.1), [2.5])


class TestEditPropagation:
    """Single-point edits keep the three series consistent."""

    def test_position_edit_closure(self, demo):
        times_before = demo.times.copy()
        apply_edit('position', 40, 123.0, demo)

        assert demo.positions[40] == 123.0
        assert np.array_equal(demo.velocities,
                              velocity_from_position(demo.positions, demo.dt))
        assert np.array_equal(demo.accelerations,
                              acceleration_from_position(demo.positions, demo.dt))
        assert np.array_equal(demo.times, times_before)

    def test_velocity_edit_closure(self, demo):
        apply_edit('velocity', 10, -4.0, demo)

        assert demo.velocities[10] == -4.0
        assert np.array_equal(demo.positions,
                              position_from_velocity(demo.velocities, demo.x0, demo.dt))
        assert np.array_equal(demo.accelerations,
                              acceleration_from_velocity(demo.velocities, demo.dt))

    def test_acceleration_edit_is_two_stage(self, demo):
        expected_a = demo.accelerations.copy()
        expected_a[30] = 10.0
        expected_v = velocity_from_acceleration(expected_a, demo.v0, demo.dt)
        expected_x = position_from_velocity(expected_v, demo.x0, demo.dt)

        apply_edit('acceleration', 30, 10.0, demo)

        assert np.array_equal(demo.accelerations, expected_a)
        assert np.array_equal(demo.velocities, expected_v)
        assert np.array_equal(demo.positions, expected_x)

    def test_acceleration_edit_shifts_later_velocities(self, demo):
        base_v = velocity_from_acceleration(demo.accelerations, demo.v0, demo.dt)
        apply_edit('acceleration', 30, 10.0, demo)

        assert np.array_equal(demo.velocities[:31], base_v[:31])
        assert np.allclose(demo.velocities[31:] - base_v[31:], 0.8)

    def test_initial_conditions_untouched_by_first_index_edit(self, demo):
        apply_edit('position', 0, 42.0, demo)
        assert demo.positions[0] == 42.0
        assert demo.x0 == 0.0
        assert demo.v0 == 5.0

    def test_returns_same_trajectory(self, demo):
        assert apply_edit('velocity', 5, 1.0, demo) is demo

    @pytest.mark.parametrize('index', [-1, 101, 500])
    def test_index_out_of_range(self, demo, index):
        before = demo.copy()
        with pytest.raises(IndexOutOfRangeError):
            apply_edit('position', index, 1.0, demo)
        assert np.array_equal(demo.positions, before.positions)

    @pytest.mark.parametrize('index', [1.5, 2.0, True, '3'])
    def test_non_integer_index_rejected(self, demo, index):
        before = demo.copy()
        with pytest.raises(TypeError):
            apply_edit('velocity', index, 1.0, demo)
        assert np.array_equal(demo.velocities, before.velocities)

    def test_numpy_integer_index_accepted(self, demo):
        apply_edit('velocity', np.int64(3), 1.0, demo)
        assert demo.velocities[3] == 1.0

    def test_unknown_series(self, demo):
        with pytest.raises(ValueError):
            apply_edit('jerk', 3, 1.0, demo)

    def test_failed_edit_leaves_trajectory_unchanged(self):
        traj = compute_kinematics(0.0, 1.0, 0.0, 0.0, 0.1, 0.1)
        assert traj.n_points == 2
        with pytest.raises(InsufficientSamplesError):
            apply_edit('position', 1, 9.0, traj)
        assert traj.positions[1] == 0.1

    def test_propagate_does_not_mutate(self, demo):
        before = demo.copy()
        xs, vs, as_ = propagate('velocity', 20, 0.0, demo)
        assert vs[20] == 0.0
        assert np.array_equal(demo.velocities, before.velocities)

    def test_non_finite_value_propagates(self, demo):
        """NaN is accepted and spreads to every later position."""
        apply_edit('velocity', 10, float('nan'), demo)
        assert np.all(np.isfinite(demo.positions[:10]))
        assert np.all(np.isnan(demo.positions[10:]))

    def test_repeated_edits_stay_consistent(self, demo):
        apply_edit('position', 20, 30.0, demo)
        apply_edit('velocity', 60, 10.0, demo)
        apply_edit('acceleration', 80, -5.0, demo)
        assert np.array_equal(
            demo.positions,
            position_from_velocity(demo.velocities, demo.x0, demo.dt))


class TestRounding:
    """Fixed-decimal formatting shared by the generator and the exports."""

    def test_ties_round_away_from_zero(self):
        assert to_fixed(0.0078125, 6) == '0.007813'
        assert to_fixed(-0.0078125, 6) == '-0.007813'
        assert to_fixed(2.5, 0) == '3'

    def test_binary_value_decides_near_ties(self):
        # 1.005 is stored just below the halfway point
        assert to_fixed(1.005, 2) == '1.00'

    def test_zero_sign(self):
        assert to_fixed(-0.0, 6) == '0.000000'
        assert to_fixed(-1e-9, 6) == '-0.000000'

    def test_non_finite(self):
        assert to_fixed(float('nan'), 3) == 'NaN'
        assert to_fixed(float('inf'), 3) == 'Infinity'
        assert to_fixed(float('-inf'), 3) == '-Infinity'

    def test_round_fixed(self):
        assert round_fixed(0.001953125, 8) == 0.00195313
        assert round_fixed(1.23456789, 6) == 1.234568
        assert np.isnan(round_fixed(float('nan'), 8))


class TestTrajectory:
    """Owning type for the four aligned series."""

    def test_mismatched_lengths_rejected(self):
        with pytest.raises(ValueError):
            Trajectory(times=[0.0, 0.1], positions=[0.0],
                       velocities=[1.0, 1.0], accelerations=[0.0, 0.0])

    def test_copy_is_independent(self, demo):
        snap = demo.copy()
        snap.positions[0] = 99.0
        assert demo.positions[0] == 0.0

    def test_sample(self, demo):
        t, x, v, a = demo.sample(100)
        assert abs(t - 10.0) < 1e-9
        assert abs(x - 150.0) < 1e-6
        assert abs(v - 25.0) < 1e-6
        assert a == 2.0

    def test_sample_out_of_range(self, demo):
        with pytest.raises(IndexOutOfRangeError):
            demo.sample(101)

    def test_sample_index_must_be_integer(self, demo):
        with pytest.raises(TypeError):
            demo.sample(1.5)
        with pytest.raises(TypeError):
            demo.sample(False)
        assert demo.sample(np.int32(0)) == (0.0, 0.0, 5.0, 2.0)

    def test_rows(self, demo):
        rows = list(demo.rows())
        assert len(rows) == 101
        assert rows[0] == (0.0, 0.0, 5.0, 2.0)

    def test_empty(self):
        traj = Trajectory.empty()
        assert len(traj) == 0
        assert traj.duration == 0.0
        assert 'no data' in traj.summary()

    def test_summary(self, demo):
        text = demo.summary()
        assert 'TRAJECTORY SUMMARY' in text
        assert '101' in text


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
