"""
Edit Propagation
================
Keeps a Trajectory self-consistent after a single-point edit.

The edited series becomes the ground truth and the other two are
re-derived from it:

  edited        direct mutation     recomputed
  ------------  ------------------  ----------------------------------------
  position      xs[i] = value       vs ← d/dt xs,  as ← d²/dt² xs
  velocity      vs[i] = value       xs ← ∫ vs (trapezoid),  as ← d/dt vs
  acceleration  as[i] = value       vs ← ∫ as (Euler),  xs ← ∫ vs (trapezoid)

An acceleration edit is chained: position comes from the freshly
integrated velocity, never from a direct double integration.

``times``, ``dt``, ``x0`` and ``v0`` are left alone, including when index 0
is edited; syncing initial-condition inputs is the caller's job.
"""

from .differentiator import (
    velocity_from_position, acceleration_from_position,
    acceleration_from_velocity,
)
from .integrator import position_from_velocity, velocity_from_acceleration
from .trajectory import Trajectory


SERIES = ('position', 'velocity', 'acceleration')


def _check_series(series: str) -> str:
    if series not in SERIES:
        raise ValueError(
            f"Unknown series '{series}'. Available: {list(SERIES)}"
        )
    return series


def propagate(series: str, index: int, new_value: float,
              trajectory: Trajectory):
    """
    Compute the (positions, velocities, accelerations) an edit would
    produce, without touching ``trajectory``.
    """
    _check_series(series)
    i = trajectory.check_index(index)
    dt = trajectory.dt

    xs = trajectory.positions.copy()
    vs = trajectory.velocities.copy()
    as_ = trajectory.accelerations.copy()

    if series == 'position':
        xs[i] = new_value
        vs = velocity_from_position(xs, dt)
        as_ = acceleration_from_position(xs, dt)
    elif series == 'velocity':
        vs[i] = new_value
        xs = position_from_velocity(vs, trajectory.x0, dt)
        as_ = acceleration_from_velocity(vs, dt)
    else:
        as_[i] = new_value
        vs = velocity_from_acceleration(as_, trajectory.v0, dt)
        xs = position_from_velocity(vs, trajectory.x0, dt)

    return xs, vs, as_


def apply_edit(series: str, index: int, new_value: float,
               trajectory: Trajectory) -> Trajectory:
    """
    Apply one edit in place and return the same trajectory.

    Everything is computed before anything is assigned, so a failure
    (bad series, bad index, too few samples) leaves the trajectory as it
    was. Non-finite values are not rejected and propagate downstream.
    """
    xs, vs, as_ = propagate(series, index, new_value, trajectory)

    trajectory.positions = xs
    trajectory.velocities = vs
    trajectory.accelerations = as_
    return trajectory
