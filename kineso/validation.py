"""
Validation Against the Analytic Solution
========================================
Compares every differentiator and integrator with the closed-form
constant-acceleration series produced by the generator, and measures how
self-consistent a (possibly edited) trajectory is.

For constant acceleration:
  - central differences of x are exact up to rounding in the interior,
  - the one-sided end points of dx/dt are off by ½·a·dt,
  - the trapezoidal rule reproduces x exactly (v is linear),
  - forward Euler reproduces v exactly (a is constant).
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, List

from .differentiator import (
    velocity_from_position, acceleration_from_position,
    acceleration_from_velocity,
)
from .generator import generate
from .integrator import position_from_velocity, velocity_from_acceleration
from .parameters import KinematicParameters
from .trajectory import Trajectory


# ══════════════════════════════════════════════════════════════════════════
#  Reference parameter sets
# ══════════════════════════════════════════════════════════════════════════

REFERENCE_CASES = [
    # (name, parameters)
    ('Demo defaults', KinematicParameters()),
    ('Braking', KinematicParameters(x0=10.0, v0=30.0, a=-6.0, t1=5.0, dt=0.05)),
    ('Free fall', KinematicParameters(x0=100.0, v0=0.0, a=-9.81, t1=4.0, dt=0.01)),
    ('Coarse step', KinematicParameters(x0=0.0, v0=1.0, a=0.5, t1=20.0, dt=0.5)),
]

DEFAULT_TOLERANCE = 1e-3


@dataclass
class ValidationResult:
    """Result of one derivation compared with its analytic target."""
    quantity: str                  # series being reconstructed
    method: str                    # derivation used
    max_abs_error: float           # over all samples
    interior_max_abs_error: float  # boundary samples excluded
    tolerance: float

    @property
    def passed(self) -> bool:
        return self.interior_max_abs_error <= self.tolerance


def _errors(estimate: np.ndarray, target: np.ndarray):
    err = np.abs(np.asarray(estimate) - np.asarray(target))
    interior = err[1:-1] if len(err) > 2 else err
    return float(np.max(err)), float(np.max(interior))


def validate_against_analytic(params: KinematicParameters,
                              tolerance: float = DEFAULT_TOLERANCE,
                              verbose: bool = False) -> List[ValidationResult]:
    """
    Run each derivation on a generated trajectory and compare with the
    analytically generated series. Needs at least 3 samples.
    """
    traj = generate(params)
    dt = traj.dt

    checks = [
        ('velocity', 'central difference of x',
         velocity_from_position(traj.positions, dt), traj.velocities),
        ('acceleration', 'second difference of x',
         acceleration_from_position(traj.positions, dt), traj.accelerations),
        ('acceleration', 'central difference of v',
         acceleration_from_velocity(traj.velocities, dt), traj.accelerations),
        ('position', 'trapezoidal integral of v',
         position_from_velocity(traj.velocities, traj.positions[0], dt),
         traj.positions),
        ('velocity', 'Euler integral of a',
         velocity_from_acceleration(traj.accelerations, traj.velocities[0], dt),
         traj.velocities),
    ]

    results = []
    for quantity, method, estimate, target in checks:
        max_err, interior_err = _errors(estimate, target)
        results.append(ValidationResult(
            quantity=quantity,
            method=method,
            max_abs_error=max_err,
            interior_max_abs_error=interior_err,
            tolerance=tolerance,
        ))

    if verbose:
        print(f"  {'Quantity':<14} {'Method':<28} {'Max err':>12} "
              f"{'Interior err':>13} {'Status':>7}")
        print("  " + "-" * 78)
        for r in results:
            status = "✓ PASS" if r.passed else "✗ FAIL"
            print(f"  {r.quantity:<14} {r.method:<28} {r.max_abs_error:>12.3e} "
                  f"{r.interior_max_abs_error:>13.3e} {status:>7}")

    return results


def consistency_report(trajectory: Trajectory) -> Dict[str, float]:
    """
    Largest residual between each stored series and the same series
    re-derived from its neighbour. Zero-ish values mean the three series
    agree; after an edit some residual is expected because finite
    differences are lossy.
    """
    dt = trajectory.dt
    report = {}
    if trajectory.n_points >= 2:
        report['velocity_vs_position'] = float(np.max(np.abs(
            velocity_from_position(trajectory.positions, dt)
            - trajectory.velocities)))
        report['acceleration_vs_velocity'] = float(np.max(np.abs(
            acceleration_from_velocity(trajectory.velocities, dt)
            - trajectory.accelerations)))
        report['position_vs_velocity'] = float(np.max(np.abs(
            position_from_velocity(trajectory.velocities,
                                   trajectory.positions[0], dt)
            - trajectory.positions)))
    return report


def run_all_validations(verbose: bool = True) -> Dict[str, List[ValidationResult]]:
    """Run validation against all reference parameter sets."""
    all_results = {}
    for name, params in REFERENCE_CASES:
        if verbose:
            print(f"\n  {name}: x0={params.x0} v0={params.v0} a={params.a} "
                  f"t=[{params.t0}, {params.t1}] dt={params.dt}")
        all_results[name] = validate_against_analytic(params, verbose=verbose)
    return all_results
