"""
Kinematics Generator
====================
Samples the closed-form constant-acceleration solution

    x(t) = x0 + v0·t + ½·a·t²
    v(t) = v0 + a·t
    a(t) = a

at t = t0, t0+dt, t0+2dt, … up to t1 (inclusive, with a small tolerance
for floating accumulation). Stored values are rounded to 8 decimals, ties
away from zero (see ``rounding``), to suppress floating noise.

Generation stops silently once ``max_points`` samples exist.
"""

from .parameters import KinematicParameters, DEFAULT_MAX_POINTS
from .rounding import round_fixed
from .trajectory import Trajectory


ROUND_DECIMALS = 8
END_TOLERANCE = 1e-12


def compute_kinematics(x0: float, v0: float, a: float, t0: float, t1: float,
                       dt: float,
                       max_points: int = DEFAULT_MAX_POINTS) -> Trajectory:
    """
    Build a fresh Trajectory for constant acceleration.

    ``dt <= 0`` returns an empty trajectory instead of raising; the caller
    decides how to report it.
    """
    if dt <= 0:
        return Trajectory.empty(x0=x0, v0=v0, dt=dt)

    history = []
    t = t0
    while t <= t1 + END_TOLERANCE and len(history) < max_points:
        x = x0 + v0 * t + 0.5 * a * t * t
        v = v0 + a * t
        history.append((round_fixed(t, ROUND_DECIMALS),
                        round_fixed(x, ROUND_DECIMALS),
                        round_fixed(v, ROUND_DECIMALS),
                        round_fixed(a, ROUND_DECIMALS)))
        # repeated addition, not t0 + k*dt
        t += dt

    if not history:
        return Trajectory.empty(x0=x0, v0=v0, dt=dt)

    times, xs, vs, accs = zip(*history)
    return Trajectory(times=times, positions=xs, velocities=vs,
                      accelerations=accs, x0=x0, v0=v0, dt=dt)


def generate(params: KinematicParameters) -> Trajectory:
    """compute_kinematics() over a parameter set."""
    return compute_kinematics(params.x0, params.v0, params.a,
                              params.t0, params.t1, params.dt,
                              max_points=params.max_points)
