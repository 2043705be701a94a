"""
Finite-Difference Differentiators
=================================
Derive one kinematic series from another sampled at uniform step dt.

  velocity_from_position      v ≈ dx/dt   (central interior, one-sided ends)
  acceleration_from_velocity  a ≈ dv/dt   (same scheme)
  acceleration_from_position  a ≈ d²x/dt² (second difference)

The second-difference boundary does not use a one-sided stencil: indices
0 and N-1 repeat the value of their nearest interior neighbour, i.e. the
stencil over samples [0, 1, 2] and [N-3, N-2, N-1].
"""

import numpy as np

from .errors import InsufficientSamplesError


def _as_series(values) -> np.ndarray:
    return np.asarray(values, dtype=float)


def _first_difference(values: np.ndarray, dt: float) -> np.ndarray:
    # edge_order=1: forward at 0, backward at N-1, central elsewhere
    return np.gradient(values, dt, edge_order=1)


def velocity_from_position(xs, dt: float) -> np.ndarray:
    """
    Estimate velocity from position samples.

    vs[i]   = (xs[i+1] - xs[i-1]) / (2 dt)    interior
    vs[0]   = (xs[1] - xs[0]) / dt
    vs[N-1] = (xs[N-1] - xs[N-2]) / dt
    """
    xs = _as_series(xs)
    if len(xs) < 2:
        raise InsufficientSamplesError('velocity_from_position', 2, len(xs))
    return _first_difference(xs, dt)


def acceleration_from_velocity(vs, dt: float) -> np.ndarray:
    """Estimate acceleration from velocity samples (same stencil as above)."""
    vs = _as_series(vs)
    if len(vs) < 2:
        raise InsufficientSamplesError('acceleration_from_velocity', 2, len(vs))
    return _first_difference(vs, dt)


def acceleration_from_position(xs, dt: float) -> np.ndarray:
    """
    Estimate acceleration from position samples.

    as[i] = (xs[i+1] - 2 xs[i] + xs[i-1]) / dt²  for 1 <= i <= N-2
    as[0] = as[1], as[N-1] = as[N-2]
    """
    xs = _as_series(xs)
    if len(xs) < 3:
        raise InsufficientSamplesError('acceleration_from_position', 3, len(xs))

    interior = (xs[2:] - 2.0 * xs[1:-1] + xs[:-2]) / (dt * dt)
    return np.concatenate((interior[:1], interior, interior[-1:]))
