"""
Numerical Integration Engine
=============================
Two cumulative integrators that rebuild a series from its derivative:

1. **Trapezoidal rule** — position from velocity.
       x_k = x_{k-1} + ½ (v_{k-1} + v_k) dt
   Exact whenever v is linear between samples.
2. **Forward Euler** (1st order) — velocity from acceleration.
       v_k = v_{k-1} + a_{k-1} dt
   Only the preceding sample contributes, so a single edited acceleration
   sample shifts every later velocity by the same amount.

The two methods are intentionally different; velocity is NOT integrated
with the trapezoidal rule.
"""

import numpy as np
from scipy.integrate import cumulative_trapezoid


def position_from_velocity(vs, x0: float, dt: float) -> np.ndarray:
    """
    Trapezoidal integration of velocity samples, anchored at ``x0``.

    Parameters
    ----------
    vs : array-like
        Velocity samples (m/s) at uniform spacing.
    x0 : float
        Position at the first sample (m).
    dt : float
        Sample spacing (s).

    Returns
    -------
    np.ndarray
        Positions (m), same length as ``vs``.
    """
    vs = np.asarray(vs, dtype=float)
    if len(vs) == 0:
        return np.empty(0)
    if len(vs) == 1:
        return np.array([float(x0)])
    return x0 + cumulative_trapezoid(vs, dx=dt, initial=0.0)


def velocity_from_acceleration(as_, v0: float, dt: float) -> np.ndarray:
    """
    Forward-Euler integration of acceleration samples, anchored at ``v0``.

    The last acceleration sample never contributes.
    """
    as_ = np.asarray(as_, dtype=float)
    n = len(as_)
    if n == 0:
        return np.empty(0)

    vs = np.empty(n)
    vs[0] = v0
    vs[1:] = v0 + np.cumsum(as_[:-1] * dt)
    return vs
