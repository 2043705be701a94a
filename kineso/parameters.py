"""
Input Parameters
================
Defines the parameter set for a full trajectory recompute and the
form-parsing rules applied before the generator is called.

Defaults reproduce the demo's input panel:
  v0 = 5 m/s, a = 2 m/s², window 0 → 10 s, dt = 0.1 s, at most 1000 points.
"""

import math
from dataclasses import dataclass, asdict
from typing import Mapping, Any

from .errors import InvalidStepError, InvertedWindowError


DEFAULT_MAX_POINTS = 1000

# Value substituted for an unparsable, missing or zero form field
FORM_FALLBACKS = {
    'x0': 0.0,
    'v0': 0.0,
    'a': 0.0,
    't0': 0.0,
    't1': 0.0,
    'dt': 0.1,
}


def _parse_float(raw: Any, fallback: float) -> float:
    """Parse a form value; anything falsy after parsing yields ``fallback``."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return fallback
    if math.isnan(value) or value == 0.0:
        return fallback
    return value


@dataclass
class KinematicParameters:
    """
    Complete specification of one constant-acceleration run.
    """
    x0: float = 0.0                   # m    initial position
    v0: float = 5.0                   # m/s  initial velocity
    a: float = 2.0                    # m/s² constant acceleration
    t0: float = 0.0                   # s    window start
    t1: float = 10.0                  # s    window end
    dt: float = 0.1                   # s    sample step
    max_points: int = DEFAULT_MAX_POINTS

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> 'KinematicParameters':
        """
        Build parameters from raw form values (strings or numbers).

        A field that is missing, unparsable, NaN or zero falls back to
        FORM_FALLBACKS, so a typed dt of 0 becomes 0.1.
        """
        values = {key: _parse_float(form.get(key), fallback)
                  for key, fallback in FORM_FALLBACKS.items()}

        max_points = DEFAULT_MAX_POINTS
        raw_max = form.get('max_points')
        if raw_max is not None:
            try:
                max_points = int(raw_max)
            except (TypeError, ValueError):
                max_points = DEFAULT_MAX_POINTS

        return cls(max_points=max_points, **values)

    def validate(self) -> None:
        """Reject parameter sets that cannot produce a trajectory."""
        if self.dt <= 0:
            raise InvalidStepError('Time step dt must be > 0')
        if self.t1 < self.t0:
            raise InvertedWindowError('End time must be >= start time')

    def as_dict(self) -> dict:
        return asdict(self)
