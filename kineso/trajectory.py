"""
Trajectory State
================
The single in-memory record of one simulation run: four index-aligned
series (time, position, velocity, acceleration) plus the initial
conditions and step size they were generated with.

Renderers read it (or a ``copy()``); only the generator creates one and
only the edit-propagation protocol mutates one.
"""

import operator

import numpy as np
from dataclasses import dataclass
from typing import Iterator, Tuple

from .errors import IndexOutOfRangeError


Sample = Tuple[float, float, float, float]


@dataclass
class Trajectory:
    """Sampled constant-acceleration trajectory."""
    # Arrays — each has shape (N,)
    times: np.ndarray
    positions: np.ndarray
    velocities: np.ndarray
    accelerations: np.ndarray

    x0: float = 0.0           # position at times[0] (m)
    v0: float = 0.0           # velocity at times[0] (m/s)
    dt: float = 0.1           # uniform step (s)

    def __post_init__(self):
        self.times = np.asarray(self.times, dtype=float)
        self.positions = np.asarray(self.positions, dtype=float)
        self.velocities = np.asarray(self.velocities, dtype=float)
        self.accelerations = np.asarray(self.accelerations, dtype=float)

        lengths = {len(self.times), len(self.positions),
                   len(self.velocities), len(self.accelerations)}
        if len(lengths) != 1:
            raise ValueError(
                f"Trajectory series must have equal length, got "
                f"times={len(self.times)}, positions={len(self.positions)}, "
                f"velocities={len(self.velocities)}, "
                f"accelerations={len(self.accelerations)}"
            )

    @classmethod
    def empty(cls, x0: float = 0.0, v0: float = 0.0,
              dt: float = 0.1) -> 'Trajectory':
        """N = 0 trajectory ("no data generated")."""
        return cls(times=np.empty(0), positions=np.empty(0),
                   velocities=np.empty(0), accelerations=np.empty(0),
                   x0=x0, v0=v0, dt=dt)

    def __len__(self) -> int:
        return len(self.times)

    @property
    def n_points(self) -> int:
        return len(self.times)

    @property
    def is_empty(self) -> bool:
        return len(self.times) == 0

    @property
    def duration(self) -> float:
        """Covered time span (s); 0 for fewer than two samples."""
        if len(self.times) < 2:
            return 0.0
        return float(self.times[-1] - self.times[0])

    def check_index(self, index: int) -> int:
        """
        Return ``index`` if it addresses a sample, else raise.

        Only integers qualify (numpy integers included); floats and bools
        raise TypeError before the range check.
        """
        if isinstance(index, (bool, np.bool_)):
            raise TypeError(f"Sample index must be an integer, not {index!r}")
        index = operator.index(index)
        if not 0 <= index < len(self.times):
            raise IndexOutOfRangeError(index, len(self.times))
        return index

    def sample(self, index: int) -> Sample:
        """(t, x, v, a) at one index — the readout."""
        i = self.check_index(index)
        return (float(self.times[i]), float(self.positions[i]),
                float(self.velocities[i]), float(self.accelerations[i]))

    def rows(self) -> Iterator[Sample]:
        for i in range(len(self.times)):
            yield (float(self.times[i]), float(self.positions[i]),
                   float(self.velocities[i]), float(self.accelerations[i]))

    def copy(self) -> 'Trajectory':
        """Independent snapshot; mutating it never touches this one."""
        return Trajectory(
            times=self.times.copy(),
            positions=self.positions.copy(),
            velocities=self.velocities.copy(),
            accelerations=self.accelerations.copy(),
            x0=self.x0, v0=self.v0, dt=self.dt,
        )

    def summary(self) -> str:
        """Human-readable summary string."""
        if self.is_empty:
            return "Trajectory: no data points"

        lines = [
            f"╔══════════════════════════════════════════════════════╗",
            f"║  TRAJECTORY SUMMARY{'':<34s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Points       : {self.n_points:<36d} ║",
            f"║  Timestep     : {self.dt:<36.4f} ║",
            f"║  Window       : {self.times[0]:>10.3f} → {self.times[-1]:<10.3f} s{'':<11s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  x(t0)        : {self.positions[0]:>14.3f} m{'':<20s} ║",
            f"║  x(t1)        : {self.positions[-1]:>14.3f} m{'':<20s} ║",
            f"║  v(t0)        : {self.velocities[0]:>14.3f} m/s{'':<18s} ║",
            f"║  v(t1)        : {self.velocities[-1]:>14.3f} m/s{'':<18s} ║",
            f"║  a(t0)        : {self.accelerations[0]:>14.3f} m/s²{'':<17s} ║",
            f"╚══════════════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)
