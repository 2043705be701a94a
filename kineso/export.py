"""
Export Formats
==============
Text renditions of a Trajectory:

  - CSV export (6 decimals, fixed header) — the download format
  - results table (3 decimals: time, velocity, distance)
  - single-sample readout (3 decimals)
"""

import os
from typing import Optional, Sequence

from .rounding import to_fixed
from .trajectory import Trajectory


CSV_HEADER = ('t (s)', 'x (m)', 'v (m/s)', 'a (m/s^2)')
CSV_DECIMALS = 6
TABLE_DECIMALS = 3


def csv_from_trajectory(trajectory: Trajectory) -> str:
    """
    Serialize as ``t,x,v,a`` rows.

    Lines are joined with '\\n'; there is no newline after the last row.
    An empty trajectory yields the header line alone.
    """
    lines = [','.join(CSV_HEADER)]
    for row in trajectory.rows():
        lines.append(','.join(to_fixed(value, CSV_DECIMALS) for value in row))
    return '\n'.join(lines)


def write_csv(trajectory: Trajectory, path: str = 'outputs/kinematics.csv') -> str:
    """Write the CSV export to ``path`` and return the path."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, 'w', encoding='utf-8', newline='') as fh:
        fh.write(csv_from_trajectory(trajectory))
    return path


def format_table(trajectory: Trajectory) -> str:
    """Fixed-width results table: Time (s), Vel (m/s), Dist (m)."""
    lines = [
        f"{'Time (s)':<10} {'Vel (m/s)':>12} {'Dist (m)':>12}",
        "-" * 36,
    ]
    for t, x, v, _ in trajectory.rows():
        t, x, v = (to_fixed(value, TABLE_DECIMALS) for value in (t, x, v))
        lines.append(f"{t:<10} {v:>12} {x:>12}")
    return '\n'.join(lines)


def format_readout(sample: Optional[Sequence[Optional[float]]]) -> str:
    """``t=… x=… v=… a=…`` for one sample; missing values print as '-'."""
    labels = ('t', 'x', 'v', 'a')
    if sample is None:
        sample = (None, None, None, None)

    parts = []
    for label, value in zip(labels, sample):
        if isinstance(value, (int, float)):
            parts.append(f"{label}={to_fixed(value, TABLE_DECIMALS)}")
        else:
            parts.append(f"{label}=-")
    return '  '.join(parts)
