"""
KINESO — Constant-Acceleration Kinematics with Editable Trajectories
====================================================================
Computes position, velocity and acceleration over a time window for
constant acceleration, and keeps the three series consistent when any
single point of one of them is edited:
  - Closed-form trajectory generation (rounded, truncated at max_points)
  - Finite-difference differentiators (central interior, one-sided ends)
  - Trapezoidal and forward-Euler integrators
  - Edit propagation across the three series
  - CSV / table export and matplotlib charts
"""

from .errors import (
    KinematicsError, InvalidStepError, InvertedWindowError,
    InsufficientSamplesError, IndexOutOfRangeError,
)
from .parameters import KinematicParameters, DEFAULT_MAX_POINTS
from .rounding import to_fixed, round_fixed
from .trajectory import Trajectory
from .generator import compute_kinematics, generate
from .differentiator import (
    velocity_from_position, acceleration_from_position,
    acceleration_from_velocity,
)
from .integrator import position_from_velocity, velocity_from_acceleration
from .sync import SERIES, apply_edit, propagate
from .session import KinematicsSession
from .export import csv_from_trajectory, write_csv, format_table, format_readout
from .validation import (
    validate_against_analytic, consistency_report, run_all_validations,
)
from .visualization import (
    plot_motion, plot_series, plot_edit_comparison, plot_dashboard,
)

__version__ = "1.0.0"
__all__ = [
    'KinematicsError', 'InvalidStepError', 'InvertedWindowError',
    'InsufficientSamplesError', 'IndexOutOfRangeError',
    'KinematicParameters', 'DEFAULT_MAX_POINTS', 'to_fixed', 'round_fixed',
    'Trajectory',
    'compute_kinematics', 'generate',
    'velocity_from_position', 'acceleration_from_position',
    'acceleration_from_velocity',
    'position_from_velocity', 'velocity_from_acceleration',
    'SERIES', 'apply_edit', 'propagate',
    'KinematicsSession',
    'csv_from_trajectory', 'write_csv', 'format_table', 'format_readout',
    'validate_against_analytic', 'consistency_report', 'run_all_validations',
    'plot_motion', 'plot_series', 'plot_edit_comparison', 'plot_dashboard',
]
