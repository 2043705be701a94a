"""
Kinematics Session
==================
Owns the state of one interactive document: the current parameters, the
current Trajectory, the drag toggle and a debug log.

Lifecycle:
    session = KinematicsSession(drag_available=...)   # create on load
    session.recompute(params)                          # replace
    session.commit_drag('velocity', 12, 4.2)           # partial update
    session.close()                                    # dispose

``drag_available`` is resolved once by whoever creates the session (is an
interactive drag backend present?) and never changes afterwards.
"""

import time
from collections import deque
from typing import Any, Deque, Mapping, Optional

from .errors import IndexOutOfRangeError
from .export import csv_from_trajectory
from .generator import generate
from .parameters import KinematicParameters
from .rounding import round_fixed
from .sync import SERIES, apply_edit
from .trajectory import Trajectory, Sample


DRAG_ROUND = 6
LOG_LIMIT = 500  # newest lines kept in the debug log
NO_DATA_MESSAGE = 'No data points generated – check time interval and dt.'

# initial-condition field synced when the first sample of a series is edited
INITIAL_CONDITION_FIELD = {
    'position': 'x0',
    'velocity': 'v0',
    'acceleration': 'a',
}


class KinematicsSession:
    """
    Single-user controller between the input/drag UI and the kinematics core.
    """

    def __init__(self, drag_available: bool = False, verbose: bool = False,
                 params: Optional[KinematicParameters] = None):
        self.drag_available = bool(drag_available)
        self.verbose = verbose
        self.drag_enabled = False
        self.params = params if params is not None else KinematicParameters()
        self.trajectory: Optional[Trajectory] = Trajectory.empty(
            x0=self.params.x0, v0=self.params.v0, dt=self.params.dt)
        self.log_lines: Deque[str] = deque(maxlen=LOG_LIMIT)
        self._closed = False

        self.log('Drag support available' if self.drag_available
                 else 'Drag support unavailable; points are read-only')

    # ── Debug log ────────────────────────────────────────────────────────
    def log(self, message: str) -> None:
        line = f"{time.strftime('%H:%M:%S')} - {message}"
        self.log_lines.append(line)
        if self.verbose:
            print(f"  {line}")

    # ── Lifecycle ────────────────────────────────────────────────────────
    def _require_open(self) -> Trajectory:
        if self._closed:
            raise RuntimeError('Session is closed')
        return self.trajectory

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self.trajectory = None
        self._closed = True
        self.log('Session closed')

    # ── Full recompute ───────────────────────────────────────────────────
    def recompute(self, params: Optional[KinematicParameters] = None) -> Trajectory:
        """
        Validate ``params`` and replace the trajectory with a fresh one.

        Raises InvalidStepError / InvertedWindowError before anything is
        replaced.
        """
        self._require_open()
        params = params if params is not None else self.params
        params.validate()

        trajectory = generate(params)
        self.params = params
        self.trajectory = trajectory

        self.log(f"Form params: {params.as_dict()}")
        self.log(f"Computed points: {trajectory.n_points}")
        if trajectory.is_empty:
            self.log(NO_DATA_MESSAGE)
        return trajectory

    def update_from_form(self, form: Mapping[str, Any]) -> Trajectory:
        """Parse raw form values and recompute."""
        return self.recompute(KinematicParameters.from_form(form))

    # ── Dragging ─────────────────────────────────────────────────────────
    @property
    def can_drag(self) -> bool:
        return self.drag_available and self.drag_enabled

    def set_drag_enabled(self, enabled: bool) -> None:
        self.drag_enabled = bool(enabled)
        if enabled and not self.drag_available:
            self.log('Drag requested but no drag support is available')

    def drag_options(self, series: str) -> dict:
        """Drag configuration for the chart showing ``series``."""
        if series not in SERIES:
            raise ValueError(
                f"Unknown series '{series}'. Available: {list(SERIES)}"
            )
        movable = self.can_drag
        return {
            'series': series,
            'round': DRAG_ROUND,
            'drag_x': False,
            'drag_y': movable,
            'show_tooltip': movable,
        }

    def preview_drag(self, series: str, index: int, value: float) -> Sample:
        """Readout while a point is being dragged; nothing is recomputed."""
        trajectory = self._require_open()
        t, x, v, a = trajectory.sample(index)
        if series == 'position':
            return (t, value, v, a)
        if series == 'velocity':
            return (t, x, value, a)
        if series == 'acceleration':
            return (t, x, v, value)
        raise ValueError(f"Unknown series '{series}'. Available: {list(SERIES)}")

    def commit_drag(self, series: str, index: int, value: float) -> Sample:
        """
        Apply a finished drag and return the readout at ``index``.

        Editing index 0 also updates the matching initial-condition
        parameter so the next recompute starts from the dragged value.
        """
        trajectory = self._require_open()
        if not self.can_drag:
            raise RuntimeError('Dragging is disabled for this session')

        value = round_fixed(value, DRAG_ROUND)
        apply_edit(series, index, value, trajectory)
        self.log(f"Drag {series}[{index}] = {value}")

        if index == 0:
            field_name = INITIAL_CONDITION_FIELD[series]
            current = {
                'position': trajectory.positions,
                'velocity': trajectory.velocities,
                'acceleration': trajectory.accelerations,
            }[series]
            setattr(self.params, field_name, round_fixed(current[0], DRAG_ROUND))
            self.log(f"Initial condition {field_name} set to "
                     f"{getattr(self.params, field_name)}")

        return trajectory.sample(index)

    # ── Read side ────────────────────────────────────────────────────────
    def readout(self, index: int = 0) -> Optional[Sample]:
        """(t, x, v, a) at ``index``; None when there is no data."""
        trajectory = self._require_open()
        if trajectory.is_empty:
            return None
        try:
            return trajectory.sample(index)
        except IndexOutOfRangeError:
            self.log(f"Readout index {index} out of range")
            raise

    def snapshot(self) -> Trajectory:
        """Copy of the current trajectory for renderers."""
        return self._require_open().copy()

    def export_csv(self) -> str:
        return csv_from_trajectory(self._require_open())
