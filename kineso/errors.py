"""
Error Taxonomy
==============
Failures raised by the kinematics core. All of them are local and
synchronous; nothing here is retried.

Generation with ``dt <= 0`` is NOT an error inside the generator (it returns
an empty trajectory). ``InvalidStepError`` is raised by caller-level
validation before the generator is reached.
"""


class KinematicsError(Exception):
    """Base class for every kinematics core failure."""


class InvalidStepError(KinematicsError, ValueError):
    """Time step dt must be > 0."""


class InvertedWindowError(KinematicsError, ValueError):
    """End time lies before start time."""


class InsufficientSamplesError(KinematicsError, ValueError):
    """A finite-difference formula needs more samples than were given."""

    def __init__(self, name: str, required: int, given: int):
        self.required = required
        self.given = given
        super().__init__(
            f"{name} needs at least {required} samples, got {given}"
        )


class IndexOutOfRangeError(KinematicsError, IndexError):
    """Edit index outside [0, N)."""

    def __init__(self, index: int, n_points: int):
        self.index = index
        self.n_points = n_points
        super().__init__(
            f"Index {index} out of range for trajectory with {n_points} points"
        )
