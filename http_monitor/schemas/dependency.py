"""Dependency liveness states."""

from enum import IntEnum


class DependencyStatus(IntEnum):
    """Liveness of an external dependency.

    The integer value is what lands in the ``dependency_up`` gauge.
    """

    DOWN = 0
    UP = 1
