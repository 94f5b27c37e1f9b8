"""DependencyChecker protocol for periodic liveness sampling.

Checkers are supplied by the embedding application; one wraps a single
downstream service (database, cache, another API) and reports whether it
is currently reachable.
"""

from typing import Awaitable, Protocol, Union, runtime_checkable

from http_monitor.schemas.dependency import DependencyStatus


@runtime_checkable
class DependencyChecker(Protocol):
    """Protocol for a single dependency liveness check.

    ``check()`` may be a plain method or a coroutine function.  Plain
    methods run in a worker thread so a slow check never stalls the event
    loop.  Raising from ``check()`` is allowed; the scheduler records the
    dependency as down.
    """

    @property
    def name(self) -> str:
        """Value of the ``name`` label on ``dependency_up``."""
        ...

    def check(self) -> Union[DependencyStatus, Awaitable[DependencyStatus]]:
        """Probe the dependency and return ``UP`` or ``DOWN``."""
        ...
