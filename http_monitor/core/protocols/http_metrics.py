"""HttpMetrics protocol for request and dependency instrumentation.

Abstracts metric collection so the middleware and dependency scheduler
depend on a protocol rather than a concrete library.  Production uses
Prometheus; tests inject a fake that records calls in memory.
"""

from typing import Protocol, runtime_checkable

from http_monitor.schemas.dependency import DependencyStatus
from http_monitor.schemas.labels import RequestLabels


@runtime_checkable
class HttpMetrics(Protocol):
    """Protocol for HTTP request/response metrics collection."""

    def observe_request(self, labels: RequestLabels, duration: float) -> None:
        """Record the latency of a completed request.

        Args:
            labels: Request label set.
            duration: Request duration in seconds.
        """
        ...

    def observe_response_size(self, labels: RequestLabels, size: int) -> None:
        """Add the number of response body bytes sent."""
        ...

    def set_dependency_up(self, name: str, status: DependencyStatus) -> None:
        """Set the liveness gauge of dependency ``name``."""
        ...

    def observe_dependency_request(
        self,
        name: str,
        labels: RequestLabels,
        duration: float,
    ) -> None:
        """Record the latency of one call made to dependency ``name``."""
        ...
