"""Fake HttpMetrics for testing.

Records all calls in memory so tests can assert on metrics behaviour
without reaching into prometheus-client internals.
"""

from dataclasses import dataclass

from http_monitor.schemas.dependency import DependencyStatus
from http_monitor.schemas.labels import RequestLabels


@dataclass
class RequestRecord:
    """Single observed request."""

    labels: RequestLabels
    duration: float


@dataclass
class ResponseSizeRecord:
    """Single observed response size."""

    labels: RequestLabels
    size: int


@dataclass
class DependencyRequestRecord:
    """Single observed dependency call."""

    name: str
    labels: RequestLabels
    duration: float


class FakeHttpMetrics:
    """In-memory spy implementing the HttpMetrics protocol.

    Usage:
        fake = FakeHttpMetrics()
        # … inject into Monitor(metrics=fake) …
        assert len(fake.requests) == 1
        assert fake.dependency_up == {"postgres": DependencyStatus.UP}
    """

    def __init__(self) -> None:
        self.requests: list[RequestRecord] = []
        self.response_sizes: list[ResponseSizeRecord] = []
        self.dependency_up: dict[str, DependencyStatus] = {}
        self.dependency_up_history: list[tuple[str, DependencyStatus]] = []
        self.dependency_requests: list[DependencyRequestRecord] = []

    def observe_request(self, labels: RequestLabels, duration: float) -> None:
        self.requests.append(RequestRecord(labels, duration))

    def observe_response_size(self, labels: RequestLabels, size: int) -> None:
        self.response_sizes.append(ResponseSizeRecord(labels, size))

    def set_dependency_up(self, name: str, status: DependencyStatus) -> None:
        self.dependency_up[name] = status
        self.dependency_up_history.append((name, status))

    def observe_dependency_request(
        self,
        name: str,
        labels: RequestLabels,
        duration: float,
    ) -> None:
        self.dependency_requests.append(DependencyRequestRecord(name, labels, duration))

    # -- test helpers --

    def clear(self) -> None:
        """Reset all recorded state."""
        self.requests.clear()
        self.response_sizes.clear()
        self.dependency_up.clear()
        self.dependency_up_history.clear()
        self.dependency_requests.clear()
