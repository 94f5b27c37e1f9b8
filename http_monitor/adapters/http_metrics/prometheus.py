"""Prometheus implementation of the HttpMetrics protocol.

Creates a dedicated CollectorRegistry unless one is passed, so each
Monitor owns its series and two monitors in one process never collide on
metric names.
"""

from typing import Sequence

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
)

from http_monitor.core.config import (
    DEFAULT_BUCKETS,
    validate_application_version,
    validate_buckets,
)
from http_monitor.schemas.dependency import DependencyStatus
from http_monitor.schemas.labels import REQUEST_LABEL_NAMES, RequestLabels


class PrometheusHttpMetrics:
    """Prometheus-backed request and dependency metrics."""

    def __init__(
        self,
        application_version: str,
        buckets: Sequence[float] = DEFAULT_BUCKETS,
        registry: CollectorRegistry | None = None,
    ) -> None:
        application_version = validate_application_version(application_version)
        buckets = validate_buckets(buckets)
        self._registry = registry or CollectorRegistry()

        self._request_duration = Histogram(
            "request_seconds",
            "Duration in seconds of HTTP requests.",
            REQUEST_LABEL_NAMES,
            buckets=buckets,
            registry=self._registry,
        )

        # prometheus_client exposes this as response_size_bytes_total.
        self._response_size = Counter(
            "response_size_bytes",
            "Counts the size of each HTTP response",
            REQUEST_LABEL_NAMES,
            registry=self._registry,
        )

        self._dependency_up = Gauge(
            "dependency_up",
            "Records if a dependency is up or down. 1 for up, 0 for down",
            ["name"],
            registry=self._registry,
        )

        self._dependency_request_duration = Histogram(
            "dependency_request_seconds",
            "Duration of dependency requests in seconds.",
            ("name", *REQUEST_LABEL_NAMES),
            buckets=buckets,
            registry=self._registry,
        )

        self._application_info = Gauge(
            "application_info",
            "Static information about the application",
            ["version"],
            registry=self._registry,
        )

        # Static value: set once.
        self._application_info.labels(version=application_version).set(1)

    @property
    def registry(self) -> CollectorRegistry:
        """Registry holding every series of this adapter."""
        return self._registry

    # -- HttpMetrics protocol methods --

    def observe_request(self, labels: RequestLabels, duration: float) -> None:
        self._request_duration.labels(**labels.as_dict()).observe(duration)

    def observe_response_size(self, labels: RequestLabels, size: int) -> None:
        self._response_size.labels(**labels.as_dict()).inc(size)

    def set_dependency_up(self, name: str, status: DependencyStatus) -> None:
        self._dependency_up.labels(name=name).set(int(status))

    def observe_dependency_request(
        self,
        name: str,
        labels: RequestLabels,
        duration: float,
    ) -> None:
        self._dependency_request_duration.labels(name=name, **labels.as_dict()).observe(duration)
