"""Monitor: the single object an application wires in to get request metrics.

Owns the metrics adapter, exposes the ASGI middleware, the dependency
liveness scheduler and a manual recorder for dependency call latency.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from prometheus_client import CollectorRegistry
from starlette.types import ASGIApp

from http_monitor.adapters.http_metrics.prometheus import PrometheusHttpMetrics
from http_monitor.adapters.metrics_renderer.prometheus import PrometheusMetricsRenderer
from http_monitor.api import middleware
from http_monitor.api.routing import RouteResolver, StarletteRouteResolver
from http_monitor.core.config import (
    DEFAULT_ERROR_MESSAGE_KEY,
    MonitorSettings,
    validate_application_version,
    validate_buckets,
)
from http_monitor.core.dependency_scheduler import DependencyCheckTask
from http_monitor.core.logging import configure_logging, logger
from http_monitor.core.protocols.dependency_checker import DependencyChecker
from http_monitor.core.protocols.http_metrics import HttpMetrics
from http_monitor.core.protocols.metrics_renderer import MetricsRenderer
from http_monitor.schemas.labels import RequestLabels


def is_status_error(status_code: int) -> bool:
    """Default classifier: anything outside 2xx/3xx is an error."""
    return status_code < 200 or status_code >= 400


class Monitor:
    """Request and dependency instrumentation for an ASGI application.

    Usage:
        monitor = Monitor("v1.0.0")
        app.add_middleware(PrometheusMiddleware, monitor=monitor)
        monitor.add_dependency_checker(PostgresChecker(), period=30)

    Construction validates everything before a single series is
    registered, so a ``ConfigurationError`` leaves no trace in the
    registry.

    With ``metrics`` injected, ``registry`` and ``renderer`` use the
    adapter's own ``registry`` when it has one. Otherwise they cover the
    passed registry, or an empty one.
    """

    def __init__(
        self,
        application_version: str,
        error_message_key: str = DEFAULT_ERROR_MESSAGE_KEY,
        buckets: Sequence[float] | None = None,
        *,
        is_status_error: Callable[[int], bool] = is_status_error,
        registry: CollectorRegistry | None = None,
        metrics: HttpMetrics | None = None,
        route_resolver: RouteResolver | None = None,
        check_timeout: float | None = None,
    ) -> None:
        self.application_version = validate_application_version(application_version)
        self.buckets = validate_buckets(buckets)

        if not error_message_key or not error_message_key.strip():
            error_message_key = DEFAULT_ERROR_MESSAGE_KEY
        self.error_message_key = error_message_key

        self.is_status_error = is_status_error
        self.route_resolver: RouteResolver = route_resolver or StarletteRouteResolver()
        self.check_timeout = check_timeout

        if metrics is None:
            registry = registry or CollectorRegistry()
            metrics = PrometheusHttpMetrics(
                self.application_version,
                buckets=self.buckets,
                registry=registry,
            )
        elif registry is None:
            registry = getattr(metrics, "registry", None) or CollectorRegistry()
        self._registry = registry
        self.metrics: HttpMetrics = metrics
        self._renderer = PrometheusMetricsRenderer(self._registry)
        self._checkers: list[DependencyCheckTask] = []

    @classmethod
    def from_settings(cls, settings: MonitorSettings | None = None, **overrides: Any) -> Monitor:
        """Build a monitor from ``HTTP_MONITOR_*`` settings.

        Also configures package logging at ``LOG_LEVEL``.  Keyword
        ``overrides`` are passed to the constructor and win over
        settings (e.g. ``registry=``, ``is_status_error=``).
        """
        settings = settings or MonitorSettings()
        configure_logging(settings.LOG_LEVEL)
        kwargs: dict[str, Any] = {
            "application_version": settings.APPLICATION_VERSION,
            "error_message_key": settings.ERROR_MESSAGE_KEY,
            "buckets": settings.BUCKETS,
            "check_timeout": settings.DEPENDENCY_CHECK_TIMEOUT,
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    @property
    def renderer(self) -> MetricsRenderer:
        """Serializer for the embedding application's /metrics endpoint."""
        return self._renderer

    # -- middleware --

    def prometheus(self, app: ASGIApp) -> ASGIApp:
        """Wrap ``app`` with the request metrics middleware."""
        return middleware.PrometheusMiddleware(app, monitor=self)

    def set_error_message(self, request: Any, message: str) -> None:
        """Label the current request's observation with ``message``."""
        middleware.set_error_message(request, message, self.error_message_key)

    # -- dependencies --

    def collect_dependency_time(
        self,
        name: str,
        protocol: str,
        status: str,
        method: str,
        route: str,
        is_error: str,
        error_message: str,
        seconds: float,
    ) -> None:
        """Record the duration of one request made to a dependency."""
        labels = RequestLabels(
            protocol=protocol,
            status=status,
            method=method,
            route=route,
            is_error=is_error,
            error_message=error_message,
        )
        self.metrics.observe_dependency_request(name, labels, seconds)

    def add_dependency_checker(
        self,
        checker: DependencyChecker,
        period: float,
        *,
        timeout: float | None = None,
    ) -> DependencyCheckTask:
        """Check ``checker`` every ``period`` seconds in the background.

        Must be called from a running event loop (typically an app lifespan
        handler).  The returned task is also stopped by ``Monitor.stop()``.
        """
        task = DependencyCheckTask(
            checker,
            self.metrics,
            period,
            timeout=timeout if timeout is not None else self.check_timeout,
        )
        task.start()
        self._checkers.append(task)
        return task

    async def stop(self) -> None:
        """Stop every dependency checker started by this monitor."""
        tasks, self._checkers = self._checkers, []
        for task in tasks:
            try:
                await task.stop()
            except Exception as e:
                logger.warning(f"Failed to stop dependency checker {task.name}: {e}")
