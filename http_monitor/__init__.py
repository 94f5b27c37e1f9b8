"""Prometheus request and dependency instrumentation for ASGI applications."""

from http_monitor.api.middleware import PrometheusMiddleware
from http_monitor.core.config import DEFAULT_BUCKETS, DEFAULT_ERROR_MESSAGE_KEY, MonitorSettings
from http_monitor.core.dependency_scheduler import DependencyCheckTask
from http_monitor.core.exceptions import ConfigurationError, MonitorError
from http_monitor.core.logging import configure_logging
from http_monitor.core.monitor import Monitor, is_status_error
from http_monitor.core.protocols import DependencyChecker
from http_monitor.schemas import DependencyStatus, RequestLabels

UP = DependencyStatus.UP
DOWN = DependencyStatus.DOWN

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_BUCKETS",
    "DEFAULT_ERROR_MESSAGE_KEY",
    "DOWN",
    "ConfigurationError",
    "DependencyCheckTask",
    "DependencyChecker",
    "DependencyStatus",
    "Monitor",
    "MonitorError",
    "MonitorSettings",
    "PrometheusMiddleware",
    "RequestLabels",
    "UP",
    "configure_logging",
    "is_status_error",
]
