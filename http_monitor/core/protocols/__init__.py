"""Protocols the monitor depends on.

The middleware and scheduler talk to these instead of concrete classes so
tests can inject in-memory fakes.
"""

from http_monitor.core.protocols.dependency_checker import DependencyChecker
from http_monitor.core.protocols.http_metrics import HttpMetrics
from http_monitor.core.protocols.metrics_renderer import MetricsRenderer

__all__ = [
    "DependencyChecker",
    "HttpMetrics",
    "MetricsRenderer",
]
