"""Prometheus implementation of the MetricsRenderer protocol.

Wraps the monitor's CollectorRegistry so the embedding application's
scrape endpoint can serialize request, dependency and application-info
series in Prometheus text exposition format.
"""

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from http_monitor.core.protocols.metrics_renderer import MetricsRenderer


class PrometheusMetricsRenderer(MetricsRenderer):
    """Render all metrics in a CollectorRegistry."""

    def __init__(self, registry: CollectorRegistry) -> None:
        self._registry = registry

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_LATEST

    def generate(self) -> bytes:
        return generate_latest(self._registry)
