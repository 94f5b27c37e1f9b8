"""HTTP metrics adapters."""

from http_monitor.adapters.http_metrics.fake import FakeHttpMetrics
from http_monitor.adapters.http_metrics.prometheus import PrometheusHttpMetrics

__all__ = ["PrometheusHttpMetrics", "FakeHttpMetrics"]
