"""Metrics renderer adapters."""

from http_monitor.adapters.metrics_renderer.prometheus import PrometheusMetricsRenderer

__all__ = ["PrometheusMetricsRenderer"]
