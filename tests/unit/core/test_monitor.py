"""Unit tests for the Monitor facade."""

import pytest
from prometheus_client import CollectorRegistry

from http_monitor import DEFAULT_BUCKETS, DEFAULT_ERROR_MESSAGE_KEY, Monitor, is_status_error
from http_monitor.adapters.http_metrics import FakeHttpMetrics, PrometheusHttpMetrics
from http_monitor.api.middleware import PrometheusMiddleware
from http_monitor.core.config import MonitorSettings
from http_monitor.core.exceptions import ConfigurationError
from http_monitor.core.protocols import HttpMetrics


class TestConstruction:
    @pytest.mark.parametrize("version", ["", " ", "\t"])
    def test_blank_version_fails_without_side_effects(self, version):
        registry = CollectorRegistry()

        with pytest.raises(ConfigurationError) as exc_info:
            Monitor(version, registry=registry)

        assert exc_info.value.details["config_key"] == "APPLICATION_VERSION"
        assert list(registry.collect()) == []

    @pytest.mark.parametrize("buckets", [[], [0.5, 0.1], [0.1, 0.1], [-1.0, 1.0]])
    def test_invalid_buckets_fail_without_side_effects(self, buckets):
        registry = CollectorRegistry()

        with pytest.raises(ConfigurationError):
            Monitor("v1.0.0", buckets=buckets, registry=registry)

        assert list(registry.collect()) == []

    def test_application_info_is_one(self):
        registry = CollectorRegistry()
        Monitor("v1.0.0", registry=registry)

        assert registry.get_sample_value("application_info", {"version": "v1.0.0"}) == 1.0

    def test_defaults(self):
        monitor = Monitor("v1.0.0")

        assert monitor.error_message_key == DEFAULT_ERROR_MESSAGE_KEY == "error-message"
        assert monitor.buckets == DEFAULT_BUCKETS == (0.1, 0.3, 1.5, 10.5)
        assert monitor.is_status_error is is_status_error
        assert isinstance(monitor.metrics, HttpMetrics)

    def test_blank_error_key_falls_back_to_default(self):
        monitor = Monitor("v1.0.0", error_message_key="  ")
        assert monitor.error_message_key == "error-message"

    def test_monitors_own_their_registries(self):
        first = Monitor("v1.0.0")
        second = Monitor("v1.0.0")

        assert first.registry is not second.registry

    def test_injected_metrics_are_used(self):
        fake = FakeHttpMetrics()
        monitor = Monitor("v1.0.0", metrics=fake)

        assert monitor.metrics is fake

    def test_injected_prometheus_adapter_shares_its_registry(self):
        registry = CollectorRegistry()
        adapter = PrometheusHttpMetrics("v1.2.3", registry=registry)

        monitor = Monitor("v1.2.3", metrics=adapter)

        assert monitor.registry is registry
        assert 'application_info{version="v1.2.3"} 1.0' in monitor.renderer.generate().decode()

    def test_injected_fake_renders_passed_registry(self):
        registry = CollectorRegistry()

        monitor = Monitor("v1.0.0", metrics=FakeHttpMetrics(), registry=registry)

        assert monitor.registry is registry

    def test_prometheus_wraps_app(self):
        async def app(scope, receive, send):
            pass

        monitor = Monitor("v1.0.0")
        wrapped = monitor.prometheus(app)

        assert isinstance(wrapped, PrometheusMiddleware)
        assert wrapped.app is app
        assert wrapped.monitor is monitor

    def test_renderer_serializes_own_registry(self):
        monitor = Monitor("v9.9.9")

        output = monitor.renderer.generate().decode()

        assert 'application_info{version="v9.9.9"} 1.0' in output


class TestFromSettings:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("HTTP_MONITOR_APPLICATION_VERSION", "v2.0.0")
        monkeypatch.setenv("HTTP_MONITOR_ERROR_MESSAGE_KEY", "x-error")
        monkeypatch.setenv("HTTP_MONITOR_BUCKETS", "[0.5, 2.0]")
        monkeypatch.setenv("HTTP_MONITOR_DEPENDENCY_CHECK_TIMEOUT", "3")

        monitor = Monitor.from_settings()

        assert monitor.application_version == "v2.0.0"
        assert monitor.error_message_key == "x-error"
        assert monitor.buckets == (0.5, 2.0)
        assert monitor.check_timeout == 3.0

    def test_overrides_win(self):
        registry = CollectorRegistry()
        settings = MonitorSettings(APPLICATION_VERSION="v1.0.0")

        monitor = Monitor.from_settings(settings, application_version="v1.2.0", registry=registry)

        assert registry.get_sample_value("application_info", {"version": "v1.2.0"}) == 1.0
        assert monitor.registry is registry

    def test_missing_version_fails(self, monkeypatch):
        monkeypatch.delenv("HTTP_MONITOR_APPLICATION_VERSION", raising=False)

        with pytest.raises(ConfigurationError):
            Monitor.from_settings(MonitorSettings())


class TestCollectDependencyTime:
    def test_records_exactly_one_observation(self):
        registry = CollectorRegistry()
        monitor = Monitor("v1.0.0", registry=registry)

        monitor.collect_dependency_time("svc", "http", "200", "GET", "/x", "false", "", 0.42)

        labels = {
            "name": "svc",
            "protocol": "http",
            "status": "200",
            "method": "GET",
            "route": "/x",
            "isError": "false",
            "errorMessage": "",
        }
        assert registry.get_sample_value("dependency_request_seconds_count", labels) == 1.0
        assert registry.get_sample_value("dependency_request_seconds_sum", labels) == pytest.approx(0.42)
        assert registry.get_sample_value("dependency_request_seconds_bucket", {**labels, "le": "0.3"}) == 0.0
        assert registry.get_sample_value("dependency_request_seconds_bucket", {**labels, "le": "1.5"}) == 1.0

    def test_passes_labels_through_unchanged(self):
        fake = FakeHttpMetrics()
        monitor = Monitor("v1.0.0", metrics=fake)

        monitor.collect_dependency_time("billing", "grpc", "14", "Charge", "/billing.Charge", "true", "unavailable", 1.5)

        record = fake.dependency_requests[0]
        assert record.name == "billing"
        assert record.labels.protocol == "grpc"
        assert record.labels.status == "14"
        assert record.labels.method == "Charge"
        assert record.labels.route == "/billing.Charge"
        assert record.labels.is_error == "true"
        assert record.labels.error_message == "unavailable"
        assert record.duration == 1.5


class TestIsStatusError:
    @pytest.mark.parametrize(
        "status, expected",
        [(100, True), (199, True), (200, False), (204, False), (399, False), (400, True), (500, True)],
    )
    def test_default_classifier(self, status, expected):
        assert is_status_error(status) is expected
