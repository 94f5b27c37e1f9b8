"""Unit tests for the package logger."""

import logging

from http_monitor.core.logging import LOGGER_NAME, ContextFormatter, configure_logging, logger


class TestContextualLogger:
    def test_with_context_merges_fields(self):
        child = logger.with_context(operation="dependency_check").with_context(dependency="redis")

        assert child.extra == {"operation": "dependency_check", "dependency": "redis"}
        assert logger.extra == {}

    def test_records_carry_context(self, caplog):
        child = logger.with_context(dependency="postgres")

        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            child.warning("Dependency check failed: refused")

        record = caplog.records[-1]
        assert record.getMessage() == "Dependency check failed: refused"
        assert record.context == {"dependency": "postgres"}


class TestContextFormatter:
    def test_appends_context(self):
        record = logging.LogRecord(LOGGER_NAME, logging.INFO, "", 0, "started", (), None)
        record.context = {"dependency": "redis", "period": 30}

        formatted = ContextFormatter("%(message)s").format(record)

        assert formatted == "started [dependency=redis period=30]"

    def test_no_context(self):
        record = logging.LogRecord(LOGGER_NAME, logging.INFO, "", 0, "started", (), None)

        assert ContextFormatter("%(message)s").format(record) == "started"


class TestConfigureLogging:
    def test_installs_single_handler(self):
        base = logging.getLogger(LOGGER_NAME)
        before = list(base.handlers)
        try:
            configure_logging("debug")
            configure_logging(logging.INFO)

            added = [h for h in base.handlers if h not in before]
            assert len(added) <= 1
            assert base.level == logging.INFO
        finally:
            for handler in [h for h in base.handlers if h not in before]:
                base.removeHandler(handler)
            base.setLevel(logging.NOTSET)
