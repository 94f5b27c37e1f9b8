"""Package logger.

Everything in http_monitor logs through ``logger`` below.  Call
``logger.with_context(...)`` to get a child logger whose records carry
extra structured fields; ``configure_logging`` attaches a handler that
renders those fields after the message.
"""

import logging
import sys
from typing import Any, MutableMapping

LOGGER_NAME = "http_monitor"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter carrying a dict of context fields."""

    def __init__(self, logger: logging.Logger, extra: dict[str, Any] | None = None) -> None:
        super().__init__(logger, dict(extra or {}))

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(self.extra)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = {"context": extra}
        return msg, kwargs

    def with_context(self, **context: Any) -> "ContextualLogger":
        """Return a new logger with ``context`` merged into the current fields."""
        return ContextualLogger(self.logger, {**self.extra, **context})


class ContextFormatter(logging.Formatter):
    """Append bound context as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = getattr(record, "context", None)
        if context:
            fields = " ".join(f"{key}={value}" for key, value in context.items())
            message = f"{message} [{fields}]"
        return message


def configure_logging(level: int | str = logging.INFO) -> None:
    """Attach a stream handler to the package logger.

    Safe to call more than once; the handler is installed only once.
    """
    base = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    base.setLevel(level)

    if not any(getattr(h, "_http_monitor", False) for h in base.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ContextFormatter(_FORMAT))
        handler._http_monitor = True  # type: ignore[attr-defined]
        base.addHandler(handler)


logger = ContextualLogger(logging.getLogger(LOGGER_NAME))
