"""Exceptions raised by http_monitor."""

from typing import Any, Dict, Optional


class MonitorError(Exception):
    """Base exception class for http_monitor."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary representation."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(MonitorError):
    """Raised when the monitor is constructed with an invalid configuration."""

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs,
    ) -> None:
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, details=details, **kwargs)
