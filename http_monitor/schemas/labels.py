"""Label set attached to every request and dependency observation."""

from dataclasses import dataclass

# Exposed label names, in declaration order.
REQUEST_LABEL_NAMES = ("protocol", "status", "method", "route", "isError", "errorMessage")


@dataclass(frozen=True)
class RequestLabels:
    """The six-tuple identifying one request series.

    All fields are strings because they are written verbatim as
    Prometheus label values.
    """

    protocol: str
    status: str
    method: str
    route: str
    is_error: str
    error_message: str

    def as_dict(self) -> dict[str, str]:
        """Map to exposed label names (``isError``, ``errorMessage``)."""
        return {
            "protocol": self.protocol,
            "status": self.status,
            "method": self.method,
            "route": self.route,
            "isError": self.is_error,
            "errorMessage": self.error_message,
        }
