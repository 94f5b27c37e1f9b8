"""Value types shared by the middleware, adapters and dependency checkers."""

from http_monitor.schemas.dependency import DependencyStatus
from http_monitor.schemas.labels import RequestLabels

__all__ = ["DependencyStatus", "RequestLabels"]
