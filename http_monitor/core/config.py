"""Environment-driven monitor configuration."""

from typing import List, Optional, Sequence, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from http_monitor.core.exceptions import ConfigurationError

DEFAULT_ERROR_MESSAGE_KEY = "error-message"
DEFAULT_BUCKETS = (0.1, 0.3, 1.5, 10.5)


class MonitorSettings(BaseSettings):
    """Settings read from ``HTTP_MONITOR_*`` environment variables.

    Validation of the values themselves happens in ``Monitor`` so that
    explicitly passed arguments and settings share a single code path.
    """

    APPLICATION_VERSION: str = Field(default="")
    ERROR_MESSAGE_KEY: str = Field(default=DEFAULT_ERROR_MESSAGE_KEY)
    BUCKETS: List[float] = Field(default_factory=lambda: list(DEFAULT_BUCKETS))
    DEPENDENCY_CHECK_TIMEOUT: Optional[float] = Field(default=None, gt=0)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="HTTP_MONITOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


def validate_application_version(version: str) -> str:
    """Return ``version`` unchanged, or raise if it is blank."""
    if not version or not version.strip():
        raise ConfigurationError(
            "application version must be a non-empty string",
            config_key="APPLICATION_VERSION",
        )
    return version


def validate_buckets(buckets: Optional[Sequence[float]]) -> Tuple[float, ...]:
    """Return histogram upper bounds, falling back to ``DEFAULT_BUCKETS``.

    Bounds must be non-empty, non-negative and strictly ascending.
    """
    if buckets is None:
        return DEFAULT_BUCKETS

    bounds = tuple(float(b) for b in buckets)
    if not bounds:
        raise ConfigurationError("buckets must not be empty", config_key="BUCKETS")
    if any(b < 0 for b in bounds):
        raise ConfigurationError("buckets must be non-negative", config_key="BUCKETS", value=list(bounds))
    if any(later <= earlier for earlier, later in zip(bounds, bounds[1:])):
        raise ConfigurationError("buckets must be strictly ascending", config_key="BUCKETS", value=list(bounds))
    return bounds
