"""Application settings and configuration.

This module provides the Pydantic settings class for application configuration,
loaded from environment variables, plus the fixed timeouts of the HTTP server.
"""

import logging
import re
from dataclasses import dataclass
from enum import StrEnum

import pydantic_settings
from pydantic import Field, ValidationError, field_validator

from service_skeleton.platform.errors import ConfigError


class LogLevel(StrEnum):
    """Log verbosity accepted in ``LOG_LEVEL``."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def logging_level(self) -> int:
        """The matching stdlib logging level."""
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


_PORT_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_log_level(value: object) -> LogLevel:
    """Parse a log level name, falling back to INFO for anything unrecognised."""
    if isinstance(value, LogLevel):
        return value
    try:
        return LogLevel(str(value).strip().lower())
    except ValueError:
        return LogLevel.INFO


class Settings(pydantic_settings.BaseSettings):
    model_config = pydantic_settings.SettingsConfigDict(frozen=True)

    port: int = Field(8080)
    service_name: str = Field("service")
    log_level: LogLevel = Field(LogLevel.INFO)
    environment: str = Field("development")

    @field_validator("port", mode="before")
    @classmethod
    def _parse_port(cls, v):
        # Optional sign and decimal digits, nothing else
        if isinstance(v, str) and not _PORT_PATTERN.fullmatch(v):
            raise ValueError(f"not an integer: {v!r}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_log_level(cls, v):
        return parse_log_level(v)


def load_settings(**overrides) -> Settings:
    """Load settings from the environment.

    Args:
        **overrides: Field values that take precedence over the environment

    Returns:
        The immutable settings instance

    Raises:
        ConfigError: If ``PORT`` is set but is not an integer
    """
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        error = exc.errors()[0]
        key = ".".join(str(part) for part in error["loc"]).upper() or None
        raise ConfigError(error["msg"], key=key) from exc


@dataclass(frozen=True)
class ServerTimeouts:
    """Timeouts applied by the HTTP server.

    Attributes:
        idle: Keep-alive timeout between requests on one connection, in seconds
        read: Time allowed to receive a request body, in seconds
        write: Time allowed for each response write to a client, in seconds
        shutdown: Deadline for draining in-flight requests on shutdown, in seconds
    """

    idle: float = 60.0
    read: float = 5.0
    write: float = 10.0
    shutdown: float = 30.0
