"""Service platform infrastructure module.

This module provides the infrastructure the service is built on:
- Settings loaded from the environment
- Error hierarchy
- FastAPI server, middleware and lifecycle
- Structured logging
"""

from service_skeleton.platform.errors import (
    ConfigError,
    ForcedShutdownError,
    ListenError,
    ServiceError,
    ShutdownError,
    ShutdownTimeoutError,
    WriteTimeoutError,
)
from service_skeleton.platform.settings import LogLevel, ServerTimeouts, Settings, load_settings

__all__ = [
    # Configuration
    "LogLevel",
    "ServerTimeouts",
    "Settings",
    "load_settings",
    # Errors
    "ConfigError",
    "ForcedShutdownError",
    "ListenError",
    "ServiceError",
    "ShutdownError",
    "ShutdownTimeoutError",
    "WriteTimeoutError",
]
