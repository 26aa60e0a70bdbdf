"""Unit tests for the service exception hierarchy."""

import pytest

from service_skeleton.platform.errors import (
    ConfigError,
    ForcedShutdownError,
    ListenError,
    ServiceError,
    ShutdownError,
    ShutdownTimeoutError,
    WriteTimeoutError,
)


class TestHierarchy:
    """All errors share the ServiceError base."""

    @pytest.mark.parametrize(
        "error",
        [
            ConfigError("bad"),
            ListenError("bad"),
            ShutdownTimeoutError(30.0),
            ForcedShutdownError("SIGINT"),
            WriteTimeoutError(10.0),
        ],
    )
    def test_is_service_error(self, error: Exception):
        assert isinstance(error, ServiceError)

    def test_shutdown_errors(self):
        """Timeout and forced shutdowns are both shutdown errors."""
        assert issubclass(ShutdownTimeoutError, ShutdownError)
        assert issubclass(ForcedShutdownError, ShutdownError)
        assert not issubclass(ListenError, ShutdownError)


class TestMessages:
    """Errors carry their context in attributes and messages."""

    def test_config_error_with_key(self):
        error = ConfigError("not an integer", key="PORT")
        assert error.key == "PORT"
        assert str(error) == "Invalid configuration for PORT: not an integer"

    def test_config_error_without_key(self):
        assert str(ConfigError("broken")) == "Invalid configuration: broken"

    def test_listen_error_with_address(self):
        error = ListenError("address already in use", address="0.0.0.0:8080")
        assert error.address == "0.0.0.0:8080"
        assert "0.0.0.0:8080" in str(error)
        assert "address already in use" in str(error)

    def test_shutdown_timeout_error(self):
        error = ShutdownTimeoutError(30.0, pending=2)
        assert error.timeout_seconds == 30.0
        assert error.pending == 2
        assert "30.0s" in str(error)

    def test_forced_shutdown_error(self):
        error = ForcedShutdownError("SIGTERM", pending=1)
        assert error.reason == "SIGTERM"
        assert "SIGTERM" in str(error)

    def test_write_timeout_error(self):
        error = WriteTimeoutError(10.0)
        assert error.timeout_seconds == 10.0
        assert "10.0s" in str(error)
