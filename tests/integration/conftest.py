"""Integration test fixtures.

This module provides shared fixtures for integration tests including:
- The full application (middleware chain and routes) behind a TestClient
- Servers bound to an ephemeral port for lifecycle tests
"""

from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from service_skeleton.platform.server import Server, ShutdownTrigger, create_app
from service_skeleton.platform.settings import ServerTimeouts, Settings

# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def stub_settings() -> Settings:
    """Create settings with canned test values and an ephemeral port."""
    return Settings(
        port=0,
        service_name="test-service",
        log_level="debug",
        environment="testing",
    )


@pytest.fixture
def stub_logger() -> Mock:
    """Create a logger stub that records every call."""
    return Mock()


@pytest.fixture
def fast_timeouts() -> ServerTimeouts:
    """Timeouts short enough for tests to exercise the deadlines."""
    return ServerTimeouts(idle=1.0, read=0.5, write=1.0, shutdown=1.0)


# =============================================================================
# FastAPI App Fixtures
# =============================================================================


@pytest.fixture
def test_app(stub_settings: Settings, stub_logger: Mock) -> FastAPI:
    """Create the full application, middleware chain included."""
    return create_app(stub_settings, stub_logger)


@pytest.fixture
def client(test_app: FastAPI) -> TestClient:
    """Create a test client for the test app."""
    return TestClient(test_app)


# =============================================================================
# Server Fixtures
# =============================================================================


@pytest.fixture
def trigger() -> ShutdownTrigger:
    """Programmatic shutdown trigger standing in for OS signals."""
    return ShutdownTrigger()


@pytest.fixture
def server(stub_settings: Settings, stub_logger: Mock, fast_timeouts: ServerTimeouts) -> Server:
    """Create a server bound to localhost on an ephemeral port."""
    return Server(stub_settings, stub_logger, timeouts=fast_timeouts, host="127.0.0.1")
