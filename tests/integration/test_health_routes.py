"""Integration tests for the liveness and readiness endpoints.

Tests the /health and /ready endpoints through the full middleware chain.
"""

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from service_skeleton.platform.server import create_app
from service_skeleton.platform.server.responses import JSON_MEDIA_TYPE
from service_skeleton.platform.settings import Settings


class TestHealthEndpoint:
    """Tests for GET /health endpoint."""

    def test_health_returns_ok(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_health_content_type(self, client: TestClient):
        response = client.get("/health")

        assert response.headers["content-type"] == JSON_MEDIA_TYPE

    @pytest.mark.parametrize(
        "settings",
        [
            Settings(port=1, service_name="a", log_level="error", environment="production"),
            Settings(port=65535, service_name="", log_level="nonsense", environment=""),
        ],
    )
    def test_health_independent_of_configuration(self, settings: Settings):
        """Health is ok whatever the configuration."""
        client = TestClient(create_app(settings, Mock()))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_health_rejects_other_methods(self, client: TestClient):
        assert client.post("/health").status_code == 405


class TestReadyEndpoint:
    """Tests for GET /ready endpoint."""

    def test_ready_returns_ready(self, client: TestClient):
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready"}
        assert response.headers["content-type"] == JSON_MEDIA_TYPE

    def test_ready_rejects_other_methods(self, client: TestClient):
        assert client.delete("/ready").status_code == 405


class TestRouteTable:
    """Only the two probes are exposed."""

    @pytest.mark.parametrize("path", ["/", "/docs", "/openapi.json", "/metrics", "/info"])
    def test_unknown_paths_not_found(self, client: TestClient, path: str):
        assert client.get(path).status_code == 404

    def test_app_state(self, test_app, stub_settings: Settings, stub_logger: Mock):
        assert test_app.state.settings is stub_settings
        assert test_app.state.logger is stub_logger
