"""Tests for health checks and request handling."""

from fastapi.testclient import TestClient

from facet_catalog.api.dependencies import get_service
from facet_catalog.main import app


def test_health_check(client: TestClient) -> None:
    """Test health endpoint returns healthy status."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "facet-catalog"
    assert "version" in data


def test_readiness_check(client: TestClient) -> None:
    """Test readiness endpoint returns ready status."""
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready"}


def test_request_id_echoed(client: TestClient) -> None:
    """Request ID header is echoed back."""
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_unhandled_error_envelope(client: TestClient) -> None:
    """Unhandled errors become a 500 in the common error format."""

    def broken_service():
        raise RuntimeError("database exploded")

    app.dependency_overrides[get_service] = broken_service
    failing_client = TestClient(app, raise_server_exceptions=False)

    response = failing_client.get("/facets")

    assert response.status_code == 500
    data = response.json()
    assert data["error_code"] == "INTERNAL_ERROR"
    assert data["message"] == "An internal error occurred"
    assert data["details"] == []
    assert "request_id" in data
