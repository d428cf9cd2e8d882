"""Tests for liveness and readiness endpoints."""

from unittest.mock import patch

from fastapi.testclient import TestClient

from localization.core.exceptions import StoreUnavailableError


def test_health(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_ready_when_store_is_reachable(client: TestClient):
    response = client.get("/ready")

    assert response.status_code == 200
    assert response.json()["status"] == "ready"


def test_ready_returns_503_when_store_is_down(client: TestClient):
    with patch(
        "localization.api.routes.health.check_connection",
        side_effect=StoreUnavailableError("OperationalError"),
    ):
        response = client.get("/ready")

    assert response.status_code == 503
    assert response.json()["error_code"] == "STORE_UNAVAILABLE"
    assert response.json()["details"] == {"retryable": True}
