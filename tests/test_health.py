"""Sanity tests for the FastAPI health endpoint."""

from fastapi.testclient import TestClient

from badge_registry.api.main import app


def test_health_returns_ok() -> None:
    client = TestClient(app)
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
