"""Smoke tests for FastAPI app startup and /health endpoint."""

from fastapi.testclient import TestClient

from app.main import app


client = TestClient(app)


def test_health_returns_ok():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "version" in data


def test_health_version_matches_app():
    response = client.get("/health")
    data = response.json()
    assert data["version"] == app.version


def test_lifespan_creates_and_closes_session():
    with TestClient(app) as c:
        assert app.state.session is not None
        response = c.get("/messages")
        assert response.status_code == 200
        assert len(response.json()["messages"]) == 1
    assert app.state.session is None


def test_routes_without_session_are_unavailable():
    app.state.session = None
    response = client.get("/tracks")
    assert response.status_code == 503
