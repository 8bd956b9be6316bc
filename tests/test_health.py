"""Tests for health check endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient


def make_app(monkeypatch, limit: str = "2048"):
    """Create app with env configured via pytest monkeypatch."""
    monkeypatch.setenv("SIZEGATE_CONTENT_LENGTH_LIMIT", limit)

    # Import the app factory and clear cached settings
    from sizegate import daemon

    daemon.get_settings.cache_clear()
    app = daemon.create_daemon()
    return app


def test_liveness_probe_always_returns_200(monkeypatch):
    """Liveness probe (/health) always returns 200 if service is running."""
    app = make_app(monkeypatch)
    client = TestClient(app)

    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "alive"


def test_readiness_probe_reports_limit(monkeypatch):
    """Readiness probe returns the active Content-Length limit."""
    app = make_app(monkeypatch, limit="2048")
    client = TestClient(app)

    resp = client.get("/ready")
    assert resp.status_code == 200
    assert resp.json() == {
        "status": "ready",
        "content_length_limit": 2048,
        "limit_enabled": True,
    }


def test_readiness_probe_reports_disabled_limit(monkeypatch):
    app = make_app(monkeypatch, limit="0")
    client = TestClient(app)

    resp = client.get("/ready")
    assert resp.status_code == 200
    data = resp.json()
    assert data["content_length_limit"] == 0
    assert data["limit_enabled"] is False


def test_lifespan_logs_on_startup(monkeypatch, caplog):
    """Startup and shutdown run cleanly through the lifespan handler."""
    app = make_app(monkeypatch, limit="0")

    with caplog.at_level("INFO", logger="uvicorn.error"):
        with TestClient(app) as client:
            assert client.get("/health").status_code == 200

    messages = [r.getMessage() for r in caplog.records]
    assert "SizeGate is ready with the Content-Length limit disabled" in messages
    assert "SizeGate is shutting down." in messages
