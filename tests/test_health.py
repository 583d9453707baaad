import logging

from fastapi.testclient import TestClient

from fitdash.config import settings
from fitdash.main import app


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to fitdash", "status": "healthy"}


def test_health_and_ready(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/ready").json() == {"status": "ready"}


def test_security_headers(client):
    response = client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_protected_route_requires_token(client):
    response = client.get("/api/v1/profiles/me")
    assert response.status_code == 401
    assert response.json() == {"detail": "Not authenticated"}
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_non_bearer_scheme_rejected(client):
    response = client.get("/api/v1/profiles/me", headers={"Authorization": "Basic bWlhOnNlY3JldA=="})
    assert response.status_code == 401
    assert response.json()["detail"] == "Not authenticated"


def test_invalid_token_rejected(client):
    response = client.get("/api/v1/profiles/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"


def test_startup_logs_missing_configuration(monkeypatch, caplog):
    monkeypatch.setattr(settings, "ai_gateway_api_key", None)
    monkeypatch.setattr(settings, "supabase_service_role_key", None)
    with caplog.at_level(logging.INFO, logger="fitdash.main"):
        with TestClient(app) as test_client:
            assert test_client.get("/health").status_code == 200
    messages = [r.getMessage() for r in caplog.records if r.name == "fitdash.main"]
    assert any(m.startswith("fitdash starting") for m in messages)
    assert any("AI_GATEWAY_API_KEY is not set; /api/v1/suggest-exercises" in m for m in messages)
    assert any("SUPABASE_SERVICE_ROLE_KEY is not set" in m for m in messages)
    assert messages[-1] == "fitdash shutting down"
