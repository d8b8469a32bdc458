from __future__ import annotations

from knowledge_api.config import settings


def test_sidebar_stats(client, ann):
    client.post("/api/notes", headers=ann.headers, json={"title": "One"})
    client.post("/api/chats", headers=ann.headers, json={"title": "Chat"})

    response = client.get("/api/stats", headers=ann.headers)
    assert response.status_code == 200
    assert response.json()["stats"] == {"workspaces": 1, "notes": 1, "documents": 0, "chats": 1}


def test_stats_requires_auth(client):
    assert client.get("/api/stats").status_code == 401


def test_health_reports_checks(client, monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "sk-configured-for-tests")

    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == settings.service_name
    assert set(body["checks"]) == {"database", "environment", "openai", "jwt"}
    assert body["checks"]["database"] == {"status": "ok", "message": "Connected"}
    assert body["responseTime"].endswith("ms")


def test_health_warns_on_placeholders(client, monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "your-openai-key")
    monkeypatch.setattr(settings, "jwt_secret", "short")

    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "warning"
    assert body["checks"]["openai"]["status"] == "warning"
    assert body["checks"]["jwt"]["status"] == "warning"


def test_health_unhealthy_when_database_unreachable(client, repos):
    repos.database.reachable = False

    response = client.get("/api/health")
    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "unhealthy"
    assert body["checks"]["database"]["status"] == "error"


def test_security_headers(client):
    response = client.get("/api/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "frame-ancestors 'none'" in response.headers["Content-Security-Policy"]
