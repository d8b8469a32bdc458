"""Sign up, sign in and bearer token handling over HTTP."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt

from helpers import auth_headers, signup
from knowledge_api import dependencies
from knowledge_api.config import settings
from knowledge_api.core.security import decode_access_token


def test_signup_login_profile_scenario(client):
    body = signup(client, "Ann", "ann@x.com", "secret1")
    assert body["success"] is True
    assert body["user"]["email"] == "ann@x.com"
    assert "passwordHash" not in body["user"]

    duplicate = client.post("/api/auth/signup", json={"name": "Ann", "email": "ann@x.com", "password": "secret1"})
    assert duplicate.status_code == 409
    assert duplicate.json() == {
        "success": False,
        "error": "An account with this email already exists",
        "code": "EMAIL_EXISTS",
    }

    wrong = client.post("/api/auth/login", json={"email": "ann@x.com", "password": "not-it"})
    assert wrong.status_code == 401
    assert wrong.json()["code"] == "INVALID_PASSWORD"

    ok = client.post("/api/auth/login", json={"email": "ann@x.com", "password": "secret1"})
    assert ok.status_code == 200
    token = ok.json()["token"]

    profile = client.get("/api/profile", headers=auth_headers(token))
    assert profile.status_code == 200
    assert profile.json()["user"]["email"] == "ann@x.com"


def test_signup_token_identifies_created_user(client):
    body = signup(client, "Carol", "carol@x.com")
    claims = decode_access_token(body["token"])
    assert str(claims.id) == body["user"]["id"]
    assert claims.email == "carol@x.com"


def test_signup_normalizes_email_case(client):
    body = signup(client, "Dana", "Dana@X.com")
    assert body["user"]["email"] == "dana@x.com"

    duplicate = client.post("/api/auth/signup", json={"name": "Dana", "email": "DANA@x.com", "password": "secret1"})
    assert duplicate.status_code == 409


def test_signup_validation_errors(client):
    short_password = client.post("/api/auth/signup", json={"name": "Eve", "email": "eve@x.com", "password": "123"})
    assert short_password.status_code == 400
    assert short_password.json()["code"] == "VALIDATION_ERROR"

    short_name = client.post("/api/auth/signup", json={"name": "E", "email": "eve@x.com", "password": "secret1"})
    assert short_name.status_code == 400
    assert short_name.json()["error"] == "Name must be at least 2 characters"

    bad_email = client.post("/api/auth/signup", json={"name": "Eve", "email": "not-an-email", "password": "secret1"})
    assert bad_email.status_code == 400


def test_login_unknown_email_is_not_found(client):
    response = client.post("/api/auth/login", json={"email": "nobody@x.com", "password": "secret1"})
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_me_returns_current_user(client, ann):
    response = client.get("/api/auth/me", headers=ann.headers)
    assert response.status_code == 200
    assert response.json()["user"]["id"] == ann.id


def test_missing_token_is_rejected_without_writes(client, repos):
    writes_before = repos.notes.store.writes + repos.workspaces.store.writes + repos.cards.store.writes

    responses = [
        client.post("/api/notes", json={"title": "Nope"}),
        client.post("/api/workspaces", json={"name": "Nope"}),
        client.post("/api/cards", json={"title": "t", "content": "c", "category": "x"}),
    ]

    for response in responses:
        assert response.status_code == 401
        assert response.json()["success"] is False
        assert response.json()["code"] == "UNAUTHORIZED"
        assert response.headers["WWW-Authenticate"] == "Bearer"
    assert repos.notes.store.writes + repos.workspaces.store.writes + repos.cards.store.writes == writes_before


def test_malformed_and_mis_signed_tokens(client, ann):
    malformed = client.get("/api/profile", headers=auth_headers("not-a-jwt"))
    assert malformed.status_code == 401
    assert malformed.json()["error"] == "Invalid token format"

    forged = jwt.encode(
        {"sub": ann.id, "exp": datetime.now(UTC) + timedelta(hours=1)},
        "some-other-secret-of-reasonable-length-000000",
        algorithm="HS256",
    )
    response = client.get("/api/profile", headers=auth_headers(forged))
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


def test_expired_token_has_distinct_code(client, ann):
    expired = jwt.encode(
        {"sub": ann.id, "email": "ann@x.com", "exp": datetime.now(UTC) - timedelta(minutes=1)},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    response = client.get("/api/profile", headers=auth_headers(expired))
    assert response.status_code == 401
    assert response.json()["code"] == "TOKEN_EXPIRED"


def test_login_is_rate_limited(client, monkeypatch):
    monkeypatch.setattr(settings, "enable_rate_limiting", True)
    monkeypatch.setattr(settings, "max_login_attempts", 3)

    for _ in range(3):
        response = client.post("/api/auth/login", json={"email": "ghost@x.com", "password": "secret1"})
        assert response.status_code == 404

    limited = client.post("/api/auth/login", json={"email": "ghost@x.com", "password": "secret1"})
    assert limited.status_code == 429
    assert limited.json()["code"] == "RATE_LIMITED"
    assert int(limited.headers["Retry-After"]) >= 1


def test_rate_limit_log_forgets_idle_clients(monkeypatch):
    monkeypatch.setattr(settings, "login_attempt_window", 10)
    monkeypatch.setattr(dependencies, "_SWEEP_AT", 3)
    dependencies.reset_rate_limits()

    for i in range(3):
        assert dependencies._retry_after(f"login:10.0.0.{i}", 100.0) is None
    assert dependencies._retry_after("login:10.0.0.9", 200.0) is None

    assert list(dependencies._attempts) == ["login:10.0.0.9"]
    dependencies.reset_rate_limits()
