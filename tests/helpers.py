from __future__ import annotations

from fastapi.testclient import TestClient  # noqa: TCH002


def signup(client: TestClient, name: str, email: str, password: str = "secret1") -> dict:
    response = client.post("/api/auth/signup", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
