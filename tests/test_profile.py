from __future__ import annotations

from uuid import UUID


def test_update_profile(client, ann):
    response = client.put(
        "/api/profile",
        headers=ann.headers,
        json={"name": "Ann Lee", "bio": "Reads a lot", "favoriteTopics": ["ai", "ai", " go "], "theme": "dark"},
    )
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["name"] == "Ann Lee"
    assert user["bio"] == "Reads a lot"
    assert user["favoriteTopics"] == ["ai", "go"]
    assert user["theme"] == "dark"
    assert user["email"] == "ann@x.com"


def test_update_profile_rejects_unknown_theme(client, ann):
    response = client.put("/api/profile", headers=ann.headers, json={"theme": "sepia"})
    assert response.status_code == 400


def test_profile_stats_count_own_content(client, ann):
    client.post("/api/notes", headers=ann.headers, json={"title": "First"})
    client.post("/api/notes", headers=ann.headers, json={"title": "Second"})
    card = client.post(
        "/api/cards", headers=ann.headers, json={"title": "Tip", "content": "Use tags", "category": "howto"}
    ).json()["card"]
    client.post(f"/api/cards/{card['id']}/like", headers=ann.headers)

    response = client.get("/api/profile/stats", headers=ann.headers)
    assert response.status_code == 200
    assert response.json()["stats"] == {
        "notes": 2,
        "documents": 0,
        "workspaces": 1,
        "cards": 1,
        "bookmarks": 0,
        "likes": 1,
    }


def _card(client, user, title):
    response = client.post(
        "/api/cards", headers=user.headers, json={"title": title, "content": "Worth reading", "category": "howto"}
    )
    assert response.status_code == 201, response.text
    return response.json()["card"]


def test_activity_lists_recent_bookmarks(client, repos, ann, bob):
    first = _card(client, bob, "Indexing tips")
    second = _card(client, bob, "Prompt patterns")
    liked = _card(client, bob, "Only liked")
    client.post(f"/api/cards/{first['id']}/bookmark", headers=ann.headers)
    client.post(f"/api/cards/{second['id']}/bookmark", headers=ann.headers)
    client.post(f"/api/cards/{liked['id']}/like", headers=ann.headers)

    response = client.get("/api/profile/activity", headers=ann.headers)
    assert response.status_code == 200
    activities = response.json()["activities"]
    assert [a["title"] for a in activities] == ["Prompt patterns", "Indexing tips"]
    assert {a["type"] for a in activities} == {"bookmarked"}
    assert activities[0]["category"] == "howto"
    assert activities[0]["cardId"] == second["id"]

    repos.cards.store.delete(UUID(first["id"]))
    titles = [a["title"] for a in client.get("/api/profile/activity", headers=ann.headers).json()["activities"]]
    assert titles == ["Prompt patterns", "Unknown Card"]

    assert client.get("/api/profile/activity", headers=bob.headers).json()["activities"] == []
    assert client.get("/api/profile/activity").status_code == 401
