from __future__ import annotations

import asyncio
import math
from uuid import UUID

import pytest

from knowledge_api.core.models.card import ReactionKind
from knowledge_api.core.services.card_service import build_pagination


def _card(client, user, title="Tip", **extra):
    payload = {"title": title, "content": "Some useful content", "category": "howto", **extra}
    response = client.post("/api/cards", headers=user.headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["card"]


def test_create_card_records_author_name(client, ann):
    card = _card(client, ann, tags=["a", "b", "a"])
    assert card["authorId"] == ann.id
    assert card["authorName"] == "Ann"
    assert card["tags"] == ["a", "b"]
    assert card["likes"] == 0
    assert card["bookmarks"] == 0


def test_card_validation(client, ann):
    missing = client.post("/api/cards", headers=ann.headers, json={"title": "t", "content": " ", "category": "x"})
    assert missing.status_code == 400

    too_many_tags = client.post(
        "/api/cards",
        headers=ann.headers,
        json={"title": "t", "content": "c", "category": "x", "tags": [f"t{i}" for i in range(11)]},
    )
    assert too_many_tags.status_code == 400
    assert too_many_tags.json()["error"] == "Cannot have more than 10 tags"


def test_listing_is_public_and_excludes_drafts(client, ann):
    _card(client, ann, "Published")
    _card(client, ann, "Draft", isDraft=True)

    response = client.get("/api/cards")
    assert response.status_code == 200
    assert [c["title"] for c in response.json()["cards"]] == ["Published"]


def test_listing_filters_by_category_and_search(client, ann):
    _card(client, ann, "Python tips", category="code")
    _card(client, ann, "Gardening", category="home")

    by_category = client.get("/api/cards", params={"category": "home"}).json()["cards"]
    assert [c["title"] for c in by_category] == ["Gardening"]

    by_search = client.get("/api/cards", params={"search": "PYTHON"}).json()["cards"]
    assert [c["title"] for c in by_search] == ["Python tips"]


@pytest.mark.parametrize("page", [1, 2, 3, 4])
def test_pagination_is_consistent(client, ann, page):
    for i in range(7):
        _card(client, ann, f"Card {i}")
    limit = 3

    body = client.get("/api/cards", params={"page": page, "limit": limit}).json()
    pagination = body["pagination"]
    total = pagination["total"]

    assert total == 7
    assert len(body["cards"]) == max(0, min(limit, total - (page - 1) * limit))
    assert pagination["totalPages"] == math.ceil(total / limit)
    assert pagination["hasNext"] == (page < pagination["totalPages"])
    assert pagination["hasPrev"] == (page > 1)


def test_build_pagination_for_empty_collection():
    assert build_pagination(1, 10, 0) == {
        "page": 1,
        "limit": 10,
        "total": 0,
        "total_pages": 0,
        "has_next": False,
        "has_prev": False,
    }


def test_pagination_parameters_are_bounded(client):
    assert client.get("/api/cards", params={"page": 0}).status_code == 400
    assert client.get("/api/cards", params={"limit": 101}).status_code == 400


def test_like_and_bookmark_toggle(client, ann, bob):
    card = _card(client, ann)

    liked = client.post(f"/api/cards/{card['id']}/like", headers=bob.headers).json()
    assert liked == {"success": True, "active": True, "count": 1}
    assert client.post(f"/api/cards/{card['id']}/like", headers=ann.headers).json()["count"] == 2

    unliked = client.post(f"/api/cards/{card['id']}/like", headers=bob.headers).json()
    assert unliked["active"] is False
    assert unliked["count"] == 1

    bookmarked = client.post(f"/api/cards/{card['id']}/bookmark", headers=bob.headers).json()
    assert bookmarked["active"] is True
    assert client.get(f"/api/cards/{card['id']}").json()["card"]["bookmarks"] == 1


def test_reaction_requires_auth_and_existing_card(client, ann):
    card = _card(client, ann)
    assert client.post(f"/api/cards/{card['id']}/like").status_code == 401
    assert client.post("/api/cards/00000000-0000-0000-0000-000000000000/like", headers=ann.headers).status_code == 404


def test_only_author_may_modify(client, ann, bob):
    card = _card(client, ann)

    assert client.put(f"/api/cards/{card['id']}", headers=bob.headers, json={"title": "Hijack"}).status_code == 403
    assert client.delete(f"/api/cards/{card['id']}", headers=bob.headers).status_code == 403

    updated = client.put(f"/api/cards/{card['id']}", headers=ann.headers, json={"title": "Better tip"})
    assert updated.status_code == 200
    assert updated.json()["card"]["title"] == "Better tip"


def test_delete_card_leaves_no_reactions(client, repos, ann, bob):
    card = _card(client, ann)
    for user in (ann, bob):
        client.post(f"/api/cards/{card['id']}/like", headers=user.headers)
        client.post(f"/api/cards/{card['id']}/bookmark", headers=user.headers)

    response = client.delete(f"/api/cards/{card['id']}", headers=ann.headers)
    assert response.status_code == 200
    assert client.get(f"/api/cards/{card['id']}").status_code == 404

    card_id = UUID(card["id"])
    assert asyncio.run(repos.reactions.count_for_card(ReactionKind.LIKE, card_id)) == 0
    assert asyncio.run(repos.reactions.count_for_card(ReactionKind.BOOKMARK, card_id)) == 0
