from __future__ import annotations

from uuid import uuid4


def _create(client, user, name="Research", **extra):
    response = client.post("/api/workspaces", headers=user.headers, json={"name": name, **extra})
    assert response.status_code == 201, response.text
    return response.json()["workspace"]


def test_create_workspace_makes_caller_owner(client, ann):
    workspace = _create(client, ann, description="Papers", tags=["ml", "ml", ""], settings={"visibility": "public"})

    assert workspace["name"] == "Research"
    assert workspace["ownerId"] == ann.id
    assert workspace["isOwner"] is True
    assert workspace["role"] == "owner"
    assert workspace["memberCount"] == 1
    assert workspace["tags"] == ["ml"]
    assert workspace["settings"]["visibility"] == "public"
    assert workspace["settings"]["allowMemberInvites"] is False
    assert workspace["members"][0]["userId"] == ann.id


def test_create_workspace_requires_name(client, ann):
    response = client.post("/api/workspaces", headers=ann.headers, json={"name": "   "})
    assert response.status_code == 400
    assert response.json()["error"] == "Workspace name is required"


def test_list_and_count_only_member_workspaces(client, ann, bob):
    _create(client, ann, "One")
    _create(client, ann, "Two")
    _create(client, bob, "Bob's")

    listed = client.get("/api/workspaces", headers=ann.headers).json()["workspaces"]
    assert sorted(w["name"] for w in listed) == ["One", "Two"]
    assert client.get("/api/workspaces/count", headers=ann.headers).json()["count"] == 2


def test_get_workspace_includes_counts(client, ann):
    workspace = _create(client, ann)
    client.post("/api/notes", headers=ann.headers, json={"title": "A", "workspaceId": workspace["id"]})

    response = client.get(f"/api/workspaces/{workspace['id']}", headers=ann.headers)
    assert response.status_code == 200
    assert response.json()["workspace"]["counts"] == {"notes": 1, "documents": 0, "members": 1}

    counts = client.get(f"/api/workspaces/{workspace['id']}/counts", headers=ann.headers)
    assert counts.json()["counts"]["notes"] == 1


def test_non_member_is_forbidden_and_unknown_is_not_found(client, ann, bob):
    workspace = _create(client, ann)

    forbidden = client.get(f"/api/workspaces/{workspace['id']}", headers=bob.headers)
    assert forbidden.status_code == 403
    assert forbidden.json()["code"] == "FORBIDDEN"

    missing = client.get(f"/api/workspaces/{uuid4()}", headers=ann.headers)
    assert missing.status_code == 404

    malformed = client.get("/api/workspaces/not-a-uuid", headers=ann.headers)
    assert malformed.status_code == 400


def test_update_workspace_merges_settings(client, ann, bob):
    workspace = _create(client, ann)

    response = client.patch(
        f"/api/workspaces/{workspace['id']}",
        headers=ann.headers,
        json={"name": "Renamed", "settings": {"allowMemberInvites": True}},
    )
    assert response.status_code == 200
    updated = response.json()["workspace"]
    assert updated["name"] == "Renamed"
    assert updated["settings"]["allowMemberInvites"] is True
    assert updated["settings"]["visibility"] == "private"

    denied = client.patch(f"/api/workspaces/{workspace['id']}", headers=bob.headers, json={"name": "Mine"})
    assert denied.status_code == 403


def test_delete_workspace_is_owner_only_and_cascades(client, repos, ann, bob):
    workspace = _create(client, ann)
    client.post("/api/members", headers=ann.headers, json={"workspaceId": workspace["id"], "email": "bob@x.com", "role": "admin"})
    client.post("/api/notes", headers=ann.headers, json={"title": "Gone soon", "workspaceId": workspace["id"]})
    client.post(
        "/api/documents",
        headers=ann.headers,
        data={"title": "File", "workspaceId": workspace["id"]},
        files={"file": ("a.txt", b"text", "text/plain")},
    )

    by_admin = client.delete(f"/api/workspaces/{workspace['id']}", headers=bob.headers)
    assert by_admin.status_code == 403

    response = client.delete(f"/api/workspaces/{workspace['id']}", headers=ann.headers)
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Workspace deleted successfully"}
    assert repos.notes.store.values() == []
    assert repos.documents.store.values() == []
    assert repos.storage.files == {}
    assert client.get(f"/api/workspaces/{workspace['id']}", headers=ann.headers).status_code == 404
