from __future__ import annotations


def _workspace(client, user):
    return client.post("/api/workspaces", headers=user.headers, json={"name": "Team"}).json()["workspace"]


def _add(client, user, workspace_id, email, role="member"):
    return client.post(
        "/api/members", headers=user.headers, json={"workspaceId": workspace_id, "email": email, "role": role}
    )


def test_add_and_list_members(client, ann, bob):
    workspace = _workspace(client, ann)

    response = _add(client, ann, workspace["id"], "BOB@x.com")
    assert response.status_code == 201
    member = response.json()["member"]
    assert member["userId"] == bob.id
    assert member["name"] == "Bob"
    assert member["role"] == "member"
    assert member["isOwner"] is False

    listed = client.get("/api/members", headers=bob.headers, params={"workspaceId": workspace["id"]})
    assert listed.status_code == 200
    roles = {m["email"]: m["role"] for m in listed.json()["members"]}
    assert roles == {"ann@x.com": "owner", "bob@x.com": "member"}

    single = client.get(f"/api/members/{ann.id}", headers=bob.headers, params={"workspaceId": workspace["id"]})
    assert single.json()["member"]["isOwner"] is True


def test_add_member_errors(client, ann, bob):
    workspace = _workspace(client, ann)
    _add(client, ann, workspace["id"], "bob@x.com")

    again = _add(client, ann, workspace["id"], "bob@x.com")
    assert again.status_code == 409
    assert again.json()["code"] == "ALREADY_MEMBER"

    unknown = _add(client, ann, workspace["id"], "stranger@x.com")
    assert unknown.status_code == 404

    owner_role = _add(client, ann, workspace["id"], "ann@x.com", role="owner")
    assert owner_role.status_code == 400

    by_member = _add(client, bob, workspace["id"], "ann@x.com")
    assert by_member.status_code == 403


def test_listing_requires_membership(client, ann, bob):
    workspace = _workspace(client, ann)
    response = client.get("/api/members", headers=bob.headers, params={"workspaceId": workspace["id"]})
    assert response.status_code == 403

    missing_param = client.get("/api/members", headers=ann.headers)
    assert missing_param.status_code == 400


def test_update_role(client, ann, bob):
    workspace = _workspace(client, ann)
    _add(client, ann, workspace["id"], "bob@x.com")

    denied = client.put(f"/api/members/{ann.id}", headers=bob.headers, json={"workspaceId": workspace["id"], "role": "viewer"})
    assert denied.status_code == 403

    promoted = client.put(f"/api/members/{bob.id}", headers=ann.headers, json={"workspaceId": workspace["id"], "role": "admin"})
    assert promoted.status_code == 200
    assert promoted.json()["member"]["role"] == "admin"

    owner = client.put(f"/api/members/{ann.id}", headers=bob.headers, json={"workspaceId": workspace["id"], "role": "viewer"})
    assert owner.status_code == 400


def test_remove_member(client, ann, bob):
    workspace = _workspace(client, ann)
    _add(client, ann, workspace["id"], "bob@x.com")

    owner = client.delete(f"/api/members/{ann.id}", headers=ann.headers, params={"workspaceId": workspace["id"]})
    assert owner.status_code == 400

    leave = client.delete(f"/api/members/{bob.id}", headers=bob.headers, params={"workspaceId": workspace["id"]})
    assert leave.status_code == 200
    assert client.get(f"/api/workspaces/{workspace['id']}", headers=bob.headers).status_code == 403
