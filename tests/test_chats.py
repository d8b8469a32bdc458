from __future__ import annotations

from uuid import uuid4


def _chat(client, user, **payload):
    response = client.post("/api/chats", headers=user.headers, json={"title": "Planning", **payload})
    assert response.status_code == 201, response.text
    return response.json()["chat"]


def test_create_and_fetch_chat(client, ann):
    chat = _chat(client, ann, isAIConversation=True)
    assert chat["isAIConversation"] is True
    assert chat["participants"] == [ann.id]
    assert chat["messages"] == []

    fetched = client.get(f"/api/chats/{chat['id']}", headers=ann.headers)
    assert fetched.status_code == 200
    assert fetched.json()["chat"]["title"] == "Planning"


def test_add_message_updates_summary(client, ann):
    chat = _chat(client, ann)

    response = client.post(f"/api/chats/{chat['id']}", headers=ann.headers, json={"content": "x" * 150})
    assert response.status_code == 201
    message = response.json()["message"]
    assert message["senderId"] == ann.id
    assert message["type"] == "user"

    (summary,) = client.get("/api/chats", headers=ann.headers).json()["chats"]
    assert summary["messageCount"] == 1
    assert summary["lastMessage"] == "x" * 100
    assert summary["lastMessageAt"] == message["timestamp"]
    assert client.get("/api/chats/count", headers=ann.headers).json()["count"] == 1


def test_empty_message_is_rejected(client, ann):
    chat = _chat(client, ann)
    response = client.post(f"/api/chats/{chat['id']}", headers=ann.headers, json={"content": "  "})
    assert response.status_code == 400
    assert response.json()["error"] == "Message content is required"


def test_context_resources_flag_deleted_note(client, ann):
    note = client.post("/api/notes", headers=ann.headers, json={"title": "Context"}).json()["note"]
    chat = _chat(client, ann, context={"noteId": note["id"]})

    resources = client.get(f"/api/chats/{chat['id']}", headers=ann.headers).json()["chat"]["contextResources"]
    assert resources["note"] == {"id": note["id"], "title": "Context", "isMissing": False}

    client.delete(f"/api/notes/{note['id']}", headers=ann.headers)
    resources = client.get(f"/api/chats/{chat['id']}", headers=ann.headers).json()["chat"]["contextResources"]
    assert resources["note"]["isMissing"] is True
    assert resources["note"]["title"] is None


def test_context_must_exist(client, ann):
    response = client.post("/api/chats", headers=ann.headers, json={"title": "x", "context": {"documentId": str(uuid4())}})
    assert response.status_code == 400
    assert response.json()["error"] == "Referenced document does not exist"


def test_non_participant_is_forbidden(client, ann, bob):
    chat = _chat(client, ann)

    assert client.get(f"/api/chats/{chat['id']}", headers=bob.headers).status_code == 403
    assert client.post(f"/api/chats/{chat['id']}", headers=bob.headers, json={"content": "hi"}).status_code == 403
    assert client.delete(f"/api/chats/{chat['id']}", headers=bob.headers).status_code == 403
    assert client.get("/api/chats", headers=bob.headers).json()["chats"] == []


def test_delete_chat(client, ann):
    chat = _chat(client, ann)
    assert client.delete(f"/api/chats/{chat['id']}", headers=ann.headers).status_code == 200
    assert client.get(f"/api/chats/{chat['id']}", headers=ann.headers).status_code == 404
