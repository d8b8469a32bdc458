from __future__ import annotations

import httpx
import openai

from knowledge_api import dependencies
from knowledge_api.core.services.ai_service import FALLBACK_ANSWER, AIService


def test_ask_uses_workspace_context(client, ann, openai_stub):
    client.post("/api/notes", headers=ann.headers, json={"title": "Groceries", "content": "milk and eggs"})

    response = client.post("/api/ai/ask", headers=ann.headers, json={"question": "What should I buy?"})
    assert response.status_code == 200
    assert response.json() == {"success": True, "answer": "Here is what your notes say.", "language": "en"}

    (call,) = openai_stub.completions.calls
    system = call["messages"][0]["content"]
    assert "Note: Groceries\nmilk and eggs" in system
    assert call["messages"][-1] == {"role": "user", "content": "What should I buy?"}


def test_ask_detects_arabic(client, ann):
    response = client.post("/api/ai/ask", headers=ann.headers, json={"question": "ما هي ملاحظاتي؟"})
    assert response.json()["language"] == "ar"


def test_ask_falls_back_on_empty_completion(client, ann, openai_stub):
    openai_stub.completions.replies = [""]
    response = client.post("/api/ai/ask", headers=ann.headers, json={"question": "Hello?"})
    assert response.json()["answer"] == FALLBACK_ANSWER


def test_ask_in_ai_chat_records_exchange_and_history(client, ann, openai_stub):
    chat = client.post(
        "/api/chats", headers=ann.headers, json={"title": "Assistant", "isAIConversation": True}
    ).json()["chat"]

    client.post("/api/ai/ask", headers=ann.headers, json={"question": "First?", "chatId": chat["id"]})
    client.post("/api/ai/ask", headers=ann.headers, json={"question": "Second?", "chatId": chat["id"]})

    messages = client.get(f"/api/chats/{chat['id']}", headers=ann.headers).json()["chat"]["messages"]
    assert [(m["type"], m["content"]) for m in messages] == [
        ("user", "First?"),
        ("ai", "Here is what your notes say."),
        ("user", "Second?"),
        ("ai", "Here is what your notes say."),
    ]

    second_call = openai_stub.completions.calls[1]["messages"]
    assert second_call[1:] == [
        {"role": "user", "content": "First?"},
        {"role": "assistant", "content": "Here is what your notes say."},
        {"role": "user", "content": "Second?"},
    ]


def test_ask_rejects_plain_chat(client, ann):
    chat = client.post("/api/chats", headers=ann.headers, json={"title": "People"}).json()["chat"]
    response = client.post("/api/ai/ask", headers=ann.headers, json={"question": "Hi", "chatId": chat["id"]})
    assert response.status_code == 400


def test_summarize_stores_summary_on_document(client, ann, openai_stub):
    document = client.post(
        "/api/documents",
        headers=ann.headers,
        data={"title": "Plan"},
        files={"file": ("plan.txt", b"We plan to ship", "text/plain")},
    ).json()["document"]
    openai_stub.completions.replies = ["Overview of the plan.\n- Point one\n- Point two\nGreat Success ahead"]

    response = client.post(
        "/api/ai/summarize",
        headers=ann.headers,
        json={"title": "Plan", "content": "We plan to ship", "documentId": document["id"]},
    )
    assert response.status_code == 200
    summary = response.json()["summary"]
    assert summary["keyPoints"] == ["- Point one", "- Point two"]
    assert summary["sentiment"] == "positive"

    stored = client.get(f"/api/documents/{document['id']}", headers=ann.headers).json()["document"]
    assert stored["summary"] == summary


def test_summarize_checks_document_access_before_calling_the_model(client, ann, bob, openai_stub):
    document = client.post(
        "/api/documents",
        headers=ann.headers,
        data={"title": "Plan"},
        files={"file": ("plan.txt", b"We plan to ship", "text/plain")},
    ).json()["document"]

    response = client.post(
        "/api/ai/summarize",
        headers=bob.headers,
        json={"title": "Plan", "content": "We plan to ship", "documentId": document["id"]},
    )
    assert response.status_code == 403
    assert openai_stub.completions.calls == []

    missing = client.post(
        "/api/ai/summarize",
        headers=ann.headers,
        json={"title": "Plan", "content": "x", "documentId": "00000000-0000-0000-0000-000000000000"},
    )
    assert missing.status_code == 404
    assert openai_stub.completions.calls == []


def test_generate_returns_title_content_and_tags(client, ann, openai_stub):
    openai_stub.completions.replies = ["# Vector Databases\nThey index embeddings.", "Vectors, Search, vectors"]

    response = client.post("/api/ai/generate", headers=ann.headers, json={"prompt": "vector dbs", "category": "tech"})
    assert response.status_code == 200
    assert response.json()["generated"] == {
        "title": "Vector Databases",
        "content": "They index embeddings.",
        "tags": ["vectors", "search"],
        "category": "tech",
    }


def test_ai_errors_surface_as_ai_service_error(client, app, ann, openai_stub):
    openai_stub.completions.error = openai.APIConnectionError(
        request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    )
    failed = client.post("/api/ai/ask", headers=ann.headers, json={"question": "Hi"})
    assert failed.status_code == 500
    assert failed.json()["code"] == "AI_SERVICE_ERROR"

    app.dependency_overrides[dependencies.get_ai_service] = lambda: AIService(None, model="m", tags_model="m")
    unconfigured = client.post("/api/ai/generate", headers=ann.headers, json={"prompt": "anything"})
    assert unconfigured.status_code == 500
    assert unconfigured.json()["error"] == "AI service is not configured"
