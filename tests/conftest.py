"""Shared fixtures: the application wired to in-memory repositories."""

from __future__ import annotations

import os
from types import SimpleNamespace

# Settings are read at import time
os.environ.setdefault("APP_SUPABASE_URL", "https://project-ref.supabase.co")
os.environ.setdefault("APP_SUPABASE_SERVICE_ROLE_KEY", "service-role-key-for-tests")
os.environ.setdefault("APP_JWT_SECRET", "a-test-signing-secret-that-is-long-enough-0123456789")
os.environ["APP_PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ["APP_ENABLE_RATE_LIMITING"] = "false"

import pytest
from fastapi.testclient import TestClient

from fakes import (
    FakeCardReactionRepository,
    FakeCardRepository,
    FakeChatRepository,
    FakeDatabase,
    FakeDocumentRepository,
    FakeFileStorage,
    FakeNoteRepository,
    FakeUserRepository,
    FakeWorkspaceRepository,
    StubOpenAI,
)
from helpers import auth_headers, signup
from knowledge_api import dependencies
from knowledge_api.core.services.ai_service import AIService
from knowledge_api.main import create_app


@pytest.fixture
def repos():
    return SimpleNamespace(
        users=FakeUserRepository(),
        workspaces=FakeWorkspaceRepository(),
        notes=FakeNoteRepository(),
        documents=FakeDocumentRepository(),
        chats=FakeChatRepository(),
        cards=FakeCardRepository(),
        reactions=FakeCardReactionRepository(),
        storage=FakeFileStorage(),
        database=FakeDatabase(),
    )


@pytest.fixture
def openai_stub():
    return StubOpenAI("Here is what your notes say.")


@pytest.fixture
def app(repos, openai_stub):
    app = create_app()
    overrides = {
        dependencies.get_database: lambda: repos.database,
        dependencies.get_user_repository: lambda: repos.users,
        dependencies.get_workspace_repository: lambda: repos.workspaces,
        dependencies.get_note_repository: lambda: repos.notes,
        dependencies.get_document_repository: lambda: repos.documents,
        dependencies.get_chat_repository: lambda: repos.chats,
        dependencies.get_card_repository: lambda: repos.cards,
        dependencies.get_card_reaction_repository: lambda: repos.reactions,
        dependencies.get_file_storage: lambda: repos.storage,
        dependencies.get_ai_service: lambda: AIService(openai_stub, model="test-model", tags_model="test-model"),
    }
    app.dependency_overrides.update(overrides)
    yield app
    app.dependency_overrides.clear()
    dependencies.reset_rate_limits()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def ann(client):
    body = signup(client, "Ann", "ann@x.com")
    return SimpleNamespace(id=body["user"]["id"], token=body["token"], headers=auth_headers(body["token"]))


@pytest.fixture
def bob(client):
    body = signup(client, "Bob", "bob@x.com")
    return SimpleNamespace(id=body["user"]["id"], token=body["token"], headers=auth_headers(body["token"]))
