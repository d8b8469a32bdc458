"""CPU-bound work in handlers runs in worker threads, not on the event loop."""

from __future__ import annotations

import asyncio
import time
from uuid import uuid4

from fakes import (
    FakeDocumentRepository,
    FakeFileStorage,
    FakeNoteRepository,
    FakeUserRepository,
    FakeWorkspaceRepository,
)
from knowledge_api.api.schemas.auth import LoginRequest, SignUpRequest
from knowledge_api.core.services import auth_service, document_service
from knowledge_api.core.services.auth_service import AuthService
from knowledge_api.core.services.document_service import DocumentService
from knowledge_api.core.services.workspace_service import WorkspaceService

SLOW = 0.2


def _ticks_while(make_coro):
    """Run the coroutine beside a 5 ms ticker; return how often the ticker ran."""

    async def run():
        ticks = 0
        done = asyncio.Event()

        async def ticker():
            nonlocal ticks
            while not done.is_set():
                ticks += 1
                await asyncio.sleep(0.005)

        task = asyncio.create_task(ticker())
        await asyncio.sleep(0)
        try:
            await make_coro()
        finally:
            done.set()
            await task
        return ticks

    return asyncio.run(run())


def _slow(result):
    def work(*args, **kwargs):
        time.sleep(SLOW)
        return result

    return work


def test_password_hashing_does_not_block_the_loop(monkeypatch):
    monkeypatch.setattr(auth_service, "hash_password", _slow("pbkdf2_sha256$1$00$00"))
    service = AuthService(FakeUserRepository())
    payload = SignUpRequest(name="Ann", email="ann@x.com", password="secret1")

    assert _ticks_while(lambda: service.sign_up(payload)) >= 5


def test_password_check_does_not_block_the_loop(monkeypatch):
    service = AuthService(FakeUserRepository())
    asyncio.run(service.sign_up(SignUpRequest(name="Ann", email="ann@x.com", password="secret1")))
    monkeypatch.setattr(auth_service, "verify_password", _slow(True))

    login = LoginRequest(email="ann@x.com", password="secret1")
    assert _ticks_while(lambda: service.sign_in(login)) >= 5


def test_text_extraction_does_not_block_the_loop(monkeypatch):
    monkeypatch.setattr(document_service, "extract_text", _slow("extracted"))
    storage = FakeFileStorage()
    workspaces = WorkspaceService(FakeWorkspaceRepository(), FakeNoteRepository(), FakeDocumentRepository(), storage)
    service = DocumentService(FakeDocumentRepository(), storage, workspaces, max_upload_bytes=1024)

    ticks = _ticks_while(
        lambda: service.upload_document(
            user_id=uuid4(),
            data=b"plain text",
            file_name="notes.txt",
            content_type="text/plain",
            title="Notes",
            workspace_id=None,
            tags=[],
        )
    )
    assert ticks >= 5
