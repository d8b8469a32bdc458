from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from knowledge_api.core.repositories.chat_repository import ChatRepository
    from knowledge_api.core.repositories.document_repository import DocumentRepository
    from knowledge_api.core.repositories.note_repository import NoteRepository
    from knowledge_api.core.services.workspace_service import WorkspaceService


class StatsService:
    """Sidebar counters: workspaces joined, own notes and documents, chats."""

    def __init__(
        self,
        workspaces: WorkspaceService,
        notes: NoteRepository,
        documents: DocumentRepository,
        chats: ChatRepository,
    ) -> None:
        self._workspaces = workspaces
        self._notes = notes
        self._documents = documents
        self._chats = chats

    async def sidebar(self, user_id: UUID) -> dict[str, int]:
        workspace_ids = await self._workspaces.member_workspace_ids(user_id)
        notes, documents, chats = await asyncio.gather(
            self._notes.count(author_id=user_id),
            self._documents.count(author_id=user_id),
            self._chats.count_for_participant(user_id),
        )
        return {
            "workspaces": len(workspace_ids),
            "notes": notes,
            "documents": documents,
            "chats": chats,
        }
