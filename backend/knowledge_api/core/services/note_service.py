from __future__ import annotations

from typing import TYPE_CHECKING

from knowledge_api.core.errors import NotFoundError, PermissionDeniedError
from knowledge_api.core.models.base import utcnow
from knowledge_api.core.models.note import Note
from knowledge_api.core.models.workspace import MemberRole
from knowledge_api.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from knowledge_api.core.models.workspace import Workspace
    from knowledge_api.core.repositories.note_repository import NoteRepository
    from knowledge_api.core.services.workspace_service import WorkspaceService

logger = get_logger(__name__)


class NoteService:
    """Notes: listings show the caller's own notes unless a workspace is named."""

    def __init__(self, repo: NoteRepository, workspaces: WorkspaceService) -> None:
        self._repo = repo
        self._workspaces = workspaces

    async def _scope(self, user_id: UUID, workspace_id: UUID | None) -> dict:
        """Repository filters: one workspace the caller belongs to, else the caller's own notes."""
        if workspace_id is not None:
            await self._workspaces.require_member(workspace_id, user_id)
            return {"workspace_ids": [workspace_id]}
        return {"author_id": user_id}

    async def list_notes(self, user_id: UUID, workspace_id: UUID | None = None, limit: int = 100) -> Sequence[Note]:
        """Non-archived notes, pinned first then most recently updated."""
        return await self._repo.list(**await self._scope(user_id, workspace_id), limit=limit)

    async def count_notes(self, user_id: UUID) -> int:
        return await self._repo.count(author_id=user_id)

    async def create_note(self, create_dto, user_id: UUID) -> Note:
        if create_dto.workspace_id is not None:
            workspace = await self._workspaces.require_member(create_dto.workspace_id, user_id)
            self._ensure_can_write(workspace, user_id)
        else:
            workspace = await self._workspaces.get_or_create_personal(user_id)

        now = utcnow()
        note = Note(
            title=create_dto.title,
            content=create_dto.content or "",
            workspace_id=workspace.id,
            author_id=user_id,
            tags=create_dto.tags or [],
            category=create_dto.category,
            is_pinned=bool(create_dto.is_pinned),
            created_at=now,
            updated_at=now,
        )
        created = await self._repo.create(note)
        logger.info("Note created", extra={"user_id": str(user_id), "note_id": str(created.id)})
        return created

    async def get_note(self, note_id: UUID, user_id: UUID) -> Note:
        """Return the note if the caller can read its workspace.

        Raises:
            NotFoundError: no such note
            PermissionDeniedError: the caller is not a member of the note's workspace
        """
        note = await self._repo.get(note_id)
        if note is None:
            raise NotFoundError("Note not found")
        await self._workspaces.require_member(note.workspace_id, user_id)
        return note

    async def _get_for_write(self, note_id: UUID, user_id: UUID) -> Note:
        note = await self._repo.get(note_id)
        if note is None:
            raise NotFoundError("Note not found")
        workspace = await self._workspaces.require_member(note.workspace_id, user_id)
        if note.author_id != user_id and not workspace.can_manage(user_id):
            raise PermissionDeniedError("Only the author or a workspace admin can modify this note")
        return note

    async def update_note(self, note_id: UUID, update_dto, user_id: UUID) -> Note:
        existing = await self._get_for_write(note_id, user_id)

        raw_changes = update_dto.model_dump(exclude_unset=True)
        allowed_fields = {"title", "content", "tags", "category", "is_pinned", "is_archived"}
        changes = {k: v for k, v in raw_changes.items() if k in allowed_fields and (v is not None or k == "category")}
        if not changes:
            return existing

        updated = await self._repo.update_fields(note_id, changes)
        if updated is None:
            raise NotFoundError("Note not found")
        return updated

    async def delete_note(self, note_id: UUID, user_id: UUID) -> None:
        await self._get_for_write(note_id, user_id)
        if not await self._repo.delete(note_id):
            raise NotFoundError("Note not found")
        logger.info("Note deleted", extra={"user_id": str(user_id), "note_id": str(note_id)})

    @staticmethod
    def _ensure_can_write(workspace: Workspace, user_id: UUID) -> None:
        entry = workspace.member(user_id)
        if entry is not None and entry.role == MemberRole.VIEWER:
            raise PermissionDeniedError("Viewers cannot add content to this workspace")
