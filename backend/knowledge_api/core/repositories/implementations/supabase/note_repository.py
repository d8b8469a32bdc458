from __future__ import annotations

from typing import TYPE_CHECKING

from knowledge_api.core.models.note import Note
from knowledge_api.core.repositories.implementations.supabase.base import SupabaseRepository
from knowledge_api.core.repositories.note_repository import NoteRepository

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID


class SupabaseNoteRepository(SupabaseRepository[Note], NoteRepository):
    """Supabase implementation of the NoteRepository.

    Assumes a `notes` table with columns matching the `Note` model fields.
    """

    TABLE_NAME = "notes"
    MODEL = Note

    async def create(self, note: Note) -> Note:
        return await self._insert(note)

    async def get(self, note_id: UUID) -> Note | None:
        return await self._get_by_id(note_id)

    async def list(
        self,
        *,
        workspace_ids: Sequence[UUID] | None = None,
        author_id: UUID | None = None,
        include_archived: bool = False,
        limit: int = 100,
    ) -> Sequence[Note]:
        if workspace_ids is not None and not workspace_ids:
            return []

        def _query():
            q = self._scoped(self._table().select("*"), workspace_ids, author_id)
            if not include_archived:
                q = q.eq("is_archived", False)
            return (
                q
                .order("is_pinned", desc=True)
                .order("updated_at", desc=True)
                .limit(limit)
                .execute()
            )

        resp = await self._run(_query)
        return [self._to_model(r) for r in resp.data or []]

    async def count(self, *, workspace_ids: Sequence[UUID] | None = None, author_id: UUID | None = None) -> int:
        if workspace_ids is not None and not workspace_ids:
            return 0
        return await self._count(lambda q: self._scoped(q, workspace_ids, author_id).eq("is_archived", False))

    async def count_by_author(self, author_id: UUID) -> int:
        return await self._count(lambda q: q.eq("author_id", str(author_id)))

    async def update_fields(self, note_id: UUID, changes: dict) -> Note | None:
        return await self._update_by_id(note_id, changes)

    async def delete(self, note_id: UUID) -> bool:
        return await self._delete_by_id(note_id)

    async def delete_by_workspace(self, workspace_id: UUID) -> int:
        resp = await self._run(
            lambda: self._table()
            .delete()
            .eq("workspace_id", str(workspace_id))
            .execute()
        )
        return len(resp.data or [])

    async def search(
        self,
        *,
        query: str,
        limit: int,
        workspace_ids: Sequence[UUID] | None = None,
        author_id: UUID | None = None,
    ) -> Sequence[Note]:
        if workspace_ids is not None and not workspace_ids:
            return []
        resp = await self._run(
            lambda: self._scoped(self._table().select("*"), workspace_ids, author_id)
            .eq("is_archived", False)
            .or_(self._ilike_any(("title", "content"), query))
            .order("updated_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [self._to_model(r) for r in resp.data or []]
