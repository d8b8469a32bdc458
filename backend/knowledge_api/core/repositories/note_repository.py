from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from knowledge_api.core.models.note import Note


class NoteRepository(ABC):
    """Abstract repository interface for notes.

    Reads filter by workspace ids, by author, or both; callers resolve
    membership first. An empty ``workspace_ids`` matches nothing.
    """

    @abstractmethod
    async def create(self, note: Note) -> Note:  # pragma: no cover - interface only
        """Persist a new note and return the stored entity."""

    @abstractmethod
    async def get(self, note_id: UUID) -> Note | None:  # pragma: no cover
        """Fetch a note by id or return None if not found."""

    @abstractmethod
    async def list(
        self,
        *,
        workspace_ids: Sequence[UUID] | None = None,
        author_id: UUID | None = None,
        include_archived: bool = False,
        limit: int = 100,
    ) -> Sequence[Note]:  # pragma: no cover
        """Return matching notes, pinned first, then most recently updated.

        Args:
            workspace_ids: Workspaces to read from; None leaves the workspace unfiltered
            author_id: Only notes written by this user
            include_archived: Whether archived notes are returned
            limit: Maximum number of notes to return
        """

    @abstractmethod
    async def count(
        self, *, workspace_ids: Sequence[UUID] | None = None, author_id: UUID | None = None
    ) -> int:  # pragma: no cover
        """Count non-archived notes matching the same filters as ``list``."""

    @abstractmethod
    async def count_by_author(self, author_id: UUID) -> int:  # pragma: no cover
        """Count every note written by the user."""

    @abstractmethod
    async def update_fields(self, note_id: UUID, changes: dict) -> Note | None:  # pragma: no cover
        """Partially update fields on a note and return the updated entity, or None if missing."""

    @abstractmethod
    async def delete(self, note_id: UUID) -> bool:  # pragma: no cover
        """Delete a note by id. Return True if a row was removed, False otherwise."""

    @abstractmethod
    async def delete_by_workspace(self, workspace_id: UUID) -> int:  # pragma: no cover
        """Delete every note of a workspace and return how many were removed."""

    @abstractmethod
    async def search(
        self,
        *,
        query: str,
        limit: int,
        workspace_ids: Sequence[UUID] | None = None,
        author_id: UUID | None = None,
    ) -> Sequence[Note]:  # pragma: no cover
        """Substring match on title or content among non-archived notes, newest first."""
