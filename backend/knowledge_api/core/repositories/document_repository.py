from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from knowledge_api.core.models.document import Document


class DocumentRepository(ABC):
    """Abstract repository interface for uploaded documents.

    Filters work as in ``NoteRepository``: workspace ids, author, or both.
    """

    @abstractmethod
    async def create(self, document: Document) -> Document:  # pragma: no cover - interface only
        """Persist a new document and return the stored entity."""

    @abstractmethod
    async def get(self, document_id: UUID) -> Document | None:  # pragma: no cover
        """Fetch a document by id or return None if not found."""

    @abstractmethod
    async def list(
        self,
        *,
        workspace_ids: Sequence[UUID] | None = None,
        author_id: UUID | None = None,
        include_archived: bool = False,
        limit: int = 100,
    ) -> Sequence[Document]:  # pragma: no cover
        """Return matching documents, newest first."""

    @abstractmethod
    async def count(
        self, *, workspace_ids: Sequence[UUID] | None = None, author_id: UUID | None = None
    ) -> int:  # pragma: no cover
        """Count non-archived documents matching the filters."""

    @abstractmethod
    async def count_by_author(self, author_id: UUID) -> int:  # pragma: no cover
        """Count every document uploaded by the user."""

    @abstractmethod
    async def update_fields(self, document_id: UUID, changes: dict) -> Document | None:  # pragma: no cover
        """Partially update a document and return the updated entity, or None if missing."""

    @abstractmethod
    async def delete(self, document_id: UUID) -> bool:  # pragma: no cover
        """Delete a document row. Return True if a row was removed."""

    @abstractmethod
    async def delete_by_workspace(self, workspace_id: UUID) -> Sequence[Document]:  # pragma: no cover
        """Delete every document of a workspace and return the removed rows."""

    @abstractmethod
    async def search(
        self,
        *,
        query: str,
        limit: int,
        workspace_ids: Sequence[UUID] | None = None,
        author_id: UUID | None = None,
    ) -> Sequence[Document]:  # pragma: no cover
        """Substring match on title or file name among non-archived documents, newest first."""
