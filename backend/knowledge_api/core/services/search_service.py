from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from knowledge_api.utils.logging import get_logger
from knowledge_api.utils.validation import sanitize_search_query

if TYPE_CHECKING:
    from uuid import UUID

    from knowledge_api.core.repositories.document_repository import DocumentRepository
    from knowledge_api.core.repositories.note_repository import NoteRepository
    from knowledge_api.core.repositories.user_repository import UserRepository
    from knowledge_api.core.repositories.workspace_repository import WorkspaceRepository

logger = get_logger(__name__)

RESULTS_PER_BUCKET = 5


class SearchService:
    """Global substring search: the caller's own notes and documents, co-members and workspaces.

    Keeps application logic (sanitising, scoping) outside transport layer.
    """

    def __init__(
        self,
        notes: NoteRepository,
        documents: DocumentRepository,
        users: UserRepository,
        workspaces: WorkspaceRepository,
    ) -> None:
        self._notes = notes
        self._documents = documents
        self._users = users
        self._workspaces = workspaces

    async def search(self, *, user_id: UUID, raw_query: str | None) -> tuple[str, dict[str, Any]]:
        """Return the cleaned query and the four result buckets."""
        query = sanitize_search_query(raw_query)
        if not query:
            return query, {"notes": [], "documents": [], "members": [], "workspaces": []}

        workspaces = await self._workspaces.list_for_member(user_id)
        co_member_ids = list(
            dict.fromkeys(m.user_id for w in workspaces for m in w.members if m.user_id != user_id)
        )

        notes, documents, members, matched_workspaces = await asyncio.gather(
            self._notes.search(author_id=user_id, query=query, limit=RESULTS_PER_BUCKET),
            self._documents.search(author_id=user_id, query=query, limit=RESULTS_PER_BUCKET),
            self._users.search(co_member_ids, query, limit=RESULTS_PER_BUCKET),
            self._workspaces.search_for_member(user_id, query, limit=RESULTS_PER_BUCKET),
        )
        logger.debug(
            "Search finished",
            extra={
                "user_id": str(user_id),
                "notes": len(notes),
                "documents": len(documents),
                "members": len(members),
                "workspaces": len(matched_workspaces),
            },
        )
        return query, {
            "notes": list(notes),
            "documents": list(documents),
            "members": list(members),
            "workspaces": list(matched_workspaces),
        }
