from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from knowledge_api.core.errors import NotFoundError
from knowledge_api.core.models.card import ReactionKind

if TYPE_CHECKING:
    from uuid import UUID

    from knowledge_api.core.models.user import User
    from knowledge_api.core.repositories.card_repository import CardReactionRepository, CardRepository
    from knowledge_api.core.repositories.document_repository import DocumentRepository
    from knowledge_api.core.repositories.note_repository import NoteRepository
    from knowledge_api.core.repositories.user_repository import UserRepository
    from knowledge_api.core.repositories.workspace_repository import WorkspaceRepository

RECENT_ACTIVITY_LIMIT = 10


class UserService:
    """Profile reads, edits and per-user counters."""

    def __init__(
        self,
        users: UserRepository,
        workspaces: WorkspaceRepository,
        notes: NoteRepository,
        documents: DocumentRepository,
        cards: CardRepository,
        reactions: CardReactionRepository,
    ) -> None:
        self._users = users
        self._workspaces = workspaces
        self._notes = notes
        self._documents = documents
        self._cards = cards
        self._reactions = reactions

    async def get_profile(self, user_id: UUID) -> User:
        user = await self._users.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def update_profile(self, user_id: UUID, update_dto) -> User:
        user = await self.get_profile(user_id)
        changes = {k: v for k, v in update_dto.model_dump(exclude_unset=True).items() if v is not None}
        if not changes:
            return user
        updated = await self._users.update_fields(user_id, changes)
        if updated is None:
            raise NotFoundError("User not found")
        return updated

    async def get_stats(self, user_id: UUID) -> dict[str, int]:
        notes, documents, workspaces, cards, bookmarks, likes = await asyncio.gather(
            self._notes.count_by_author(user_id),
            self._documents.count_by_author(user_id),
            self._workspaces.count_for_member(user_id),
            self._cards.count_by_author(user_id),
            self._reactions.count_for_user(ReactionKind.BOOKMARK, user_id),
            self._reactions.count_for_user(ReactionKind.LIKE, user_id),
        )
        return {
            "notes": notes,
            "documents": documents,
            "workspaces": workspaces,
            "cards": cards,
            "bookmarks": bookmarks,
            "likes": likes,
        }

    async def recent_activity(self, user_id: UUID, *, limit: int = RECENT_ACTIVITY_LIMIT) -> list[dict[str, Any]]:
        """The caller's latest bookmarks, newest first, with the card's title and category.

        Bookmarks whose card has since been deleted are reported as "Unknown Card".
        """
        bookmarks = await self._reactions.list_recent_for_user(ReactionKind.BOOKMARK, user_id, limit=limit)
        cards = {c.id: c for c in await self._cards.get_many(list(dict.fromkeys(b.card_id for b in bookmarks)))}
        activities = []
        for bookmark in bookmarks:
            card = cards.get(bookmark.card_id)
            activities.append(
                {
                    "id": bookmark.id,
                    "card_id": bookmark.card_id,
                    "title": card.title if card else "Unknown Card",
                    "category": card.category if card else "",
                    "type": "bookmarked",
                    "timestamp": bookmark.created_at,
                }
            )
        return activities
