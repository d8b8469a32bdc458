from __future__ import annotations

import asyncio
import math
from typing import TYPE_CHECKING, Any

from knowledge_api.core.errors import NotFoundError, PermissionDeniedError
from knowledge_api.core.models.base import utcnow
from knowledge_api.core.models.card import Card, CardReaction, ReactionKind
from knowledge_api.utils.logging import get_logger
from knowledge_api.utils.validation import sanitize_search_query

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from knowledge_api.core.repositories.card_repository import CardReactionRepository, CardRepository
    from knowledge_api.core.repositories.user_repository import UserRepository

logger = get_logger(__name__)

COUNTER_FIELDS = {ReactionKind.LIKE: "likes", ReactionKind.BOOKMARK: "bookmarks"}


def build_pagination(page: int, limit: int, total: int) -> dict[str, Any]:
    total_pages = math.ceil(total / limit) if limit else 0
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }


class CardService:
    """Public knowledge cards and their like/bookmark reactions."""

    def __init__(
        self,
        repo: CardRepository,
        reactions: CardReactionRepository,
        users: UserRepository,
    ) -> None:
        self._repo = repo
        self._reactions = reactions
        self._users = users

    async def list_cards(
        self,
        *,
        page: int,
        limit: int,
        category: str | None = None,
        search: str | None = None,
    ) -> tuple[Sequence[Card], dict[str, Any]]:
        """One page of published cards plus pagination metadata.

        The page and the total are fetched concurrently.
        """
        query = sanitize_search_query(search) or None
        category = (category or "").strip() or None
        cards, total = await asyncio.gather(
            self._repo.list_published(offset=(page - 1) * limit, limit=limit, category=category, search=query),
            self._repo.count_published(category=category, search=query),
        )
        return cards, build_pagination(page, limit, total)

    async def create_card(self, create_dto, user_id: UUID) -> Card:
        author = await self._users.get(user_id)
        if author is None:
            raise NotFoundError("User not found")

        now = utcnow()
        card = Card(
            title=create_dto.title,
            content=create_dto.content,
            category=create_dto.category,
            tags=create_dto.tags or [],
            author_id=user_id,
            author_name=author.name,
            is_draft=bool(create_dto.is_draft),
            created_at=now,
            updated_at=now,
        )
        created = await self._repo.create(card)
        logger.info("Card created", extra={"user_id": str(user_id), "card_id": str(created.id)})
        return created

    async def get_card(self, card_id: UUID) -> Card:
        card = await self._repo.get(card_id)
        if card is None:
            raise NotFoundError("Card not found")
        return card

    async def _get_own(self, card_id: UUID, user_id: UUID) -> Card:
        card = await self.get_card(card_id)
        if card.author_id != user_id:
            raise PermissionDeniedError("Only the author can modify this card")
        return card

    async def update_card(self, card_id: UUID, update_dto, user_id: UUID) -> Card:
        existing = await self._get_own(card_id, user_id)
        changes = {k: v for k, v in update_dto.model_dump(exclude_unset=True).items() if v is not None}
        if not changes:
            return existing
        updated = await self._repo.update_fields(card_id, changes)
        if updated is None:
            raise NotFoundError("Card not found")
        return updated

    async def delete_card(self, card_id: UUID, user_id: UUID) -> None:
        """Remove the card together with every like and bookmark pointing at it."""
        await self._get_own(card_id, user_id)
        likes, bookmarks = await asyncio.gather(
            self._reactions.delete_for_card(ReactionKind.LIKE, card_id),
            self._reactions.delete_for_card(ReactionKind.BOOKMARK, card_id),
        )
        if not await self._repo.delete(card_id):
            raise NotFoundError("Card not found")
        logger.info(
            "Card deleted",
            extra={"user_id": str(user_id), "card_id": str(card_id), "likes": likes, "bookmarks": bookmarks},
        )

    async def toggle_reaction(self, card_id: UUID, user_id: UUID, kind: ReactionKind) -> tuple[bool, int]:
        """Flip the caller's reaction; returns (now active, new counter)."""
        card = await self.get_card(card_id)
        field = COUNTER_FIELDS[kind]
        current = getattr(card, field)

        existing = await self._reactions.get(kind, user_id=user_id, card_id=card_id)
        if existing is not None:
            await self._reactions.delete(kind, existing.id)
            active, count = False, max(0, current - 1)
        else:
            await self._reactions.create(kind, CardReaction(user_id=user_id, card_id=card_id))
            active, count = True, current + 1

        await self._repo.update_fields(card_id, {field: count})
        return active, count
