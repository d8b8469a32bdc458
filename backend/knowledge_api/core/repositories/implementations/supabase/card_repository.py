from __future__ import annotations

from typing import TYPE_CHECKING

from knowledge_api.core.models.card import Card, CardReaction, ReactionKind
from knowledge_api.core.repositories.card_repository import CardReactionRepository, CardRepository
from knowledge_api.core.repositories.implementations.supabase.base import SupabaseRepository

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID


class SupabaseCardRepository(SupabaseRepository[Card], CardRepository):
    TABLE_NAME = "cards"
    MODEL = Card

    def _published(self, query, category: str | None, search: str | None):
        query = query.eq("is_draft", False)
        if category:
            query = query.eq("category", category)
        if search:
            query = query.or_(self._ilike_any(("title", "content"), search))
        return query

    async def create(self, card: Card) -> Card:
        return await self._insert(card)

    async def get(self, card_id: UUID) -> Card | None:
        return await self._get_by_id(card_id)

    async def list_published(
        self,
        *,
        offset: int,
        limit: int,
        category: str | None = None,
        search: str | None = None,
    ) -> Sequence[Card]:
        resp = await self._run(
            lambda: self._published(self._table().select("*"), category, search)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        return [self._to_model(r) for r in resp.data or []]

    async def count_published(self, *, category: str | None = None, search: str | None = None) -> int:
        return await self._count(lambda q: self._published(q, category, search))

    async def get_many(self, card_ids: Sequence[UUID]) -> Sequence[Card]:
        if not card_ids:
            return []
        resp = await self._run(
            lambda: self._table().select("*").in_("id", self._ids(card_ids)).execute()
        )
        return [self._to_model(r) for r in resp.data or []]

    async def count_by_author(self, author_id: UUID) -> int:
        return await self._count(lambda q: q.eq("author_id", str(author_id)))

    async def update_fields(self, card_id: UUID, changes: dict) -> Card | None:
        return await self._update_by_id(card_id, changes)

    async def delete(self, card_id: UUID) -> bool:
        return await self._delete_by_id(card_id)


class SupabaseCardReactionRepository(SupabaseRepository[CardReaction], CardReactionRepository):
    """One table per reaction kind, unique on (user_id, card_id)."""

    TABLES = {
        ReactionKind.LIKE: "card_likes",
        ReactionKind.BOOKMARK: "card_bookmarks",
    }
    MODEL = CardReaction

    async def get(self, kind: ReactionKind, *, user_id: UUID, card_id: UUID) -> CardReaction | None:
        resp = await self._run(
            lambda: self._table(self.TABLES[kind])
            .select("*")
            .eq("user_id", str(user_id))
            .eq("card_id", str(card_id))
            .limit(1)
            .execute()
        )
        items = resp.data or []
        return self._to_model(items[0]) if items else None

    async def create(self, kind: ReactionKind, reaction: CardReaction) -> CardReaction:
        return await self._insert(reaction, table=self.TABLES[kind])

    async def delete(self, kind: ReactionKind, reaction_id: UUID) -> bool:
        resp = await self._run(
            lambda: self._table(self.TABLES[kind]).delete().eq("id", str(reaction_id)).execute()
        )
        return len(resp.data or []) > 0

    async def delete_for_card(self, kind: ReactionKind, card_id: UUID) -> int:
        resp = await self._run(
            lambda: self._table(self.TABLES[kind]).delete().eq("card_id", str(card_id)).execute()
        )
        return len(resp.data or [])

    async def count_for_card(self, kind: ReactionKind, card_id: UUID) -> int:
        return await self._count(lambda q: q.eq("card_id", str(card_id)), table=self.TABLES[kind])

    async def count_for_user(self, kind: ReactionKind, user_id: UUID) -> int:
        return await self._count(lambda q: q.eq("user_id", str(user_id)), table=self.TABLES[kind])

    async def list_recent_for_user(self, kind: ReactionKind, user_id: UUID, *, limit: int) -> Sequence[CardReaction]:
        resp = await self._run(
            lambda: self._table(self.TABLES[kind])
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [self._to_model(r) for r in resp.data or []]
