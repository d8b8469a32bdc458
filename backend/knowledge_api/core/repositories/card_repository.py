from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from knowledge_api.core.models.card import Card, CardReaction, ReactionKind


class CardRepository(ABC):
    """Abstract repository interface for public knowledge cards."""

    @abstractmethod
    async def create(self, card: Card) -> Card:  # pragma: no cover - interface only
        """Persist a new card and return the stored entity."""

    @abstractmethod
    async def get(self, card_id: UUID) -> Card | None:  # pragma: no cover
        """Fetch a card by id or return None if not found."""

    @abstractmethod
    async def list_published(
        self,
        *,
        offset: int,
        limit: int,
        category: str | None = None,
        search: str | None = None,
    ) -> Sequence[Card]:  # pragma: no cover
        """Return one page of non-draft cards, newest first."""

    @abstractmethod
    async def count_published(self, *, category: str | None = None, search: str | None = None) -> int:  # pragma: no cover
        """Count non-draft cards matching the same filters as ``list_published``."""

    @abstractmethod
    async def get_many(self, card_ids: Sequence[UUID]) -> Sequence[Card]:  # pragma: no cover
        """Fetch the cards that still exist among ``card_ids``, in no particular order."""

    @abstractmethod
    async def count_by_author(self, author_id: UUID) -> int:  # pragma: no cover
        """Count every card written by the user."""

    @abstractmethod
    async def update_fields(self, card_id: UUID, changes: dict) -> Card | None:  # pragma: no cover
        """Partially update a card and return the updated entity, or None if missing."""

    @abstractmethod
    async def delete(self, card_id: UUID) -> bool:  # pragma: no cover
        """Delete a card by id. Return True if a row was removed."""


class CardReactionRepository(ABC):
    """Likes and bookmarks, one row per (kind, user, card)."""

    @abstractmethod
    async def get(self, kind: ReactionKind, *, user_id: UUID, card_id: UUID) -> CardReaction | None:  # pragma: no cover
        """Return the user's reaction of this kind on the card, if any."""

    @abstractmethod
    async def create(self, kind: ReactionKind, reaction: CardReaction) -> CardReaction:  # pragma: no cover
        """Persist a reaction. Raises ConflictError if the user already reacted."""

    @abstractmethod
    async def delete(self, kind: ReactionKind, reaction_id: UUID) -> bool:  # pragma: no cover
        """Remove one reaction row."""

    @abstractmethod
    async def delete_for_card(self, kind: ReactionKind, card_id: UUID) -> int:  # pragma: no cover
        """Remove every reaction of this kind on the card and return how many went."""

    @abstractmethod
    async def count_for_card(self, kind: ReactionKind, card_id: UUID) -> int:  # pragma: no cover
        """Count reactions of this kind on the card."""

    @abstractmethod
    async def count_for_user(self, kind: ReactionKind, user_id: UUID) -> int:  # pragma: no cover
        """Count reactions of this kind the user has made."""

    @abstractmethod
    async def list_recent_for_user(
        self, kind: ReactionKind, user_id: UUID, *, limit: int
    ) -> Sequence[CardReaction]:  # pragma: no cover
        """The user's most recent reactions of this kind, newest first."""
