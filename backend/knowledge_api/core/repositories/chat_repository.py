from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from knowledge_api.core.models.chat import Chat


class ChatRepository(ABC):
    """Abstract repository interface for chats and their message history."""

    @abstractmethod
    async def create(self, chat: Chat) -> Chat:  # pragma: no cover - interface only
        """Persist a new chat and return the stored entity."""

    @abstractmethod
    async def get(self, chat_id: UUID) -> Chat | None:  # pragma: no cover
        """Fetch a chat by id or return None if not found."""

    @abstractmethod
    async def list_for_participant(
        self,
        user_id: UUID,
        *,
        workspace_id: UUID | None = None,
        limit: int = 100,
    ) -> Sequence[Chat]:  # pragma: no cover
        """Chats the user takes part in, most recent message first."""

    @abstractmethod
    async def count_for_participant(self, user_id: UUID) -> int:  # pragma: no cover
        """Number of chats the user takes part in."""

    @abstractmethod
    async def update_fields(self, chat_id: UUID, changes: dict) -> Chat | None:  # pragma: no cover
        """Partially update a chat and return the updated entity, or None if missing."""

    @abstractmethod
    async def delete(self, chat_id: UUID) -> bool:  # pragma: no cover
        """Delete a chat by id. Return True if a row was removed."""
