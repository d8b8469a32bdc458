from __future__ import annotations

from typing import TYPE_CHECKING

from knowledge_api.core.models.chat import Chat
from knowledge_api.core.repositories.chat_repository import ChatRepository
from knowledge_api.core.repositories.implementations.supabase.base import SupabaseRepository

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID


class SupabaseChatRepository(SupabaseRepository[Chat], ChatRepository):
    """Chats table; ``participants`` is a uuid[] column, ``messages`` and ``context`` are jsonb."""

    TABLE_NAME = "chats"
    MODEL = Chat

    async def create(self, chat: Chat) -> Chat:
        return await self._insert(chat)

    async def get(self, chat_id: UUID) -> Chat | None:
        return await self._get_by_id(chat_id)

    async def list_for_participant(
        self,
        user_id: UUID,
        *,
        workspace_id: UUID | None = None,
        limit: int = 100,
    ) -> Sequence[Chat]:
        def _query():
            q = self._table().select("*").contains("participants", [str(user_id)])
            if workspace_id is not None:
                q = q.eq("workspace_id", str(workspace_id))
            return q.order("last_message_at", desc=True).limit(limit).execute()

        resp = await self._run(_query)
        return [self._to_model(r) for r in resp.data or []]

    async def count_for_participant(self, user_id: UUID) -> int:
        return await self._count(lambda q: q.contains("participants", [str(user_id)]))

    async def update_fields(self, chat_id: UUID, changes: dict) -> Chat | None:
        return await self._update_by_id(chat_id, changes)

    async def delete(self, chat_id: UUID) -> bool:
        return await self._delete_by_id(chat_id)
