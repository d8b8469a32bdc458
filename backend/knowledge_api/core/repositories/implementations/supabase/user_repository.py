from __future__ import annotations

from typing import TYPE_CHECKING

from knowledge_api.core.models.user import User
from knowledge_api.core.repositories.implementations.supabase.base import SupabaseRepository
from knowledge_api.core.repositories.user_repository import UserRepository

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID


class SupabaseUserRepository(SupabaseRepository[User], UserRepository):
    """Users live in a ``users`` table with a unique index on ``email``."""

    TABLE_NAME = "users"
    MODEL = User

    async def create(self, user: User) -> User:
        return await self._insert(user)

    async def get(self, user_id: UUID) -> User | None:
        return await self._get_by_id(user_id)

    async def get_by_email(self, email: str) -> User | None:
        resp = await self._run(
            lambda: self._table()
            .select("*")
            .eq("email", email.strip().lower())
            .limit(1)
            .execute()
        )
        items = resp.data or []
        return self._to_model(items[0]) if items else None

    async def get_many(self, user_ids: Sequence[UUID]) -> Sequence[User]:
        if not user_ids:
            return []
        resp = await self._run(
            lambda: self._table()
            .select("*")
            .in_("id", self._ids(user_ids))
            .execute()
        )
        return [self._to_model(r) for r in resp.data or []]

    async def update_fields(self, user_id: UUID, changes: dict) -> User | None:
        return await self._update_by_id(user_id, changes)

    async def search(self, user_ids: Sequence[UUID], query: str, *, limit: int) -> Sequence[User]:
        if not user_ids:
            return []
        resp = await self._run(
            lambda: self._table()
            .select("*")
            .in_("id", self._ids(user_ids))
            .or_(self._ilike_any(("name", "email"), query))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [self._to_model(r) for r in resp.data or []]
