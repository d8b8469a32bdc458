from __future__ import annotations

from typing import TYPE_CHECKING

from knowledge_api.core.models.workspace import Workspace
from knowledge_api.core.repositories.implementations.supabase.base import SupabaseRepository
from knowledge_api.core.repositories.workspace_repository import WorkspaceRepository

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID


class SupabaseWorkspaceRepository(SupabaseRepository[Workspace], WorkspaceRepository):
    """Workspaces table; ``members`` and ``settings`` are jsonb columns."""

    TABLE_NAME = "workspaces"
    MODEL = Workspace

    def _member_filter(self, query, user_id: UUID):
        return query.contains("members", self._json_contains([{"user_id": str(user_id)}]))

    async def create(self, workspace: Workspace) -> Workspace:
        return await self._insert(workspace)

    async def get(self, workspace_id: UUID) -> Workspace | None:
        return await self._get_by_id(workspace_id)

    async def list_for_member(self, user_id: UUID, *, limit: int | None = None) -> Sequence[Workspace]:
        def _query():
            q = self._member_filter(self._table().select("*"), user_id).order("updated_at", desc=True)
            if limit is not None:
                q = q.limit(limit)
            return q.execute()

        resp = await self._run(_query)
        return [self._to_model(r) for r in resp.data or []]

    async def count_for_member(self, user_id: UUID) -> int:
        return await self._count(lambda q: self._member_filter(q, user_id))

    async def find_owned_by_name(self, owner_id: UUID, name: str) -> Workspace | None:
        resp = await self._run(
            lambda: self._table()
            .select("*")
            .eq("owner_id", str(owner_id))
            .eq("name", name)
            .order("created_at")
            .limit(1)
            .execute()
        )
        items = resp.data or []
        return self._to_model(items[0]) if items else None

    async def update_fields(self, workspace_id: UUID, changes: dict) -> Workspace | None:
        return await self._update_by_id(workspace_id, changes)

    async def delete(self, workspace_id: UUID) -> bool:
        return await self._delete_by_id(workspace_id)

    async def search_for_member(self, user_id: UUID, query: str, *, limit: int) -> Sequence[Workspace]:
        resp = await self._run(
            lambda: self._member_filter(self._table().select("*"), user_id)
            .ilike("name", f"%{query}%")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [self._to_model(r) for r in resp.data or []]
