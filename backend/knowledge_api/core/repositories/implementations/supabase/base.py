from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

import httpx
from pydantic_core import to_jsonable_python
from supabase import PostgrestAPIError, StorageException

from knowledge_api.core.errors import ConflictError, ServiceUnavailableError
from knowledge_api.core.models.base import AppBaseModel, utcnow
from knowledge_api.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from uuid import UUID

    from supabase import Client

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=AppBaseModel)

UNIQUE_VIOLATION = "23505"
IMMUTABLE_COLUMNS = frozenset({"id", "created_at"})


class SupabaseRepository(Generic[ModelT]):
    """Shared PostgREST plumbing for the table-backed repositories.

    Subclasses set ``TABLE_NAME`` and ``MODEL``. Rows are converted with
    ``model_dump(mode="json")`` on the way in and ``from_row`` on the way
    out, so nested models land in ``jsonb`` columns unchanged.
    """

    TABLE_NAME: ClassVar[str]
    MODEL: ClassVar[type[AppBaseModel]]

    def __init__(self, client: Client) -> None:
        self._client: Client = client

    def _table(self, name: str | None = None):
        return self._client.table(name or self.TABLE_NAME)

    async def _insert(self, entity: ModelT, *, table: str | None = None) -> ModelT:
        row = self._to_row(entity)
        resp = await self._run(lambda: self._table(table).insert(row).execute())
        data = self._first(resp.data)
        return self._to_model(data) if data else entity

    async def _get_by_id(self, entity_id: UUID) -> ModelT | None:
        resp = await self._run(
            lambda: self._table()
            .select("*")
            .eq("id", str(entity_id))
            .limit(1)
            .execute()
        )
        items = resp.data or []
        if not items:
            return None
        return self._to_model(items[0])

    async def _update_by_id(self, entity_id: UUID, changes: dict) -> ModelT | None:
        sanitized: dict[str, Any] = {
            k: to_jsonable_python(v) for k, v in (changes or {}).items() if k not in IMMUTABLE_COLUMNS
        }
        if not sanitized:
            return await self._get_by_id(entity_id)
        sanitized.setdefault("updated_at", utcnow().isoformat())

        resp = await self._run(
            lambda: self._table()
            .update(sanitized)
            .eq("id", str(entity_id))
            .execute()
        )
        items = resp.data or []
        if not items:
            return None
        return self._to_model(items[0])

    async def _delete_by_id(self, entity_id: UUID) -> bool:
        resp = await self._run(
            lambda: self._table()
            .delete()
            .eq("id", str(entity_id))
            .execute()
        )
        return len(resp.data or []) > 0

    async def _count(self, build: Callable[[Any], Any], *, table: str | None = None) -> int:
        """Run an exact ``count`` query; ``build`` adds the filters."""
        resp = await self._run(
            lambda: build(self._table(table).select("id", count="exact", head=True)).execute()
        )
        return int(resp.count or 0)

    @staticmethod
    async def _run(func: Callable[[], Any]) -> Any:
        try:
            return await asyncio.to_thread(func)
        except PostgrestAPIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise ConflictError(exc.message or "Duplicate record") from exc
            raise
        except StorageException as exc:
            logger.error("Storage request failed", extra={"error": str(exc)[:200]})
            raise ServiceUnavailableError("File storage unavailable. Please try again later.") from exc
        except httpx.TransportError as exc:
            logger.error("Database request failed", extra={"error_type": type(exc).__name__})
            raise ServiceUnavailableError() from exc

    @staticmethod
    def _first(data: Any) -> dict[str, Any]:
        if isinstance(data, list) and data:
            return data[0]
        if isinstance(data, dict):
            return data
        return {}

    @staticmethod
    def _ids(values: Sequence[UUID]) -> list[str]:
        return [str(v) for v in values]

    def _scoped(self, query, workspace_ids: Sequence[UUID] | None, author_id: UUID | None):
        """Apply the optional workspace and author filters of workspace content tables."""
        if workspace_ids is not None:
            query = query.in_("workspace_id", self._ids(workspace_ids))
        if author_id is not None:
            query = query.eq("author_id", str(author_id))
        return query

    @staticmethod
    def _ilike_any(columns: Sequence[str], query: str) -> str:
        """Build an ``or`` filter matching ``query`` as a substring of any column."""
        return ",".join(f"{column}.ilike.%{query}%" for column in columns)

    @staticmethod
    def _json_contains(value: Any) -> str:
        # postgrest-py joins plain lists as array literals; jsonb needs JSON text
        return json.dumps(value)

    def _to_model(self, row: dict[str, Any]) -> ModelT:
        return self.MODEL.from_row(row)  # type: ignore[return-value]

    @staticmethod
    def _to_row(entity: AppBaseModel) -> dict[str, Any]:
        return entity.model_dump(mode="json")
