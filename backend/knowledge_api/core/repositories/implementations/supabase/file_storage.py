from __future__ import annotations

from typing import TYPE_CHECKING

from knowledge_api.core.repositories.file_storage import FileStorage
from knowledge_api.core.repositories.implementations.supabase.base import SupabaseRepository

if TYPE_CHECKING:
    from collections.abc import Sequence

    from supabase import Client


class SupabaseFileStorage(FileStorage):
    """Supabase Storage bucket holding uploaded document files."""

    def __init__(self, client: Client, bucket: str) -> None:
        self._client = client
        self._bucket = bucket

    def _files(self):
        return self._client.storage.from_(self._bucket)

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        await SupabaseRepository._run(
            lambda: self._files().upload(path, data, {"content-type": content_type})
        )
        return self._files().get_public_url(path)

    async def remove(self, paths: Sequence[str]) -> None:
        if not paths:
            return
        await SupabaseRepository._run(lambda: self._files().remove(list(paths)))
