from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class FileStorage(ABC):
    """Blob store for uploaded document files."""

    @abstractmethod
    async def upload(self, path: str, data: bytes, content_type: str) -> str:  # pragma: no cover - interface only
        """Store ``data`` under ``path`` and return a URL the file can be fetched from."""

    @abstractmethod
    async def remove(self, paths: Sequence[str]) -> None:  # pragma: no cover
        """Delete the stored files. Missing paths are ignored."""
