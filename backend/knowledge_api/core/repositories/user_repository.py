from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from knowledge_api.core.models.user import User


class UserRepository(ABC):
    """Abstract repository interface for user accounts."""

    @abstractmethod
    async def create(self, user: User) -> User:  # pragma: no cover - interface only
        """Persist a new user. Raises ConflictError when the email is taken."""

    @abstractmethod
    async def get(self, user_id: UUID) -> User | None:  # pragma: no cover
        """Fetch a user by id or return None if not found."""

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:  # pragma: no cover
        """Fetch a user by (lower-cased) email."""

    @abstractmethod
    async def get_many(self, user_ids: Sequence[UUID]) -> Sequence[User]:  # pragma: no cover
        """Fetch every user whose id is in ``user_ids``; unknown ids are skipped."""

    @abstractmethod
    async def update_fields(self, user_id: UUID, changes: dict) -> User | None:  # pragma: no cover
        """Partially update a user and return the updated entity, or None if missing."""

    @abstractmethod
    async def search(self, user_ids: Sequence[UUID], query: str, *, limit: int) -> Sequence[User]:  # pragma: no cover
        """Case-insensitive substring match on name or email, restricted to ``user_ids``."""
