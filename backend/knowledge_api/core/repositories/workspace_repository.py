from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from knowledge_api.core.models.workspace import Workspace


class WorkspaceRepository(ABC):
    """Abstract repository interface for workspaces.

    Membership lives on the workspace row itself, so "workspaces of a user"
    queries filter on the ``members`` collection.
    """

    @abstractmethod
    async def create(self, workspace: Workspace) -> Workspace:  # pragma: no cover - interface only
        """Persist a new workspace and return the stored entity."""

    @abstractmethod
    async def get(self, workspace_id: UUID) -> Workspace | None:  # pragma: no cover
        """Fetch a workspace by id or return None if not found."""

    @abstractmethod
    async def list_for_member(self, user_id: UUID, *, limit: int | None = None) -> Sequence[Workspace]:  # pragma: no cover
        """Workspaces the user belongs to, most recently updated first."""

    @abstractmethod
    async def count_for_member(self, user_id: UUID) -> int:  # pragma: no cover
        """Number of workspaces the user belongs to."""

    @abstractmethod
    async def find_owned_by_name(self, owner_id: UUID, name: str) -> Workspace | None:  # pragma: no cover
        """Return the owner's workspace with exactly this name, if any."""

    @abstractmethod
    async def update_fields(self, workspace_id: UUID, changes: dict) -> Workspace | None:  # pragma: no cover
        """Partially update a workspace and return the updated entity, or None if missing."""

    @abstractmethod
    async def delete(self, workspace_id: UUID) -> bool:  # pragma: no cover
        """Delete a workspace by id. Return True if a row was removed."""

    @abstractmethod
    async def search_for_member(self, user_id: UUID, query: str, *, limit: int) -> Sequence[Workspace]:  # pragma: no cover
        """Substring match on name among the user's workspaces, newest first."""
