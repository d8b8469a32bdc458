from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from knowledge_api.core.errors import AppError, NotFoundError, PermissionDeniedError
from knowledge_api.core.models.base import utcnow
from knowledge_api.core.models.workspace import MemberRole, Workspace, WorkspaceMember, WorkspaceSettings
from knowledge_api.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from knowledge_api.core.repositories.document_repository import DocumentRepository
    from knowledge_api.core.repositories.file_storage import FileStorage
    from knowledge_api.core.repositories.note_repository import NoteRepository
    from knowledge_api.core.repositories.workspace_repository import WorkspaceRepository

logger = get_logger(__name__)

PERSONAL_WORKSPACE_NAME = "Personal"


class WorkspaceService:
    """Workspace lifecycle plus the membership predicates other services rely on."""

    def __init__(
        self,
        repo: WorkspaceRepository,
        notes: NoteRepository,
        documents: DocumentRepository,
        storage: FileStorage,
    ) -> None:
        self._repo = repo
        self._notes = notes
        self._documents = documents
        self._storage = storage

    async def require_member(self, workspace_id: UUID, user_id: UUID) -> Workspace:
        """Return the workspace if the user belongs to it.

        Raises:
            NotFoundError: unknown workspace
            PermissionDeniedError: the user is not a member
        """
        workspace = await self._repo.get(workspace_id)
        if workspace is None:
            raise NotFoundError("Workspace not found")
        if not workspace.has_member(user_id):
            raise PermissionDeniedError("You do not have access to this workspace")
        return workspace

    async def require_manager(self, workspace_id: UUID, user_id: UUID) -> Workspace:
        workspace = await self.require_member(workspace_id, user_id)
        if not workspace.can_manage(user_id):
            raise PermissionDeniedError("Only workspace owners and admins can do this")
        return workspace

    async def member_workspace_ids(self, user_id: UUID) -> list[UUID]:
        workspaces = await self._repo.list_for_member(user_id)
        return [w.id for w in workspaces]

    async def list_workspaces(self, user_id: UUID) -> Sequence[Workspace]:
        return await self._repo.list_for_member(user_id)

    async def count_workspaces(self, user_id: UUID) -> int:
        return await self._repo.count_for_member(user_id)

    async def create_workspace(self, create_dto, user_id: UUID) -> Workspace:
        settings = WorkspaceSettings()
        if create_dto.settings is not None:
            settings = settings.model_copy(update=create_dto.settings.model_dump(exclude_none=True))

        now = utcnow()
        workspace = Workspace(
            name=create_dto.name,
            description=create_dto.description or "",
            owner_id=user_id,
            members=[WorkspaceMember(user_id=user_id, role=MemberRole.OWNER, joined_at=now)],
            settings=settings,
            tags=create_dto.tags or [],
            created_at=now,
            updated_at=now,
        )
        created = await self._repo.create(workspace)
        logger.info("Workspace created", extra={"user_id": str(user_id), "workspace_id": str(created.id)})
        return created

    async def get_or_create_personal(self, user_id: UUID) -> Workspace:
        """The user's default workspace for content created without an explicit one."""
        existing = await self._repo.find_owned_by_name(user_id, PERSONAL_WORKSPACE_NAME)
        if existing is not None:
            return existing

        now = utcnow()
        workspace = Workspace(
            name=PERSONAL_WORKSPACE_NAME,
            description="Your personal workspace",
            owner_id=user_id,
            members=[WorkspaceMember(user_id=user_id, role=MemberRole.OWNER, joined_at=now)],
            created_at=now,
            updated_at=now,
        )
        logger.info("Creating personal workspace", extra={"user_id": str(user_id)})
        return await self._repo.create(workspace)

    async def get_counts(self, workspace: Workspace) -> dict[str, int]:
        notes, documents = await asyncio.gather(
            self._notes.count(workspace_ids=[workspace.id]),
            self._documents.count(workspace_ids=[workspace.id]),
        )
        return {"notes": notes, "documents": documents, "members": len(workspace.members)}

    async def update_workspace(self, workspace_id: UUID, update_dto, user_id: UUID) -> Workspace:
        workspace = await self.require_manager(workspace_id, user_id)

        raw_changes = update_dto.model_dump(exclude_unset=True)
        changes: dict = {}
        for key in ("name", "description", "tags"):
            if raw_changes.get(key) is not None:
                changes[key] = raw_changes[key]
        if update_dto.settings is not None:
            changes["settings"] = workspace.settings.model_copy(
                update=update_dto.settings.model_dump(exclude_none=True)
            )
        if not changes:
            return workspace

        updated = await self._repo.update_fields(workspace_id, changes)
        if updated is None:
            raise NotFoundError("Workspace not found")
        return updated

    async def delete_workspace(self, workspace_id: UUID, user_id: UUID) -> None:
        """Owner-only. Notes and documents of the workspace are removed best-effort."""
        workspace = await self.require_member(workspace_id, user_id)
        if workspace.owner_id != user_id:
            raise PermissionDeniedError("Only the workspace owner can delete it")

        if not await self._repo.delete(workspace_id):
            raise NotFoundError("Workspace not found")
        logger.info("Workspace deleted", extra={"user_id": str(user_id), "workspace_id": str(workspace_id)})

        try:
            removed_notes = await self._notes.delete_by_workspace(workspace_id)
            removed_docs = await self._documents.delete_by_workspace(workspace_id)
            await self._storage.remove([d.file_path for d in removed_docs])
        except AppError as err:
            logger.warning(
                "Workspace cascade incomplete",
                extra={"workspace_id": str(workspace_id), "error": err.message},
            )
            return
        logger.debug(
            "Workspace cascade finished",
            extra={"workspace_id": str(workspace_id), "notes": removed_notes, "documents": len(removed_docs)},
        )
