from __future__ import annotations

from typing import TYPE_CHECKING, Any

from knowledge_api.core.errors import (
    ConflictError,
    ErrorCode,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from knowledge_api.core.models.workspace import MemberRole, WorkspaceMember
from knowledge_api.utils.logging import get_logger

if TYPE_CHECKING:
    from uuid import UUID

    from knowledge_api.core.models.user import User
    from knowledge_api.core.models.workspace import Workspace
    from knowledge_api.core.repositories.user_repository import UserRepository
    from knowledge_api.core.repositories.workspace_repository import WorkspaceRepository
    from knowledge_api.core.services.workspace_service import WorkspaceService

logger = get_logger(__name__)


def _member_view(workspace: Workspace, entry: WorkspaceMember, user: User | None) -> dict[str, Any]:
    return {
        "user_id": entry.user_id,
        "name": user.name if user else "Unknown user",
        "email": user.email if user else "",
        "avatar": user.avatar if user else "",
        "role": entry.role,
        "joined_at": entry.joined_at,
        "is_owner": entry.user_id == workspace.owner_id,
    }


class MemberService:
    """Membership rows of a workspace, joined with the user records they point at."""

    def __init__(
        self,
        workspaces: WorkspaceService,
        workspace_repo: WorkspaceRepository,
        users: UserRepository,
    ) -> None:
        self._workspaces = workspaces
        self._workspace_repo = workspace_repo
        self._users = users

    async def list_members(self, workspace_id: UUID, user_id: UUID) -> list[dict[str, Any]]:
        workspace = await self._workspaces.require_member(workspace_id, user_id)
        users = await self._users.get_many([m.user_id for m in workspace.members])
        by_id = {u.id: u for u in users}
        return [_member_view(workspace, m, by_id.get(m.user_id)) for m in workspace.members]

    async def get_member(self, workspace_id: UUID, member_id: UUID, user_id: UUID) -> dict[str, Any]:
        workspace = await self._workspaces.require_member(workspace_id, user_id)
        entry = workspace.member(member_id)
        if entry is None:
            raise NotFoundError("Member not found")
        return _member_view(workspace, entry, await self._users.get(member_id))

    async def add_member(self, add_dto, user_id: UUID) -> dict[str, Any]:
        workspace = await self._workspaces.require_manager(add_dto.workspace_id, user_id)

        user = await self._users.get_by_email(add_dto.email)
        if user is None:
            raise NotFoundError("No user found with this email")
        if workspace.has_member(user.id):
            raise ConflictError("User is already a member of this workspace", code=ErrorCode.ALREADY_MEMBER)

        entry = WorkspaceMember(user_id=user.id, role=MemberRole(add_dto.role))
        updated = await self._workspace_repo.update_fields(
            workspace.id, {"members": [*workspace.members, entry]}
        )
        if updated is None:
            raise NotFoundError("Workspace not found")
        logger.info(
            "Member added",
            extra={"workspace_id": str(workspace.id), "member_id": str(user.id), "role": entry.role.value},
        )
        return _member_view(updated, entry, user)

    async def update_role(self, member_id: UUID, update_dto, user_id: UUID) -> dict[str, Any]:
        workspace = await self._workspaces.require_manager(update_dto.workspace_id, user_id)
        entry = workspace.member(member_id)
        if entry is None:
            raise NotFoundError("Member not found")
        if member_id == workspace.owner_id or entry.role == MemberRole.OWNER:
            raise ValidationFailedError("The owner's role cannot be changed")

        new_entry = entry.model_copy(update={"role": MemberRole(update_dto.role)})
        members = [new_entry if m.user_id == member_id else m for m in workspace.members]
        updated = await self._workspace_repo.update_fields(workspace.id, {"members": members})
        if updated is None:
            raise NotFoundError("Workspace not found")
        return _member_view(updated, new_entry, await self._users.get(member_id))

    async def remove_member(self, workspace_id: UUID, member_id: UUID, user_id: UUID) -> None:
        """Managers may remove anyone but the owner; any member may remove themselves."""
        workspace = await self._workspaces.require_member(workspace_id, user_id)
        if member_id != user_id and not workspace.can_manage(user_id):
            raise PermissionDeniedError("Only workspace owners and admins can remove members")
        if workspace.member(member_id) is None:
            raise NotFoundError("Member not found")
        if member_id == workspace.owner_id:
            raise ValidationFailedError("The workspace owner cannot be removed")

        members = [m for m in workspace.members if m.user_id != member_id]
        await self._workspace_repo.update_fields(workspace.id, {"members": members})
        logger.info(
            "Member removed",
            extra={"workspace_id": str(workspace.id), "member_id": str(member_id), "by": str(user_id)},
        )
