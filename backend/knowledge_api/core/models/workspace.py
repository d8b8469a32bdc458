from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import Field

from .base import AppBaseModel, EntityModel, utcnow


class MemberRole(str, Enum):
    """Role of a user inside one workspace."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


MANAGER_ROLES = frozenset({MemberRole.OWNER, MemberRole.ADMIN})


class Visibility(str, Enum):
    PRIVATE = "private"
    TEAM = "team"
    PUBLIC = "public"


class NotePermission(str, Enum):
    EDIT = "edit"
    VIEW = "view"


class WorkspaceMember(AppBaseModel):
    user_id: UUID
    role: MemberRole = MemberRole.MEMBER
    joined_at: datetime = Field(default_factory=utcnow)


class WorkspaceSettings(AppBaseModel):
    visibility: Visibility = Visibility.PRIVATE
    allow_member_invites: bool = False
    default_note_permission: NotePermission = NotePermission.EDIT


class Workspace(EntityModel):
    """Named container scoping notes, documents and members.

    The owner is always present in ``members`` with the ``owner`` role, so
    membership checks only ever look at ``members``.
    """

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    owner_id: UUID
    members: list[WorkspaceMember] = Field(default_factory=list)
    settings: WorkspaceSettings = Field(default_factory=WorkspaceSettings)
    tags: list[str] = Field(default_factory=list)

    def member(self, user_id: UUID) -> WorkspaceMember | None:
        for entry in self.members:
            if entry.user_id == user_id:
                return entry
        return None

    def has_member(self, user_id: UUID) -> bool:
        return self.member(user_id) is not None

    def can_manage(self, user_id: UUID) -> bool:
        """Owner or admin."""
        if self.owner_id == user_id:
            return True
        entry = self.member(user_id)
        return entry is not None and entry.role in MANAGER_ROLES
