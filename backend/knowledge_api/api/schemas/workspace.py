from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import UUID  # noqa: TCH003

from pydantic import Field, field_validator

from knowledge_api.api.schemas.common import ApiModel
from knowledge_api.core.models.base import normalize_tags
from knowledge_api.core.models.workspace import MemberRole, NotePermission, Visibility  # noqa: TCH001


class WorkspaceSettingsIn(ApiModel):
    visibility: Visibility | None = None
    allow_member_invites: bool | None = None
    default_note_permission: NotePermission | None = None


class WorkspaceCreate(ApiModel):
    name: str = Field(..., max_length=100)
    description: str = Field(default="", max_length=500)
    tags: list[str] = Field(default_factory=list)
    settings: WorkspaceSettingsIn | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        name = v.strip()
        if not name:
            raise ValueError("Workspace name is required")
        return name

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return normalize_tags(v)


class WorkspaceUpdate(ApiModel):
    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    tags: list[str] | None = None
    settings: WorkspaceSettingsIn | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        name = v.strip()
        if not name:
            raise ValueError("Workspace name cannot be empty")
        return name

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str] | None) -> list[str] | None:
        return normalize_tags(v) if v is not None else None


class WorkspaceSettingsRead(ApiModel):
    visibility: Visibility
    allow_member_invites: bool
    default_note_permission: NotePermission


class WorkspaceMemberRead(ApiModel):
    user_id: UUID
    role: MemberRole
    joined_at: datetime


class WorkspaceCounts(ApiModel):
    notes: int = 0
    documents: int = 0
    members: int = 0


class WorkspaceRead(ApiModel):
    id: UUID
    name: str
    description: str
    owner_id: UUID
    members: list[WorkspaceMemberRead]
    settings: WorkspaceSettingsRead
    tags: list[str]
    created_at: datetime
    updated_at: datetime | None = None
    is_owner: bool = False
    role: MemberRole | None = None
    member_count: int = 0
    counts: WorkspaceCounts | None = None


class WorkspaceResponse(ApiModel):
    success: bool = True
    message: str | None = None
    workspace: WorkspaceRead


class WorkspaceListResponse(ApiModel):
    success: bool = True
    workspaces: list[WorkspaceRead]


class WorkspaceCountsResponse(ApiModel):
    success: bool = True
    counts: WorkspaceCounts
