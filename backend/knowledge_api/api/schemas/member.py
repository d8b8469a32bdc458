from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from typing import Literal
from uuid import UUID  # noqa: TCH003

from pydantic import EmailStr, Field, field_validator

from knowledge_api.api.schemas.common import ApiModel
from knowledge_api.core.models.workspace import MemberRole  # noqa: TCH001

AssignableRole = Literal["admin", "member", "viewer"]


class MemberAdd(ApiModel):
    workspace_id: UUID
    email: EmailStr
    role: AssignableRole = Field(default="member", description="Role granted to the new member")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class MemberRoleUpdate(ApiModel):
    workspace_id: UUID
    role: AssignableRole


class MemberRead(ApiModel):
    user_id: UUID
    name: str
    email: str
    avatar: str = ""
    role: MemberRole
    joined_at: datetime
    is_owner: bool = False


class MemberResponse(ApiModel):
    success: bool = True
    message: str | None = None
    member: MemberRead


class MemberListResponse(ApiModel):
    success: bool = True
    members: list[MemberRead]
