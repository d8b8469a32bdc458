from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import UUID  # noqa: TCH003

from pydantic import Field, field_validator

from knowledge_api.api.schemas.common import ApiModel
from knowledge_api.core.models.base import normalize_tags


class NoteCreate(ApiModel):
    title: str = Field(..., max_length=200, description="Note title")
    content: str = Field(default="", description="Note content")
    workspace_id: UUID | None = Field(default=None, description="Defaults to the caller's Personal workspace")
    tags: list[str] = Field(default_factory=list, description="Tags for categorization")
    category: str | None = None
    is_pinned: bool = False

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        title = v.strip()
        if not title:
            raise ValueError("Title is required")
        return title

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return normalize_tags(v)


class NoteUpdate(ApiModel):
    title: str | None = Field(default=None, max_length=200)
    content: str | None = None
    tags: list[str] | None = None
    category: str | None = None
    is_pinned: bool | None = None
    is_archived: bool | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        if v is None:
            return v
        title = v.strip()
        if not title:
            raise ValueError("Title cannot be empty")
        return title

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str] | None) -> list[str] | None:
        return normalize_tags(v) if v is not None else None


class NoteRead(ApiModel):
    id: UUID
    title: str
    content: str
    workspace_id: UUID
    author_id: UUID
    tags: list[str]
    category: str | None
    is_pinned: bool
    is_archived: bool
    ai_generated: bool
    created_at: datetime
    updated_at: datetime | None


class NoteResponse(ApiModel):
    success: bool = True
    message: str | None = None
    note: NoteRead


class NoteListResponse(ApiModel):
    success: bool = True
    notes: list[NoteRead]
