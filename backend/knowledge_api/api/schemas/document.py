from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import UUID  # noqa: TCH003

from pydantic import Field, field_validator

from knowledge_api.api.schemas.common import ApiModel
from knowledge_api.core.models.base import normalize_tags


class DocumentSummaryRead(ApiModel):
    content: str
    key_points: list[str]
    topics: list[str]
    sentiment: str


class DocumentUpdate(ApiModel):
    title: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
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


class DocumentRead(ApiModel):
    id: UUID
    title: str
    description: str
    workspace_id: UUID
    author_id: UUID
    file_url: str
    file_name: str
    file_type: str
    file_size: int
    extracted_text: str | None = None
    summary: DocumentSummaryRead | None = None
    tags: list[str]
    category: str | None
    is_pinned: bool
    is_archived: bool
    view_count: int
    download_count: int
    created_at: datetime
    updated_at: datetime | None


class DocumentResponse(ApiModel):
    success: bool = True
    message: str | None = None
    document: DocumentRead


class DocumentListResponse(ApiModel):
    success: bool = True
    documents: list[DocumentRead]
