from __future__ import annotations

from uuid import UUID

from pydantic import Field, field_validator

from .base import AppBaseModel, EntityModel, normalize_tags


class DocumentSummary(AppBaseModel):
    content: str = ""
    key_points: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    sentiment: str = "neutral"


class Document(EntityModel):
    """Uploaded file plus the text extracted from it."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=1000)
    workspace_id: UUID
    author_id: UUID

    file_url: str
    file_path: str
    file_name: str
    file_type: str
    file_size: int = Field(..., ge=0)
    extracted_text: str = ""
    summary: DocumentSummary | None = None

    tags: list[str] = Field(default_factory=list)
    category: str | None = None
    is_pinned: bool = False
    is_archived: bool = False
    view_count: int = 0
    download_count: int = 0

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return normalize_tags(v)
