from __future__ import annotations

from uuid import UUID, uuid4

from pydantic import Field, field_validator

from .base import EntityModel, normalize_tags


class Note(EntityModel):
    """Note domain model."""

    title: str = Field(..., min_length=1, max_length=200, description="Note title")
    content: str = Field(default="", description="Note content")

    # Ownership and scope
    workspace_id: UUID
    author_id: UUID

    # Categorization and organization
    tags: list[str] = Field(default_factory=list, description="Tags for categorization")
    category: str | None = None
    is_pinned: bool = Field(default=False, description="Pinned notes are listed first")
    is_archived: bool = Field(default=False, description="Whether note is archived")
    ai_generated: bool = False

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return normalize_tags(v)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": str(uuid4()),
                    "title": "Sprint retro",
                    "content": "Ship the upload limits before the demo; move search fixes to next sprint.",
                    "workspace_id": str(uuid4()),
                    "author_id": str(uuid4()),
                    "tags": ["retro", "planning"],
                    "is_pinned": True,
                }
            ]
        }
    }
