from __future__ import annotations

from enum import Enum
from uuid import UUID

from pydantic import Field, field_validator

from .base import EntityModel, normalize_tags

MAX_CARD_TAGS = 10


class Card(EntityModel):
    """Public knowledge card with like/bookmark counters."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=10000)
    category: str = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list)
    author_id: UUID
    author_name: str
    likes: int = Field(default=0, ge=0)
    bookmarks: int = Field(default=0, ge=0)
    is_draft: bool = False

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        tags = normalize_tags(v)
        if len(tags) > MAX_CARD_TAGS:
            raise ValueError(f"Cannot have more than {MAX_CARD_TAGS} tags")
        return tags


class ReactionKind(str, Enum):
    LIKE = "like"
    BOOKMARK = "bookmark"


class CardReaction(EntityModel):
    """One user's like or bookmark on one card."""

    user_id: UUID
    card_id: UUID
