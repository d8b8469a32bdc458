from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import UUID  # noqa: TCH003

from pydantic import Field, field_validator

from knowledge_api.api.schemas.common import ApiModel
from knowledge_api.core.models.base import normalize_tags
from knowledge_api.core.models.card import MAX_CARD_TAGS


def _validate_card_tags(v: list[str]) -> list[str]:
    tags = normalize_tags(v)
    if len(tags) > MAX_CARD_TAGS:
        raise ValueError(f"Cannot have more than {MAX_CARD_TAGS} tags")
    return tags


class CardCreate(ApiModel):
    title: str = Field(..., max_length=200)
    content: str = Field(..., max_length=10000)
    category: str
    tags: list[str] = Field(default_factory=list)
    is_draft: bool = False

    @field_validator("title", "content", "category")
    @classmethod
    def require_text(cls, v: str) -> str:
        text = v.strip()
        if not text:
            raise ValueError("Title, content and category are required")
        return text

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return _validate_card_tags(v)


class CardUpdate(ApiModel):
    title: str | None = Field(default=None, max_length=200)
    content: str | None = Field(default=None, max_length=10000)
    category: str | None = None
    tags: list[str] | None = None
    is_draft: bool | None = None

    @field_validator("title", "content", "category")
    @classmethod
    def reject_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        text = v.strip()
        if not text:
            raise ValueError("Title, content and category cannot be empty")
        return text

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str] | None) -> list[str] | None:
        return _validate_card_tags(v) if v is not None else None


class CardRead(ApiModel):
    id: UUID
    title: str
    content: str
    category: str
    tags: list[str]
    author_id: UUID
    author_name: str
    likes: int
    bookmarks: int
    is_draft: bool
    created_at: datetime
    updated_at: datetime | None


class Pagination(ApiModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class CardResponse(ApiModel):
    success: bool = True
    message: str | None = None
    card: CardRead


class CardListResponse(ApiModel):
    success: bool = True
    cards: list[CardRead]
    pagination: Pagination


class ReactionResponse(ApiModel):
    """Outcome of a like/bookmark toggle: whether it is now active and the new counter."""

    success: bool = True
    active: bool
    count: int
