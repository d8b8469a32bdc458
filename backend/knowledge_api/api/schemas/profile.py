from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from typing import Literal
from uuid import UUID  # noqa: TCH003

from pydantic import Field, field_validator

from knowledge_api.api.schemas.auth import UserRead  # noqa: TCH001
from knowledge_api.api.schemas.common import ApiModel
from knowledge_api.core.models.base import normalize_tags
from knowledge_api.core.models.user import Theme  # noqa: TCH001


class ProfileUpdate(ApiModel):
    name: str | None = None
    bio: str | None = Field(default=None, max_length=500)
    favorite_topics: list[str] | None = None
    theme: Theme | None = None
    avatar: str | None = Field(default=None, max_length=2048)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        name = v.strip()
        if len(name) < 2:
            raise ValueError("Name must be at least 2 characters")
        return name[:100]

    @field_validator("favorite_topics")
    @classmethod
    def validate_topics(cls, v: list[str] | None) -> list[str] | None:
        return normalize_tags(v, limit=20) if v is not None else None


class ProfileResponse(ApiModel):
    success: bool = True
    message: str | None = None
    user: UserRead


class ProfileStats(ApiModel):
    notes: int = 0
    documents: int = 0
    workspaces: int = 0
    cards: int = 0
    bookmarks: int = 0
    likes: int = 0


class ProfileStatsResponse(ApiModel):
    success: bool = True
    stats: ProfileStats


class ActivityItem(ApiModel):
    id: UUID
    card_id: UUID
    title: str
    category: str = ""
    type: Literal["bookmarked"] = "bookmarked"
    timestamp: datetime


class ProfileActivityResponse(ApiModel):
    success: bool = True
    activities: list[ActivityItem] = Field(default_factory=list)
