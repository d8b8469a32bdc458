from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(UTC)


def normalize_tags(tags: list[str] | None, *, limit: int | None = None) -> list[str]:
    """Trim tags, drop empties and duplicates, keep first-seen order."""
    normalized: list[str] = []
    for tag in tags or []:
        if not isinstance(tag, str):
            continue
        cleaned = tag.strip()
        if cleaned and cleaned not in normalized:
            normalized.append(cleaned)
    return normalized[:limit] if limit is not None else normalized


class AppBaseModel(PydanticBaseModel):
    """Base model for all domain models."""

    model_config = ConfigDict(
        from_attributes=True,
        extra="forbid",
        populate_by_name=True,
    )

    @classmethod
    def from_row(cls, row: dict[str, Any]):
        """Validate a database row, ignoring columns the model does not declare."""
        known = {k: v for k, v in row.items() if k in cls.model_fields}
        return cls.model_validate(known)


class TimestampedModel(AppBaseModel):
    """Base model with timestamp fields."""

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime | None = None


class EntityModel(TimestampedModel):
    """Timestamped model with a generated UUID primary key."""

    id: UUID = Field(default_factory=uuid4)
