from __future__ import annotations

from enum import Enum

from pydantic import Field

from .base import EntityModel


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class User(EntityModel):
    """Registered account. ``email`` is unique and stored lower-cased."""

    name: str = Field(..., min_length=2, max_length=100)
    email: str
    password_hash: str
    role: UserRole = UserRole.USER
    bio: str = ""
    favorite_topics: list[str] = Field(default_factory=list)
    theme: Theme = Theme.LIGHT
    avatar: str = ""
