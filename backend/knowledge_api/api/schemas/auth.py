from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import UUID  # noqa: TCH003

from pydantic import EmailStr, Field, field_validator

from knowledge_api.api.schemas.common import ApiModel
from knowledge_api.core.models.user import Theme, UserRole  # noqa: TCH001
from knowledge_api.utils.validation import MAX_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH


class SignUpRequest(ApiModel):
    """Request to create an account."""

    name: str = Field(..., description="Display name, at least 2 characters")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        max_length=MAX_PASSWORD_LENGTH,
        description="User's password",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        name = v.strip()
        if len(name) < 2:
            raise ValueError("Name must be at least 2 characters")
        if len(name) > 100:
            raise ValueError("Name must be at most 100 characters")
        return name

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginRequest(ApiModel):
    """Request to sign in with email and password."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserRead(ApiModel):
    id: UUID
    name: str
    email: str
    role: UserRole
    bio: str
    favorite_topics: list[str]
    theme: Theme
    avatar: str
    created_at: datetime
    updated_at: datetime | None = None


class AuthResponse(ApiModel):
    """Token plus the account it was issued for."""

    success: bool = True
    message: str
    token: str
    user: UserRead


class UserResponse(ApiModel):
    success: bool = True
    user: UserRead
