from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from knowledge_api.core.errors import (
    AuthenticationError,
    ConflictError,
    ErrorCode,
    NotFoundError,
    ValidationFailedError,
)
from knowledge_api.core.models.base import utcnow
from knowledge_api.core.models.user import User
from knowledge_api.core.security import create_access_token, hash_password, verify_password
from knowledge_api.utils.logging import get_logger
from knowledge_api.utils.validation import validate_password_strength

if TYPE_CHECKING:
    from knowledge_api.api.schemas.auth import LoginRequest, SignUpRequest
    from knowledge_api.core.repositories.user_repository import UserRepository


logger = get_logger(__name__)


class AuthService:
    """Authentication service handling business logic for auth operations."""

    def __init__(self, users: UserRepository) -> None:
        self._users = users

    async def sign_up(self, payload: SignUpRequest) -> tuple[User, str]:
        """Create the account and return it with a freshly issued token."""
        is_valid_password, password_error = validate_password_strength(payload.password)
        if not is_valid_password:
            raise ValidationFailedError(password_error)

        email = payload.email.lower().strip()
        if await self._users.get_by_email(email) is not None:
            logger.warning("Sign up rejected: email exists", extra={"email": email})
            raise ConflictError("An account with this email already exists", code=ErrorCode.EMAIL_EXISTS)

        # PBKDF2 is CPU-bound; keep it off the event loop
        password_hash = await asyncio.to_thread(hash_password, payload.password)
        now = utcnow()
        user = User(
            name=payload.name.strip(),
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        try:
            created = await self._users.create(user)
        except ConflictError as err:
            raise ConflictError(
                "An account with this email already exists", code=ErrorCode.EMAIL_EXISTS
            ) from err

        logger.info("User signed up successfully", extra={"email": created.email, "user_id": str(created.id)})
        return created, create_access_token(created.id, created.email, created.role.value)

    async def sign_in(self, payload: LoginRequest) -> tuple[User, str]:
        email = payload.email.lower().strip()
        password = payload.password

        if not email or not password:
            raise ValidationFailedError("Email and password are required")

        user = await self._users.get_by_email(email)
        if user is None:
            logger.warning("Sign in failed: unknown email", extra={"email": email})
            raise NotFoundError("No account found with this email")
        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            logger.warning("Sign in failed: wrong password", extra={"email": email, "user_id": str(user.id)})
            raise AuthenticationError("Incorrect password", code=ErrorCode.INVALID_PASSWORD)

        logger.info("User signed in successfully", extra={"email": user.email, "user_id": str(user.id)})
        return user, create_access_token(user.id, user.email, user.role.value)
