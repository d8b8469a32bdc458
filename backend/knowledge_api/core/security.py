"""Token issuing/verification and password hashing."""

from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

from knowledge_api.config import settings
from knowledge_api.core.errors import AuthenticationError, ErrorCode
from knowledge_api.core.models.base import AppBaseModel

_HASH_SCHEME = "pbkdf2_sha256"


class AuthUser(AppBaseModel):
    """Authenticated caller, as carried by a verified bearer token."""

    id: UUID
    email: str
    role: str = "user"
    expires_at: datetime | None = None


def create_access_token(user_id: UUID, email: str, role: str = "user") -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + timedelta(seconds=settings.jwt_expires_in),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> AuthUser:
    """Verify signature and expiry, returning the embedded identity.

    Raises:
        AuthenticationError: ``TOKEN_EXPIRED`` for an expired token,
            ``UNAUTHORIZED`` for anything else that fails verification.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Token expired", code=ErrorCode.TOKEN_EXPIRED) from exc
    except jwt.PyJWTError as exc:
        raise AuthenticationError("Invalid token") from exc

    try:
        return AuthUser(
            id=UUID(str(payload["sub"])),
            email=str(payload.get("email") or ""),
            role=str(payload.get("role") or "user"),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), UTC),
        )
    except ValueError as exc:
        raise AuthenticationError("Invalid token") from exc


def _derive(password: str, salt: bytes, iterations: int) -> str:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations).hex()


def hash_password(password: str, *, iterations: int | None = None) -> str:
    """Return ``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>``."""
    rounds = iterations or settings.password_hash_iterations
    salt = secrets.token_bytes(16)
    return f"{_HASH_SCHEME}${rounds}${salt.hex()}${_derive(password, salt, rounds)}"


def verify_password(password: str, encoded: str) -> bool:
    try:
        scheme, rounds, salt_hex, hash_hex = encoded.split("$", 3)
        iterations = int(rounds)
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False
    if scheme != _HASH_SCHEME:
        return False
    return hmac.compare_digest(_derive(password, salt, iterations), hash_hex)
