"""Closed error taxonomy shared by services and the HTTP layer.

Services raise these; ``knowledge_api.api.errors`` turns them into the
``{"success": false, "error": ..., "code": ...}`` envelope.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    EMAIL_EXISTS = "EMAIL_EXISTS"
    ALREADY_MEMBER = "ALREADY_MEMBER"
    RATE_LIMITED = "RATE_LIMITED"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    AI_SERVICE_ERROR = "AI_SERVICE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500
    default_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        *,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationFailedError(AppError):
    status_code = 400
    default_code = ErrorCode.VALIDATION_ERROR
    default_message = "Invalid request"


class AuthenticationError(AppError):
    status_code = 401
    default_code = ErrorCode.UNAUTHORIZED
    default_message = "Authentication required"


class PermissionDeniedError(AppError):
    status_code = 403
    default_code = ErrorCode.FORBIDDEN
    default_message = "Access denied"


class NotFoundError(AppError):
    status_code = 404
    default_code = ErrorCode.NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = 409
    default_code = ErrorCode.CONFLICT
    default_message = "Resource already exists"


class ServiceUnavailableError(AppError):
    status_code = 503
    default_code = ErrorCode.SERVICE_UNAVAILABLE
    default_message = "Database connection error. Please try again later."


class AIServiceError(AppError):
    status_code = 500
    default_code = ErrorCode.AI_SERVICE_ERROR
    default_message = "AI service failed"
