from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from knowledge_api.core.errors import AppError
from knowledge_api.core.models.base import utcnow
from knowledge_api.utils.logging import get_logger
from knowledge_api.utils.validation import is_placeholder

if TYPE_CHECKING:
    from knowledge_api.config import Settings
    from knowledge_api.db.base import Database

logger = get_logger(__name__)

MIN_JWT_SECRET_LENGTH = 32


def _check(status: str, message: str) -> dict[str, str]:
    return {"status": status, "message": message}


class HealthService:
    """Connectivity and configuration checks for manual diagnosis."""

    def __init__(self, database: Database | None, settings: Settings) -> None:
        self._database = database
        self._settings = settings

    async def _database_check(self) -> dict[str, str]:
        if self._database is None:
            return _check("error", "Database is not initialised")
        try:
            await self._database.ping()
        except AppError as err:
            logger.warning("Health check: database unreachable", extra={"error": err.message})
            return _check("error", "Database connection failed")
        return _check("ok", "Connected")

    def _environment_check(self) -> dict[str, str]:
        s = self._settings
        required = {
            "APP_SUPABASE_URL": s.supabase_url,
            "APP_SUPABASE_SERVICE_ROLE_KEY": s.supabase_service_role_key,
            "APP_JWT_SECRET": s.jwt_secret,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            return _check("error", f"Missing required settings: {', '.join(missing)}")
        placeholders = [name for name, value in required.items() if is_placeholder(value)]
        if placeholders:
            return _check("warning", f"Placeholder values in: {', '.join(placeholders)}")
        return _check("ok", "All required settings present")

    def _openai_check(self) -> dict[str, str]:
        key = self._settings.openai_api_key
        if not key:
            return _check("warning", "OpenAI API key is not configured; AI features are disabled")
        if is_placeholder(key):
            return _check("warning", "OpenAI API key is a placeholder")
        if not key.startswith("sk-"):
            return _check("warning", "OpenAI API key format looks invalid")
        return _check("ok", "Configured")

    def _jwt_check(self) -> dict[str, str]:
        secret = self._settings.jwt_secret
        if not secret:
            return _check("error", "JWT secret is missing")
        if is_placeholder(secret):
            return _check("warning", "JWT secret is a placeholder")
        if len(secret) < MIN_JWT_SECRET_LENGTH:
            return _check("warning", f"JWT secret should be at least {MIN_JWT_SECRET_LENGTH} characters")
        return _check("ok", "Configured")

    async def check(self) -> tuple[int, dict[str, Any]]:
        """Run every check; returns the HTTP status and the report body."""
        started = time.perf_counter()
        checks = {
            "database": await self._database_check(),
            "environment": self._environment_check(),
            "openai": self._openai_check(),
            "jwt": self._jwt_check(),
        }
        statuses = {c["status"] for c in checks.values()}
        if "error" in statuses:
            overall, status_code = "unhealthy", 503
        elif "warning" in statuses:
            overall, status_code = "warning", 200
        else:
            overall, status_code = "healthy", 200

        elapsed_ms = (time.perf_counter() - started) * 1000
        return status_code, {
            "status": overall,
            "service": self._settings.service_name,
            "version": self._settings.version,
            "timestamp": utcnow(),
            "checks": checks,
            "response_time": f"{elapsed_ms:.0f}ms",
        }
