from __future__ import annotations

import re

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 128
MAX_SEARCH_LENGTH = 60

PLACEHOLDER_MARKERS = ("your-", "<", "change-in-production")

# Characters that would break out of a PostgREST ``or=(...)`` filter.
_SEARCH_UNSAFE = re.compile(r"[<>,()%*\\\"']")


def validate_password_strength(password: str) -> tuple[bool, str | None]:
    """Validate password length."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    if len(password) > MAX_PASSWORD_LENGTH:
        return False, f"Password must be at most {MAX_PASSWORD_LENGTH} characters long"
    return True, None


def sanitize_search_query(raw: str | None) -> str:
    """Trim, cap at 60 characters and drop filter metacharacters."""
    query = (raw or "").strip()[:MAX_SEARCH_LENGTH]
    return _SEARCH_UNSAFE.sub("", query).strip()


def is_placeholder(value: str | None) -> bool:
    if not value:
        return False
    lowered = value.lower()
    return any(marker in lowered for marker in PLACEHOLDER_MARKERS)
