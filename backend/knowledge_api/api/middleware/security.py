from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from knowledge_api.utils.logging import get_logger

if TYPE_CHECKING:
    from fastapi import Request
    from starlette.types import ASGIApp

logger = get_logger(__name__)

HSTS = "max-age=15552000; includeSubDomains"


def build_csp(connect_src: str = "") -> str:
    """CSP for API responses; storage downloads come from the Supabase project."""
    sources = " ".join(s for s in ("'self'", connect_src.rstrip("/"), "https://*.supabase.co") if s)
    return (
        "default-src 'self'; "
        "img-src 'self' data: https:; "
        f"connect-src {sources}; "
        "frame-ancestors 'none';"
    )


class SecurityMiddleware(BaseHTTPMiddleware):
    """Adds security headers to every response and audits auth endpoint traffic."""

    def __init__(self, app: ASGIApp, *, auth_path_prefix: str = "/api/auth", connect_src: str = ""):
        super().__init__(app)
        self._auth_path_prefix = auth_path_prefix
        self._headers = {
            "X-Content-Type-Options": "nosniff",
            "X-Frame-Options": "DENY",
            "Referrer-Policy": "strict-origin-when-cross-origin",
            "Content-Security-Policy": build_csp(connect_src),
            "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
            "Pragma": "no-cache",
        }

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers.update(self._headers)
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = HSTS

        if request.url.path.startswith(self._auth_path_prefix):
            self._audit(request, response.status_code)
        return response

    @staticmethod
    def _audit(request: Request, status_code: int) -> None:
        level = logger.warning if status_code >= 400 else logger.info
        level(
            "Auth endpoint accessed",
            extra={
                "path": request.url.path,
                "method": request.method,
                "ip": request.client.host if request.client else "unknown",
                "user_agent": request.headers.get("user-agent", "unknown")[:100],
                "status_code": status_code,
            },
        )
