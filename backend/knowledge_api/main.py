from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from .api.errors import register_exception_handlers
from .api.middleware.security import SecurityMiddleware
from .api.router import api_router
from .config import settings
from .db.base import Database
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

CORS_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")
CORS_HEADERS = ("Accept", "Accept-Language", "Authorization", "Content-Type", "X-Requested-With")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Owns the database handle for the life of the process."""
    app.state.database = Database(settings)
    logger.info("Starting %s", settings.service_name, extra={"version": settings.version})
    try:
        yield
    finally:
        app.state.database.close()
        logger.info("Database handle released")


def _install_middleware(app: FastAPI) -> None:
    # Starlette runs the last-added middleware first
    app.add_middleware(
        SecurityMiddleware,
        auth_path_prefix=f"{settings.api_prefix}/auth",
        connect_src=settings.supabase_url,
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=list(CORS_METHODS),
        allow_headers=list(CORS_HEADERS),
        max_age=600,
    )


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title="Knowledge Workspace API",
        debug=settings.debug,
        version=settings.version,
        root_path=settings.root_path or "",
        lifespan=lifespan,
    )
    register_exception_handlers(app)
    _install_middleware(app)
    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()
