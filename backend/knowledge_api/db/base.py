from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING

import httpx
from supabase import PostgrestAPIError, create_client
from supabase.lib.client_options import ClientOptions

from knowledge_api.core.errors import ServiceUnavailableError
from knowledge_api.utils.logging import get_logger

if TYPE_CHECKING:
    from supabase import Client

    from knowledge_api.config import Settings

logger = get_logger(__name__)


class Database:
    """Process-wide handle to the Supabase project.

    Owned by the application lifespan; the client is created on first use and
    reused until ``close()``.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._client: Client | None = None
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def client(self) -> Client:
        if self._client is not None:
            return self._client
        with self._lock:
            if self._client is None:
                self._client = self._connect()
        return self._client

    def _connect(self) -> Client:
        logger.debug("Initializing Supabase client")
        if not self._settings.supabase_url or not self._settings.supabase_service_role_key:
            raise ServiceUnavailableError("Database is not configured")
        try:
            return create_client(
                self._settings.supabase_url,
                self._settings.supabase_service_role_key,
                options=ClientOptions(auto_refresh_token=False, persist_session=False),
            )
        except Exception as err:
            logger.error(
                "Failed to create Supabase client",
                extra={"error_type": type(err).__name__, "error_summary": str(err)[:100]},
            )
            raise ServiceUnavailableError() from err

    async def ping(self) -> None:
        """One-row select against ``users``; raises ServiceUnavailableError when unreachable."""
        client = self.client()
        try:
            await asyncio.to_thread(lambda: client.table("users").select("id").limit(1).execute())
        except (PostgrestAPIError, httpx.HTTPError) as err:
            raise ServiceUnavailableError() from err

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                logger.info("Releasing Supabase client")
            self._client = None
