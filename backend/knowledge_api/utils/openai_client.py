from __future__ import annotations

from functools import lru_cache

from openai import AsyncOpenAI

from knowledge_api.config import settings
from knowledge_api.utils.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_openai_client() -> AsyncOpenAI:
    """Process-wide OpenAI client for the AI assistant.

    The SDK's own retries are disabled: an upstream failure surfaces on the
    request that triggered it. ``APP_OPENAI_API_KEY`` wins over the SDK's
    ``OPENAI_API_KEY``.
    """
    options = {"max_retries": 0, "timeout": settings.ai_request_timeout}
    if settings.openai_api_key:
        logger.debug("Initializing OpenAI client with APP_OPENAI_API_KEY")
        return AsyncOpenAI(api_key=settings.openai_api_key, **options)
    logger.debug("Initializing OpenAI client from OPENAI_API_KEY")
    return AsyncOpenAI(**options)
