from __future__ import annotations

import math
import time
from collections import deque
from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from knowledge_api.config import settings
from knowledge_api.core.errors import AuthenticationError, ServiceUnavailableError
from knowledge_api.core.repositories.implementations.supabase.card_repository import (
    SupabaseCardReactionRepository,
    SupabaseCardRepository,
)
from knowledge_api.core.repositories.implementations.supabase.chat_repository import SupabaseChatRepository
from knowledge_api.core.repositories.implementations.supabase.document_repository import (
    SupabaseDocumentRepository,
)
from knowledge_api.core.repositories.implementations.supabase.file_storage import SupabaseFileStorage
from knowledge_api.core.repositories.implementations.supabase.note_repository import SupabaseNoteRepository
from knowledge_api.core.repositories.implementations.supabase.user_repository import SupabaseUserRepository
from knowledge_api.core.repositories.implementations.supabase.workspace_repository import (
    SupabaseWorkspaceRepository,
)
from knowledge_api.core.security import AuthUser, decode_access_token
from knowledge_api.core.services.ai_service import AIService, ai_configured
from knowledge_api.core.services.assistant_service import AssistantService
from knowledge_api.core.services.auth_service import AuthService
from knowledge_api.core.services.card_service import CardService
from knowledge_api.core.services.chat_service import ChatService
from knowledge_api.core.services.document_service import DocumentService
from knowledge_api.core.services.health_service import HealthService
from knowledge_api.core.services.member_service import MemberService
from knowledge_api.core.services.note_service import NoteService
from knowledge_api.core.services.search_service import SearchService
from knowledge_api.core.services.stats_service import StatsService
from knowledge_api.core.services.user_service import UserService
from knowledge_api.core.services.workspace_service import WorkspaceService
from knowledge_api.db.base import Database
from knowledge_api.utils.logging import get_logger
from knowledge_api.utils.openai_client import get_openai_client

logger = get_logger(__name__)

# Use auto_error=False to handle missing tokens gracefully
http_bearer = HTTPBearer(auto_error=False)

if TYPE_CHECKING:
    from supabase import Client

    from knowledge_api.core.repositories.card_repository import CardReactionRepository, CardRepository
    from knowledge_api.core.repositories.chat_repository import ChatRepository
    from knowledge_api.core.repositories.document_repository import DocumentRepository
    from knowledge_api.core.repositories.file_storage import FileStorage
    from knowledge_api.core.repositories.note_repository import NoteRepository
    from knowledge_api.core.repositories.user_repository import UserRepository
    from knowledge_api.core.repositories.workspace_repository import WorkspaceRepository


# Sliding-window attempt log per "<operation>:<client ip>", process-local
_attempts: dict[str, deque[float]] = {}
_SWEEP_AT = 1024


def _prune(log: deque[float], cutoff: float) -> None:
    while log and log[0] <= cutoff:
        log.popleft()


def _sweep(cutoff: float) -> None:
    """Drop every identifier whose attempts have all left the window."""
    for identifier in list(_attempts):
        _prune(_attempts[identifier], cutoff)
        if not _attempts[identifier]:
            del _attempts[identifier]


def _retry_after(identifier: str, now: float) -> int | None:
    """Seconds until ``identifier`` may try again, or None when under the limit.

    Every call within the limit is recorded as an attempt.
    """
    window = settings.login_attempt_window
    cutoff = now - window
    if len(_attempts) >= _SWEEP_AT:
        _sweep(cutoff)

    log = _attempts.get(identifier)
    if log is not None:
        _prune(log, cutoff)
        if len(log) >= settings.max_login_attempts:
            return max(1, math.ceil(window - (now - log[0])))
    _attempts.setdefault(identifier, deque()).append(now)
    return None


def rate_limit_by_ip(request: Request, operation: str = "default") -> None:
    """Reject the request with 429 once the caller's IP exhausts its attempts."""
    if not settings.enable_rate_limiting:
        return
    client_ip = request.client.host if request.client else "unknown"
    wait = _retry_after(f"{operation}:{client_ip}", time.monotonic())
    if wait is None:
        return

    logger.warning("Rate limited %s attempt", operation, extra={"ip": client_ip, "retry_after": wait})
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=f"Too many {operation} attempts. Please try again later.",
        headers={
            "Retry-After": str(wait),
            "RateLimit-Limit": str(settings.max_login_attempts),
            "RateLimit-Remaining": "0",
            "RateLimit-Reset": str(wait),
        },
    )


def reset_rate_limits() -> None:
    _attempts.clear()


def get_database(request: Request) -> Database:
    """Database handle created by the application lifespan."""
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None:
        raise ServiceUnavailableError()
    return database


def get_supabase_client(database: Database = Depends(get_database)) -> Client:
    return database.client()


def get_user_repository(client: Client = Depends(get_supabase_client)) -> UserRepository:
    return SupabaseUserRepository(client)


def get_workspace_repository(client: Client = Depends(get_supabase_client)) -> WorkspaceRepository:
    return SupabaseWorkspaceRepository(client)


def get_note_repository(client: Client = Depends(get_supabase_client)) -> NoteRepository:
    return SupabaseNoteRepository(client)


def get_document_repository(client: Client = Depends(get_supabase_client)) -> DocumentRepository:
    return SupabaseDocumentRepository(client)


def get_chat_repository(client: Client = Depends(get_supabase_client)) -> ChatRepository:
    return SupabaseChatRepository(client)


def get_card_repository(client: Client = Depends(get_supabase_client)) -> CardRepository:
    return SupabaseCardRepository(client)


def get_card_reaction_repository(client: Client = Depends(get_supabase_client)) -> CardReactionRepository:
    return SupabaseCardReactionRepository(client)


def get_file_storage(client: Client = Depends(get_supabase_client)) -> FileStorage:
    return SupabaseFileStorage(client, settings.storage_bucket)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(http_bearer),
) -> AuthUser:
    """Verify the bearer token and return the authenticated caller."""
    if not credentials or not credentials.credentials:
        raise AuthenticationError("Authentication required")
    jwt = credentials.credentials
    if len(jwt.split(".")) != 3:
        raise AuthenticationError("Invalid token format")
    return decode_access_token(jwt)


def get_auth_service(users: UserRepository = Depends(get_user_repository)) -> AuthService:
    return AuthService(users)


def get_user_service(
    users: UserRepository = Depends(get_user_repository),
    workspaces: WorkspaceRepository = Depends(get_workspace_repository),
    notes: NoteRepository = Depends(get_note_repository),
    documents: DocumentRepository = Depends(get_document_repository),
    cards: CardRepository = Depends(get_card_repository),
    reactions: CardReactionRepository = Depends(get_card_reaction_repository),
) -> UserService:
    return UserService(users, workspaces, notes, documents, cards, reactions)


def get_workspace_service(
    repo: WorkspaceRepository = Depends(get_workspace_repository),
    notes: NoteRepository = Depends(get_note_repository),
    documents: DocumentRepository = Depends(get_document_repository),
    storage: FileStorage = Depends(get_file_storage),
) -> WorkspaceService:
    return WorkspaceService(repo, notes, documents, storage)


def get_member_service(
    workspaces: WorkspaceService = Depends(get_workspace_service),
    workspace_repo: WorkspaceRepository = Depends(get_workspace_repository),
    users: UserRepository = Depends(get_user_repository),
) -> MemberService:
    return MemberService(workspaces, workspace_repo, users)


def get_note_service(
    repo: NoteRepository = Depends(get_note_repository),
    workspaces: WorkspaceService = Depends(get_workspace_service),
) -> NoteService:
    return NoteService(repo, workspaces)


def get_document_service(
    repo: DocumentRepository = Depends(get_document_repository),
    storage: FileStorage = Depends(get_file_storage),
    workspaces: WorkspaceService = Depends(get_workspace_service),
) -> DocumentService:
    return DocumentService(repo, storage, workspaces, max_upload_bytes=settings.max_upload_bytes)


def get_card_service(
    repo: CardRepository = Depends(get_card_repository),
    reactions: CardReactionRepository = Depends(get_card_reaction_repository),
    users: UserRepository = Depends(get_user_repository),
) -> CardService:
    return CardService(repo, reactions, users)


def get_chat_service(
    repo: ChatRepository = Depends(get_chat_repository),
    notes: NoteRepository = Depends(get_note_repository),
    documents: DocumentRepository = Depends(get_document_repository),
    workspaces: WorkspaceService = Depends(get_workspace_service),
) -> ChatService:
    return ChatService(repo, notes, documents, workspaces)


def get_search_service(
    notes: NoteRepository = Depends(get_note_repository),
    documents: DocumentRepository = Depends(get_document_repository),
    users: UserRepository = Depends(get_user_repository),
    workspaces: WorkspaceRepository = Depends(get_workspace_repository),
) -> SearchService:
    return SearchService(notes, documents, users, workspaces)


def get_stats_service(
    workspaces: WorkspaceService = Depends(get_workspace_service),
    notes: NoteRepository = Depends(get_note_repository),
    documents: DocumentRepository = Depends(get_document_repository),
    chats: ChatRepository = Depends(get_chat_repository),
) -> StatsService:
    return StatsService(workspaces, notes, documents, chats)


def get_health_service(database: Database = Depends(get_database)) -> HealthService:
    return HealthService(database, settings)


def get_ai_service() -> AIService:
    """Construct AIService with the shared OpenAI client (None when no key is configured)."""
    client = get_openai_client() if ai_configured() else None
    return AIService(client, model=settings.ai_model, tags_model=settings.ai_tags_model)


def get_assistant_service(
    ai: AIService = Depends(get_ai_service),
    notes: NoteService = Depends(get_note_service),
    documents: DocumentService = Depends(get_document_service),
    chats: ChatService = Depends(get_chat_service),
) -> AssistantService:
    return AssistantService(ai, notes, documents, chats)
