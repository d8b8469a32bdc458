from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from knowledge_api.api.schemas.search import (
    DocumentHit,
    MemberHit,
    NoteHit,
    SearchResponse,
    SearchResults,
    WorkspaceHit,
)
from knowledge_api.core.security import AuthUser  # noqa: TCH001
from knowledge_api.core.services.search_service import SearchService  # noqa: TCH001
from knowledge_api.dependencies import get_current_user, get_search_service

router = APIRouter()


@router.get("", response_model=SearchResponse)
async def search(
    q: str | None = Query(default=None),
    current_user: AuthUser = Depends(get_current_user),
    service: SearchService = Depends(get_search_service),
):
    """Search the caller's notes, documents, co-members and workspaces.

    At most five hits per bucket, most recent first.
    """
    query, buckets = await service.search(user_id=current_user.id, raw_query=q)
    results = SearchResults(
        notes=[NoteHit.model_validate(n) for n in buckets["notes"]],
        documents=[DocumentHit.model_validate(d) for d in buckets["documents"]],
        members=[MemberHit.model_validate(m) for m in buckets["members"]],
        workspaces=[WorkspaceHit.model_validate(w) for w in buckets["workspaces"]],
    )
    return SearchResponse(query=query, results=results)
