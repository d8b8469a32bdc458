from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import UUID  # noqa: TCH003

from pydantic import Field

from knowledge_api.api.schemas.common import ApiModel


class NoteHit(ApiModel):
    id: UUID
    title: str
    workspace_id: UUID
    updated_at: datetime | None


class DocumentHit(ApiModel):
    id: UUID
    title: str
    file_name: str
    workspace_id: UUID
    created_at: datetime


class MemberHit(ApiModel):
    id: UUID
    name: str
    email: str
    avatar: str = ""


class WorkspaceHit(ApiModel):
    id: UUID
    name: str
    description: str


class SearchResults(ApiModel):
    notes: list[NoteHit] = Field(default_factory=list)
    documents: list[DocumentHit] = Field(default_factory=list)
    members: list[MemberHit] = Field(default_factory=list)
    workspaces: list[WorkspaceHit] = Field(default_factory=list)


class SearchResponse(ApiModel):
    success: bool = True
    query: str
    results: SearchResults
