from __future__ import annotations

from uuid import UUID  # noqa: TCH003

from fastapi import APIRouter, Depends, Query, status

from knowledge_api.api.schemas.common import CountResponse, SuccessResponse
from knowledge_api.api.schemas.note import NoteCreate, NoteListResponse, NoteRead, NoteResponse, NoteUpdate
from knowledge_api.core.security import AuthUser  # noqa: TCH001
from knowledge_api.core.services.note_service import NoteService  # noqa: TCH001
from knowledge_api.dependencies import get_current_user, get_note_service

router = APIRouter()


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: NoteCreate,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    note = await service.create_note(payload, user_id=current_user.id)
    return NoteResponse(message="Note created successfully", note=NoteRead.model_validate(note))


@router.get("", response_model=NoteListResponse)
async def list_notes(
    workspace_id: UUID | None = Query(default=None, alias="workspaceId"),
    limit: int = Query(default=100, ge=1, le=500),
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    notes = await service.list_notes(current_user.id, workspace_id=workspace_id, limit=limit)
    return NoteListResponse(notes=[NoteRead.model_validate(n) for n in notes])


@router.get("/count", response_model=CountResponse)
async def count_notes(
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    return CountResponse(count=await service.count_notes(current_user.id))


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: UUID,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    note = await service.get_note(note_id, user_id=current_user.id)
    return NoteResponse(note=NoteRead.model_validate(note))


@router.patch("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: UUID,
    payload: NoteUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    note = await service.update_note(note_id, payload, user_id=current_user.id)
    return NoteResponse(message="Note updated successfully", note=NoteRead.model_validate(note))


@router.delete("/{note_id}", response_model=SuccessResponse)
async def delete_note(
    note_id: UUID,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    await service.delete_note(note_id, user_id=current_user.id)
    return SuccessResponse(message="Note deleted successfully")
