from __future__ import annotations

import json
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from knowledge_api.api.schemas.common import CountResponse, SuccessResponse
from knowledge_api.api.schemas.document import (
    DocumentListResponse,
    DocumentRead,
    DocumentResponse,
    DocumentUpdate,
)
from knowledge_api.config import settings
from knowledge_api.core.errors import ValidationFailedError
from knowledge_api.core.models.base import normalize_tags
from knowledge_api.core.security import AuthUser  # noqa: TCH001
from knowledge_api.core.services.document_service import DocumentService  # noqa: TCH001
from knowledge_api.dependencies import get_current_user, get_document_service

router = APIRouter()


def _parse_tags(raw: str | None) -> list[str]:
    """Tags arrive as a JSON list inside a form field."""
    if not raw or not raw.strip():
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as err:
        raise ValidationFailedError("Tags must be a JSON list of strings") from err
    if not isinstance(value, list):
        raise ValidationFailedError("Tags must be a JSON list of strings")
    return normalize_tags(value)


def _parse_workspace_id(raw: str | None) -> UUID | None:
    if not raw or not raw.strip():
        return None
    try:
        return UUID(raw.strip())
    except ValueError as err:
        raise ValidationFailedError("Invalid workspaceId") from err


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    workspace_id: UUID | None = Query(default=None, alias="workspaceId"),
    current_user: AuthUser = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
):
    documents = await service.list_documents(current_user.id, workspace_id=workspace_id)
    return DocumentListResponse(documents=[DocumentRead.model_validate(d) for d in documents])


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: UploadFile = File(...),
    title: str = Form(...),
    workspace_id: str | None = Form(default=None, alias="workspaceId"),
    tags: str | None = Form(default=None),
    description: str = Form(default=""),
    current_user: AuthUser = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
):
    """Multipart upload: the file plus title, optional workspaceId, JSON tags and description."""
    data = await file.read(settings.max_upload_bytes + 1)
    document = await service.upload_document(
        user_id=current_user.id,
        data=data,
        file_name=file.filename or "upload",
        content_type=file.content_type,
        title=title,
        workspace_id=_parse_workspace_id(workspace_id),
        tags=_parse_tags(tags),
        description=description,
    )
    return DocumentResponse(message="Document uploaded successfully", document=DocumentRead.model_validate(document))


@router.get("/count", response_model=CountResponse)
async def count_documents(
    current_user: AuthUser = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
):
    return CountResponse(count=await service.count_documents(current_user.id))


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: UUID,
    current_user: AuthUser = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
):
    document = await service.get_document(document_id, user_id=current_user.id)
    return DocumentResponse(document=DocumentRead.model_validate(document))


@router.patch("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: UUID,
    payload: DocumentUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
):
    document = await service.update_document(document_id, payload, user_id=current_user.id)
    return DocumentResponse(message="Document updated successfully", document=DocumentRead.model_validate(document))


@router.delete("/{document_id}", response_model=SuccessResponse)
async def delete_document(
    document_id: UUID,
    current_user: AuthUser = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
):
    await service.delete_document(document_id, user_id=current_user.id)
    return SuccessResponse(message="Document deleted successfully")
