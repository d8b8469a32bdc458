from __future__ import annotations

from uuid import UUID  # noqa: TCH003

from fastapi import APIRouter, Depends, status

from knowledge_api.api.schemas.common import CountResponse, SuccessResponse
from knowledge_api.api.schemas.workspace import (
    WorkspaceCounts,
    WorkspaceCountsResponse,
    WorkspaceCreate,
    WorkspaceListResponse,
    WorkspaceRead,
    WorkspaceResponse,
    WorkspaceUpdate,
)
from knowledge_api.core.models.workspace import Workspace  # noqa: TCH001
from knowledge_api.core.security import AuthUser  # noqa: TCH001
from knowledge_api.core.services.workspace_service import WorkspaceService  # noqa: TCH001
from knowledge_api.dependencies import get_current_user, get_workspace_service

router = APIRouter()


def _read(workspace: Workspace, user_id: UUID, counts: dict[str, int] | None = None) -> WorkspaceRead:
    entry = workspace.member(user_id)
    data = WorkspaceRead.model_validate(workspace)
    return data.model_copy(
        update={
            "is_owner": workspace.owner_id == user_id,
            "role": entry.role if entry else None,
            "member_count": len(workspace.members),
            "counts": WorkspaceCounts(**counts) if counts is not None else None,
        }
    )


@router.get("", response_model=WorkspaceListResponse)
async def list_workspaces(
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    workspaces = await service.list_workspaces(current_user.id)
    return WorkspaceListResponse(workspaces=[_read(w, current_user.id) for w in workspaces])


@router.post("", response_model=WorkspaceResponse, status_code=status.HTTP_201_CREATED)
async def create_workspace(
    payload: WorkspaceCreate,
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    workspace = await service.create_workspace(payload, user_id=current_user.id)
    return WorkspaceResponse(message="Workspace created successfully", workspace=_read(workspace, current_user.id))


@router.get("/count", response_model=CountResponse)
async def count_workspaces(
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    return CountResponse(count=await service.count_workspaces(current_user.id))


@router.get("/{workspace_id}", response_model=WorkspaceResponse)
async def get_workspace(
    workspace_id: UUID,
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    workspace = await service.require_member(workspace_id, current_user.id)
    counts = await service.get_counts(workspace)
    return WorkspaceResponse(workspace=_read(workspace, current_user.id, counts))


@router.get("/{workspace_id}/counts", response_model=WorkspaceCountsResponse)
async def get_workspace_counts(
    workspace_id: UUID,
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    workspace = await service.require_member(workspace_id, current_user.id)
    return WorkspaceCountsResponse(counts=WorkspaceCounts(**await service.get_counts(workspace)))


@router.patch("/{workspace_id}", response_model=WorkspaceResponse)
async def update_workspace(
    workspace_id: UUID,
    payload: WorkspaceUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    workspace = await service.update_workspace(workspace_id, payload, user_id=current_user.id)
    return WorkspaceResponse(message="Workspace updated successfully", workspace=_read(workspace, current_user.id))


@router.delete("/{workspace_id}", response_model=SuccessResponse)
async def delete_workspace(
    workspace_id: UUID,
    current_user: AuthUser = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
):
    await service.delete_workspace(workspace_id, user_id=current_user.id)
    return SuccessResponse(message="Workspace deleted successfully")
