from __future__ import annotations

from uuid import UUID  # noqa: TCH003

from fastapi import APIRouter, Depends, Query, status

from knowledge_api.api.schemas.common import SuccessResponse
from knowledge_api.api.schemas.member import (
    MemberAdd,
    MemberListResponse,
    MemberRead,
    MemberResponse,
    MemberRoleUpdate,
)
from knowledge_api.core.security import AuthUser  # noqa: TCH001
from knowledge_api.core.services.member_service import MemberService  # noqa: TCH001
from knowledge_api.dependencies import get_current_user, get_member_service

router = APIRouter()


@router.get("", response_model=MemberListResponse)
async def list_members(
    workspace_id: UUID = Query(..., alias="workspaceId"),
    current_user: AuthUser = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
):
    members = await service.list_members(workspace_id, current_user.id)
    return MemberListResponse(members=[MemberRead.model_validate(m) for m in members])


@router.post("", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
async def add_member(
    payload: MemberAdd,
    current_user: AuthUser = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
):
    member = await service.add_member(payload, user_id=current_user.id)
    return MemberResponse(message="Member added successfully", member=MemberRead.model_validate(member))


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: UUID,
    workspace_id: UUID = Query(..., alias="workspaceId"),
    current_user: AuthUser = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
):
    member = await service.get_member(workspace_id, member_id, current_user.id)
    return MemberResponse(member=MemberRead.model_validate(member))


@router.put("/{member_id}", response_model=MemberResponse)
async def update_member_role(
    member_id: UUID,
    payload: MemberRoleUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
):
    member = await service.update_role(member_id, payload, user_id=current_user.id)
    return MemberResponse(message="Member role updated", member=MemberRead.model_validate(member))


@router.delete("/{member_id}", response_model=SuccessResponse)
async def remove_member(
    member_id: UUID,
    workspace_id: UUID = Query(..., alias="workspaceId"),
    current_user: AuthUser = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
):
    await service.remove_member(workspace_id, member_id, current_user.id)
    return SuccessResponse(message="Member removed successfully")
