from __future__ import annotations

from fastapi import APIRouter, Depends

from knowledge_api.api.schemas.auth import UserRead
from knowledge_api.api.schemas.profile import (
    ActivityItem,
    ProfileActivityResponse,
    ProfileResponse,
    ProfileStats,
    ProfileStatsResponse,
    ProfileUpdate,
)
from knowledge_api.core.security import AuthUser  # noqa: TCH001
from knowledge_api.core.services.user_service import UserService  # noqa: TCH001
from knowledge_api.dependencies import get_current_user, get_user_service

router = APIRouter()


@router.get("", response_model=ProfileResponse)
async def get_profile(
    current_user: AuthUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.get_profile(current_user.id)
    return ProfileResponse(user=UserRead.model_validate(user))


@router.put("", response_model=ProfileResponse)
async def update_profile(
    payload: ProfileUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.update_profile(current_user.id, payload)
    return ProfileResponse(message="Profile updated successfully", user=UserRead.model_validate(user))


@router.get("/stats", response_model=ProfileStatsResponse)
async def get_profile_stats(
    current_user: AuthUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    stats = await service.get_stats(current_user.id)
    return ProfileStatsResponse(stats=ProfileStats(**stats))


@router.get("/activity", response_model=ProfileActivityResponse)
async def get_profile_activity(
    current_user: AuthUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Recently bookmarked cards."""
    activities = await service.recent_activity(current_user.id)
    return ProfileActivityResponse(activities=[ActivityItem(**a) for a in activities])
