from __future__ import annotations

from fastapi import APIRouter, Depends

from knowledge_api.api.schemas.stats import SidebarStats, StatsResponse
from knowledge_api.core.security import AuthUser  # noqa: TCH001
from knowledge_api.core.services.stats_service import StatsService  # noqa: TCH001
from knowledge_api.dependencies import get_current_user, get_stats_service

router = APIRouter()


@router.get("", response_model=StatsResponse)
async def get_stats(
    current_user: AuthUser = Depends(get_current_user),
    service: StatsService = Depends(get_stats_service),
):
    return StatsResponse(stats=SidebarStats(**await service.sidebar(current_user.id)))
