from __future__ import annotations

from knowledge_api.api.schemas.common import ApiModel


class SidebarStats(ApiModel):
    workspaces: int = 0
    notes: int = 0
    documents: int = 0
    chats: int = 0


class StatsResponse(ApiModel):
    success: bool = True
    stats: SidebarStats
