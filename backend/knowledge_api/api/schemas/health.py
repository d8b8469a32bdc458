from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from typing import Literal

from knowledge_api.api.schemas.common import ApiModel

CheckStatus = Literal["ok", "warning", "error"]


class HealthCheck(ApiModel):
    status: CheckStatus
    message: str


class HealthChecks(ApiModel):
    database: HealthCheck
    environment: HealthCheck
    openai: HealthCheck
    jwt: HealthCheck


class HealthResponse(ApiModel):
    status: Literal["healthy", "warning", "unhealthy"]
    service: str
    version: str
    timestamp: datetime
    checks: HealthChecks
    response_time: str
