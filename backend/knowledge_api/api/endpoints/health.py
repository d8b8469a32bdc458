from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from knowledge_api.api.schemas.health import HealthResponse
from knowledge_api.core.services.health_service import HealthService  # noqa: TCH001
from knowledge_api.dependencies import get_health_service

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health_check(service: HealthService = Depends(get_health_service)):
    """Health check endpoint: database connectivity plus configuration sanity."""
    status_code, report = await service.check()
    body = HealthResponse.model_validate(report)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", by_alias=True))
