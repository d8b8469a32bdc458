from __future__ import annotations

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from knowledge_api.core.models.base import AppBaseModel


class ApiModel(AppBaseModel):
    """Wire model: camelCase on the way out, camelCase or snake_case on the way in."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


class SuccessResponse(ApiModel):
    success: bool = True
    message: str | None = None


class CountResponse(ApiModel):
    success: bool = True
    count: int
