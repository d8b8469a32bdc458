from __future__ import annotations

from uuid import UUID  # noqa: TCH003

from pydantic import Field, field_validator

from knowledge_api.api.schemas.common import ApiModel
from knowledge_api.api.schemas.document import DocumentSummaryRead  # noqa: TCH001


def _require(v: str, label: str) -> str:
    text = v.strip()
    if not text:
        raise ValueError(f"{label} is required")
    return text


class AskRequest(ApiModel):
    question: str = Field(..., max_length=4000)
    chat_id: UUID | None = None

    @field_validator("question")
    @classmethod
    def validate_question(cls, v: str) -> str:
        return _require(v, "Question")


class AskResponse(ApiModel):
    success: bool = True
    answer: str
    language: str


class SummarizeRequest(ApiModel):
    title: str = Field(..., max_length=200)
    content: str
    document_id: UUID | None = None

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return _require(v, "Content")


class SummarizeResponse(ApiModel):
    success: bool = True
    summary: DocumentSummaryRead


class GenerateRequest(ApiModel):
    prompt: str = Field(..., max_length=4000)
    category: str | None = None

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, v: str) -> str:
        return _require(v, "Prompt")


class GeneratedContent(ApiModel):
    title: str
    content: str
    tags: list[str]
    category: str | None = None


class GenerateResponse(ApiModel):
    success: bool = True
    generated: GeneratedContent
