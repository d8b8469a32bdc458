from __future__ import annotations

from fastapi import APIRouter, Depends

from knowledge_api.api.schemas.ai import (
    AskRequest,
    AskResponse,
    GeneratedContent,
    GenerateRequest,
    GenerateResponse,
    SummarizeRequest,
    SummarizeResponse,
)
from knowledge_api.api.schemas.document import DocumentSummaryRead
from knowledge_api.core.security import AuthUser  # noqa: TCH001
from knowledge_api.core.services.assistant_service import AssistantService  # noqa: TCH001
from knowledge_api.dependencies import get_assistant_service, get_current_user

router = APIRouter()


@router.post("/ask", response_model=AskResponse)
async def ask(
    payload: AskRequest,
    current_user: AuthUser = Depends(get_current_user),
    service: AssistantService = Depends(get_assistant_service),
):
    """Answer a question using the caller's recent notes and documents as context."""
    result = await service.ask(current_user.id, payload.question, chat_id=payload.chat_id)
    return AskResponse(**result)


@router.post("/summarize", response_model=SummarizeResponse)
async def summarize(
    payload: SummarizeRequest,
    current_user: AuthUser = Depends(get_current_user),
    service: AssistantService = Depends(get_assistant_service),
):
    summary = await service.summarize(
        current_user.id, payload.title, payload.content, document_id=payload.document_id
    )
    return SummarizeResponse(summary=DocumentSummaryRead.model_validate(summary))


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    payload: GenerateRequest,
    current_user: AuthUser = Depends(get_current_user),
    service: AssistantService = Depends(get_assistant_service),
):
    generated = await service.generate(payload.prompt, payload.category)
    return GenerateResponse(generated=GeneratedContent(**generated))
