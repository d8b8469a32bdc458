from __future__ import annotations

from uuid import UUID  # noqa: TCH003

from fastapi import APIRouter, Depends, Query, status

from knowledge_api.api.schemas.chat import (
    ChatCreate,
    ChatListResponse,
    ChatMessageRead,
    ChatRead,
    ChatResponse,
    ChatSummaryRead,
    ContextResources,
    MessageCreate,
    MessageResponse,
)
from knowledge_api.api.schemas.common import CountResponse, SuccessResponse
from knowledge_api.core.security import AuthUser  # noqa: TCH001
from knowledge_api.core.services.chat_service import ChatService  # noqa: TCH001
from knowledge_api.dependencies import get_chat_service, get_current_user

router = APIRouter()


@router.get("", response_model=ChatListResponse)
async def list_chats(
    workspace_id: UUID | None = Query(default=None, alias="workspaceId"),
    current_user: AuthUser = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    chats = await service.list_chats(current_user.id, workspace_id=workspace_id)
    return ChatListResponse(chats=[ChatSummaryRead.model_validate(c) for c in chats])


@router.post("", response_model=ChatResponse, status_code=status.HTTP_201_CREATED)
async def create_chat(
    payload: ChatCreate,
    current_user: AuthUser = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    chat = await service.create_chat(payload, user_id=current_user.id)
    return ChatResponse(message="Chat created successfully", chat=ChatRead.model_validate(chat))


@router.get("/count", response_model=CountResponse)
async def count_chats(
    current_user: AuthUser = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    return CountResponse(count=await service.count_chats(current_user.id))


@router.get("/{chat_id}", response_model=ChatResponse)
async def get_chat(
    chat_id: UUID,
    current_user: AuthUser = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    chat = await service.get_chat(chat_id, current_user.id)
    resources = await service.context_resources(chat)
    read = ChatRead.model_validate(chat).model_copy(
        update={"context_resources": ContextResources.model_validate(resources)}
    )
    return ChatResponse(chat=read)


@router.post("/{chat_id}", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_message(
    chat_id: UUID,
    payload: MessageCreate,
    current_user: AuthUser = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    message = await service.add_message(chat_id, payload, current_user.id)
    return MessageResponse(message=ChatMessageRead.model_validate(message))


@router.delete("/{chat_id}", response_model=SuccessResponse)
async def delete_chat(
    chat_id: UUID,
    current_user: AuthUser = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    await service.delete_chat(chat_id, current_user.id)
    return SuccessResponse(message="Chat deleted successfully")
