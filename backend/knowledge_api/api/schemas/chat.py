from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from typing import Any
from uuid import UUID  # noqa: TCH003

from pydantic import Field, field_validator

from knowledge_api.api.schemas.common import ApiModel
from knowledge_api.core.models.chat import MessageType  # noqa: TCH001


class ChatContextIn(ApiModel):
    note_id: UUID | None = None
    document_id: UUID | None = None


class ChatCreate(ApiModel):
    title: str = Field(..., max_length=200)
    workspace_id: UUID | None = None
    is_ai_conversation: bool = Field(default=False, alias="isAIConversation")
    context: ChatContextIn | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        title = v.strip()
        if not title:
            raise ValueError("Chat title is required")
        return title


class MessageCreate(ApiModel):
    content: str
    type: MessageType = MessageType.USER
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        content = v.strip()
        if not content:
            raise ValueError("Message content is required")
        return content


class ChatMessageRead(ApiModel):
    sender_id: UUID
    content: str
    type: MessageType
    metadata: dict[str, Any]
    timestamp: datetime


class ChatContextRead(ApiModel):
    workspace_id: UUID | None = None
    note_id: UUID | None = None
    document_id: UUID | None = None


class ContextResource(ApiModel):
    id: UUID
    title: str | None = None
    is_missing: bool = False


class ContextResources(ApiModel):
    note: ContextResource | None = None
    document: ContextResource | None = None


class ChatSummaryRead(ApiModel):
    id: UUID
    title: str
    workspace_id: UUID | None
    participants: list[UUID]
    is_ai_conversation: bool = Field(alias="isAIConversation")
    last_message_at: datetime
    message_count: int
    last_message: str | None
    created_at: datetime


class ChatRead(ApiModel):
    id: UUID
    title: str
    workspace_id: UUID | None
    participants: list[UUID]
    messages: list[ChatMessageRead]
    context: ChatContextRead
    is_ai_conversation: bool = Field(alias="isAIConversation")
    last_message_at: datetime
    created_at: datetime
    updated_at: datetime | None
    context_resources: ContextResources | None = None


class ChatResponse(ApiModel):
    success: bool = True
    message: str | None = None
    chat: ChatRead


class ChatListResponse(ApiModel):
    success: bool = True
    chats: list[ChatSummaryRead]


class MessageResponse(ApiModel):
    success: bool = True
    message: ChatMessageRead
