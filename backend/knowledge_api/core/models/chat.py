from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import Field

from .base import AppBaseModel, EntityModel, utcnow


class MessageType(str, Enum):
    USER = "user"
    AI = "ai"
    SYSTEM = "system"


class ChatMessage(AppBaseModel):
    sender_id: UUID
    content: str = Field(..., min_length=1)
    type: MessageType = MessageType.USER
    metadata: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=utcnow)


class ChatContext(AppBaseModel):
    """Optional note/document a conversation is about."""

    workspace_id: UUID | None = None
    note_id: UUID | None = None
    document_id: UUID | None = None


class Chat(EntityModel):
    title: str = Field(..., min_length=1, max_length=200)
    workspace_id: UUID | None = None
    participants: list[UUID] = Field(default_factory=list)
    messages: list[ChatMessage] = Field(default_factory=list)
    context: ChatContext = Field(default_factory=ChatContext)
    is_ai_conversation: bool = False
    last_message_at: datetime = Field(default_factory=utcnow)

    @property
    def last_message(self) -> ChatMessage | None:
        return self.messages[-1] if self.messages else None
