from __future__ import annotations

from typing import TYPE_CHECKING, Any

from knowledge_api.core.errors import NotFoundError, PermissionDeniedError, ValidationFailedError
from knowledge_api.core.models.base import utcnow
from knowledge_api.core.models.chat import Chat, ChatContext, ChatMessage
from knowledge_api.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from knowledge_api.core.repositories.chat_repository import ChatRepository
    from knowledge_api.core.repositories.document_repository import DocumentRepository
    from knowledge_api.core.repositories.note_repository import NoteRepository
    from knowledge_api.core.services.workspace_service import WorkspaceService

logger = get_logger(__name__)

LAST_MESSAGE_PREVIEW = 100


def chat_summary(chat: Chat) -> dict[str, Any]:
    last = chat.last_message
    return {
        "id": chat.id,
        "title": chat.title,
        "workspace_id": chat.workspace_id,
        "participants": chat.participants,
        "is_ai_conversation": chat.is_ai_conversation,
        "last_message_at": chat.last_message_at,
        "message_count": len(chat.messages),
        "last_message": last.content[:LAST_MESSAGE_PREVIEW] if last else None,
        "created_at": chat.created_at,
    }


class ChatService:
    def __init__(
        self,
        repo: ChatRepository,
        notes: NoteRepository,
        documents: DocumentRepository,
        workspaces: WorkspaceService,
    ) -> None:
        self._repo = repo
        self._notes = notes
        self._documents = documents
        self._workspaces = workspaces

    async def list_chats(self, user_id: UUID, workspace_id: UUID | None = None) -> list[dict[str, Any]]:
        chats = await self._repo.list_for_participant(user_id, workspace_id=workspace_id)
        return [chat_summary(c) for c in chats]

    async def count_chats(self, user_id: UUID) -> int:
        return await self._repo.count_for_participant(user_id)

    async def create_chat(self, create_dto, user_id: UUID) -> Chat:
        if create_dto.workspace_id is not None:
            await self._workspaces.require_member(create_dto.workspace_id, user_id)

        context = ChatContext(workspace_id=create_dto.workspace_id)
        if create_dto.context is not None:
            note_id = create_dto.context.note_id
            document_id = create_dto.context.document_id
            if note_id is not None and await self._notes.get(note_id) is None:
                raise ValidationFailedError("Referenced note does not exist")
            if document_id is not None and await self._documents.get(document_id) is None:
                raise ValidationFailedError("Referenced document does not exist")
            context = context.model_copy(update={"note_id": note_id, "document_id": document_id})

        now = utcnow()
        chat = Chat(
            title=create_dto.title,
            workspace_id=create_dto.workspace_id,
            participants=[user_id],
            context=context,
            is_ai_conversation=bool(create_dto.is_ai_conversation),
            last_message_at=now,
            created_at=now,
            updated_at=now,
        )
        created = await self._repo.create(chat)
        logger.info("Chat created", extra={"user_id": str(user_id), "chat_id": str(created.id)})
        return created

    async def get_chat(self, chat_id: UUID, user_id: UUID) -> Chat:
        chat = await self._repo.get(chat_id)
        if chat is None:
            raise NotFoundError("Chat not found")
        if user_id not in chat.participants:
            raise PermissionDeniedError("You are not a participant of this chat")
        return chat

    async def context_resources(self, chat: Chat) -> dict[str, Any]:
        """Titles of the note/document a chat refers to; deleted ones are flagged missing."""
        resources: dict[str, Any] = {}
        if chat.context.note_id is not None:
            note = await self._notes.get(chat.context.note_id)
            resources["note"] = {
                "id": chat.context.note_id,
                "title": note.title if note else None,
                "is_missing": note is None,
            }
        if chat.context.document_id is not None:
            document = await self._documents.get(chat.context.document_id)
            resources["document"] = {
                "id": chat.context.document_id,
                "title": document.title if document else None,
                "is_missing": document is None,
            }
        return resources

    async def append_messages(self, chat: Chat, messages: Sequence[ChatMessage]) -> Chat:
        last_at = messages[-1].timestamp if messages else chat.last_message_at
        updated = await self._repo.update_fields(
            chat.id,
            {"messages": [*chat.messages, *messages], "last_message_at": last_at},
        )
        if updated is None:
            raise NotFoundError("Chat not found")
        return updated

    async def add_message(self, chat_id: UUID, message_dto, user_id: UUID) -> ChatMessage:
        chat = await self.get_chat(chat_id, user_id)
        message = ChatMessage(
            sender_id=user_id,
            content=message_dto.content,
            type=message_dto.type,
            metadata=message_dto.metadata or {},
        )
        await self.append_messages(chat, [message])
        return message

    async def delete_chat(self, chat_id: UUID, user_id: UUID) -> None:
        await self.get_chat(chat_id, user_id)
        if not await self._repo.delete(chat_id):
            raise NotFoundError("Chat not found")
        logger.info("Chat deleted", extra={"user_id": str(user_id), "chat_id": str(chat_id)})
