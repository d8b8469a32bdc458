from __future__ import annotations

from typing import TYPE_CHECKING, Any

from knowledge_api.core.errors import ValidationFailedError
from knowledge_api.core.models.chat import ChatMessage, MessageType
from knowledge_api.core.services.ai_service import detect_language
from knowledge_api.utils.logging import get_logger

if TYPE_CHECKING:
    from uuid import UUID

    from knowledge_api.core.models.chat import Chat
    from knowledge_api.core.models.document import DocumentSummary
    from knowledge_api.core.services.ai_service import AIService
    from knowledge_api.core.services.chat_service import ChatService
    from knowledge_api.core.services.document_service import DocumentService
    from knowledge_api.core.services.note_service import NoteService

logger = get_logger(__name__)

CONTEXT_ITEMS = 5
CONTEXT_EXCERPT = 500
HISTORY_MESSAGES = 10


class AssistantService:
    """Workspace-aware AI features: builds context from the caller's content and keeps AI chats in sync."""

    def __init__(
        self,
        ai: AIService,
        notes: NoteService,
        documents: DocumentService,
        chats: ChatService,
    ) -> None:
        self._ai = ai
        self._notes = notes
        self._documents = documents
        self._chats = chats

    async def _workspace_context(self, user_id: UUID) -> str:
        notes = list(await self._notes.list_notes(user_id, limit=CONTEXT_ITEMS))[:CONTEXT_ITEMS]
        documents = list(await self._documents.list_documents(user_id))[:CONTEXT_ITEMS]
        parts: list[str] = []
        for note in notes:
            parts.append(f"Note: {note.title}\n{note.content[:CONTEXT_EXCERPT]}")
        for document in documents:
            excerpt = document.summary.content if document.summary else document.extracted_text
            parts.append(f"Document: {document.title}\n{(excerpt or '')[:CONTEXT_EXCERPT]}")
        return "\n\n".join(parts)

    @staticmethod
    def _history(chat: Chat) -> list[dict[str, str]]:
        history: list[dict[str, str]] = []
        for message in chat.messages[-HISTORY_MESSAGES:]:
            if message.type == MessageType.SYSTEM:
                continue
            role = "assistant" if message.type == MessageType.AI else "user"
            history.append({"role": role, "content": message.content})
        return history

    async def ask(self, user_id: UUID, question: str, chat_id: UUID | None = None) -> dict[str, Any]:
        chat = None
        if chat_id is not None:
            chat = await self._chats.get_chat(chat_id, user_id)
            if not chat.is_ai_conversation:
                raise ValidationFailedError("Chat is not an AI conversation")

        context = await self._workspace_context(user_id)
        answer = await self._ai.ask(
            question,
            context=context or None,
            history=self._history(chat) if chat else (),
        )

        if chat is not None:
            await self._chats.append_messages(
                chat,
                [
                    ChatMessage(sender_id=user_id, content=question, type=MessageType.USER),
                    ChatMessage(sender_id=user_id, content=answer, type=MessageType.AI, metadata={"generated": True}),
                ],
            )
        logger.info(
            "Assistant answered",
            extra={"user_id": str(user_id), "chat_id": str(chat_id) if chat_id else None},
        )
        return {"answer": answer, "language": detect_language(question)}

    async def summarize(
        self,
        user_id: UUID,
        title: str,
        content: str,
        document_id: UUID | None = None,
    ) -> DocumentSummary:
        """Summarize the text; with ``document_id`` the summary is also stored on that document."""
        if document_id is not None:
            # access is checked before any completion is requested
            await self._documents.get_readable(document_id, user_id)
        summary = await self._ai.summarize(title, content)
        if document_id is not None:
            await self._documents.store_summary(document_id, user_id, summary)
        return summary

    async def generate(self, prompt: str, category: str | None = None) -> dict[str, Any]:
        title, content, tags = await self._ai.generate(prompt, category)
        return {"title": title, "content": content, "tags": tags, "category": category}
