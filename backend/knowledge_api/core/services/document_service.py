from __future__ import annotations

import asyncio
from pathlib import PurePath
from typing import TYPE_CHECKING
from uuid import uuid4

from knowledge_api.core.errors import AppError, NotFoundError, PermissionDeniedError, ValidationFailedError
from knowledge_api.core.models.base import utcnow
from knowledge_api.core.models.document import Document
from knowledge_api.core.models.workspace import MemberRole
from knowledge_api.utils.logging import get_logger
from knowledge_api.utils.text_extraction import extract_text, is_supported

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from knowledge_api.core.models.document import DocumentSummary
    from knowledge_api.core.repositories.document_repository import DocumentRepository
    from knowledge_api.core.repositories.file_storage import FileStorage
    from knowledge_api.core.services.workspace_service import WorkspaceService

logger = get_logger(__name__)


class DocumentService:
    """Uploaded documents: extracted text in the table, bytes in the storage bucket."""

    def __init__(
        self,
        repo: DocumentRepository,
        storage: FileStorage,
        workspaces: WorkspaceService,
        *,
        max_upload_bytes: int,
    ) -> None:
        self._repo = repo
        self._storage = storage
        self._workspaces = workspaces
        self._max_upload_bytes = max_upload_bytes

    async def _scope(self, user_id: UUID, workspace_id: UUID | None) -> dict:
        if workspace_id is not None:
            await self._workspaces.require_member(workspace_id, user_id)
            return {"workspace_ids": [workspace_id]}
        return {"author_id": user_id}

    async def list_documents(self, user_id: UUID, workspace_id: UUID | None = None) -> Sequence[Document]:
        """The caller's uploads, or every document of a workspace the caller belongs to."""
        return await self._repo.list(**await self._scope(user_id, workspace_id))

    async def count_documents(self, user_id: UUID) -> int:
        return await self._repo.count(author_id=user_id)

    async def upload_document(
        self,
        *,
        user_id: UUID,
        data: bytes,
        file_name: str,
        content_type: str | None,
        title: str,
        workspace_id: UUID | None,
        tags: list[str],
        description: str = "",
    ) -> Document:
        title = (title or "").strip()
        if not title:
            raise ValidationFailedError("Title is required")
        if not data:
            raise ValidationFailedError("File is empty")
        if len(data) > self._max_upload_bytes:
            raise ValidationFailedError(
                f"File is too large (max {self._max_upload_bytes // (1024 * 1024)} MB)"
            )
        if not is_supported(file_name, content_type):
            raise ValidationFailedError("Unsupported file type. Upload a PDF, DOCX or text file.")

        if workspace_id is not None:
            workspace = await self._workspaces.require_member(workspace_id, user_id)
            entry = workspace.member(user_id)
            if entry is not None and entry.role == MemberRole.VIEWER:
                raise PermissionDeniedError("Viewers cannot add content to this workspace")
        else:
            workspace = await self._workspaces.get_or_create_personal(user_id)

        text = await asyncio.to_thread(extract_text, data, file_name=file_name, content_type=content_type)
        suffix = PurePath(file_name).suffix.lower()
        file_path = f"{workspace.id}/{uuid4().hex}{suffix}"
        file_type = content_type or "application/octet-stream"
        file_url = await self._storage.upload(file_path, data, file_type)

        now = utcnow()
        document = Document(
            title=title,
            description=description or "",
            workspace_id=workspace.id,
            author_id=user_id,
            file_url=file_url,
            file_path=file_path,
            file_name=file_name,
            file_type=file_type,
            file_size=len(data),
            extracted_text=text,
            tags=tags,
            created_at=now,
            updated_at=now,
        )
        try:
            created = await self._repo.create(document)
        except AppError:
            await self._storage.remove([file_path])
            raise
        logger.info(
            "Document uploaded",
            extra={"user_id": str(user_id), "document_id": str(created.id), "file_size": len(data)},
        )
        return created

    async def get_readable(self, document_id: UUID, user_id: UUID) -> Document:
        """Return the document if the caller belongs to its workspace; no side effects."""
        document = await self._repo.get(document_id)
        if document is None:
            raise NotFoundError("Document not found")
        await self._workspaces.require_member(document.workspace_id, user_id)
        return document

    async def get_document(self, document_id: UUID, user_id: UUID) -> Document:
        """Fetch a readable document and bump its view counter."""
        document = await self.get_readable(document_id, user_id)

        updated = await self._repo.update_fields(document_id, {"view_count": document.view_count + 1})
        return updated or document

    async def _get_for_write(self, document_id: UUID, user_id: UUID) -> Document:
        document = await self._repo.get(document_id)
        if document is None:
            raise NotFoundError("Document not found")
        workspace = await self._workspaces.require_member(document.workspace_id, user_id)
        if document.author_id != user_id and not workspace.can_manage(user_id):
            raise PermissionDeniedError("Only the author or a workspace admin can modify this document")
        return document

    async def update_document(self, document_id: UUID, update_dto, user_id: UUID) -> Document:
        existing = await self._get_for_write(document_id, user_id)

        raw_changes = update_dto.model_dump(exclude_unset=True)
        allowed_fields = {"title", "description", "tags", "category", "is_pinned", "is_archived"}
        changes = {k: v for k, v in raw_changes.items() if k in allowed_fields and (v is not None or k == "category")}
        if not changes:
            return existing

        updated = await self._repo.update_fields(document_id, changes)
        if updated is None:
            raise NotFoundError("Document not found")
        return updated

    async def store_summary(self, document_id: UUID, user_id: UUID, summary: DocumentSummary) -> Document:
        await self.get_readable(document_id, user_id)
        updated = await self._repo.update_fields(document_id, {"summary": summary})
        if updated is None:
            raise NotFoundError("Document not found")
        return updated

    async def delete_document(self, document_id: UUID, user_id: UUID) -> None:
        document = await self._get_for_write(document_id, user_id)
        if not await self._repo.delete(document_id):
            raise NotFoundError("Document not found")
        logger.info("Document deleted", extra={"user_id": str(user_id), "document_id": str(document_id)})

        try:
            await self._storage.remove([document.file_path])
        except AppError as err:
            logger.warning(
                "Stored file was not removed",
                extra={"document_id": str(document_id), "file_path": document.file_path, "error": err.message},
            )
