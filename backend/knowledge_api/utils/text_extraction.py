"""Plain-text extraction for uploaded documents."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path

from docx import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from knowledge_api.utils.logging import get_logger

logger = get_logger(__name__)

PDF_TYPES = {"application/pdf"}
DOCX_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
TEXT_SUFFIXES = {".txt", ".md", ".markdown", ".csv", ".json"}


def _extract_pdf(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    parts: list[str] = []
    for page in reader.pages:
        parts.append(page.extract_text() or "")
    return "\n".join(parts)


def _extract_docx(data: bytes) -> str:
    doc = DocxDocument(io.BytesIO(data))
    return "\n".join(p.text for p in doc.paragraphs if p.text)


def _extract_plain(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def is_supported(file_name: str, content_type: str | None) -> bool:
    suffix = Path(file_name).suffix.lower()
    return (
        (content_type or "") in PDF_TYPES | DOCX_TYPES
        or (content_type or "").startswith("text/")
        or suffix in TEXT_SUFFIXES | {".pdf", ".docx"}
    )


def extract_text(data: bytes, *, file_name: str, content_type: str | None) -> str:
    """Return the document's text, or "" when the file cannot be parsed.

    PDF goes through pypdf, DOCX through python-docx, anything textual is
    decoded as UTF-8 (latin-1 fallback).
    """
    suffix = Path(file_name).suffix.lower()
    ctype = (content_type or "").lower()
    try:
        if ctype in PDF_TYPES or suffix == ".pdf":
            text = _extract_pdf(data)
        elif ctype in DOCX_TYPES or suffix == ".docx":
            text = _extract_docx(data)
        else:
            text = _extract_plain(data)
    except (PdfReadError, PackageNotFoundError, zipfile.BadZipFile, ValueError, KeyError, OSError) as err:
        logger.warning(
            "Text extraction failed",
            extra={"file_name": file_name, "error_type": type(err).__name__},
        )
        return ""
    return text.strip()
