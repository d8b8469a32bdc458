from __future__ import annotations

import logging

import pytest

from knowledge_api.core.services.ai_service import (
    detect_language,
    detect_sentiment,
    extract_topics,
    parse_generated,
)
from knowledge_api.utils.logging import ExtraFormatter
from knowledge_api.utils.text_extraction import extract_text, is_supported
from knowledge_api.utils.validation import is_placeholder, sanitize_search_query, validate_password_strength


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, ""),
        ("  hello  ", "hello"),
        ("a,b(c)%*", "abc"),
        ("\"quoted\" 'text'", "quoted text"),
        ("x" * 80, "x" * 60),
    ],
)
def test_sanitize_search_query(raw, expected):
    assert sanitize_search_query(raw) == expected


def test_password_strength():
    assert validate_password_strength("secret1") == (True, None)
    ok, message = validate_password_strength("abc")
    assert not ok
    assert "at least 6" in message


def test_placeholder_detection():
    assert is_placeholder("your-supabase-url")
    assert is_placeholder("<secret>")
    assert not is_placeholder("sk-live-value")
    assert not is_placeholder("")


def test_language_detection():
    assert detect_language("hello") == "en"
    assert detect_language("مرحبا") == "ar"
    assert detect_language("مرحبا hello") == "mixed"


def test_sentiment_and_topics():
    assert detect_sentiment("a great success") == "positive"
    assert detect_sentiment("a bad problem") == "negative"
    assert detect_sentiment("plain words") == "neutral"
    assert extract_topics("Machine Learning and Data Science meet Machine Learning") == [
        "Machine Learning",
        "Data Science",
    ]


def test_parse_generated_defaults_title():
    assert parse_generated("## Heading\nbody") == ("Heading", "body")
    assert parse_generated("") == ("Generated Content", "")


def test_extract_plain_text_falls_back_to_latin1():
    assert extract_text("café".encode("latin-1"), file_name="menu.txt", content_type="text/plain") == "café"


def test_extract_corrupt_pdf_returns_empty():
    assert extract_text(b"not a pdf", file_name="broken.pdf", content_type="application/pdf") == ""


def test_supported_types():
    assert is_supported("a.pdf", None)
    assert is_supported("a.bin", "text/plain")
    assert is_supported("readme.md", "application/octet-stream")
    assert not is_supported("photo.png", "image/png")


def test_extra_formatter_appends_fields():
    formatter = ExtraFormatter("%(message)s")
    record = logging.LogRecord("knowledge_api", logging.INFO, __file__, 1, "Note created", (), None)
    record.user_id = "42"
    record.note_id = "7"
    assert formatter.format(record) == "Note created | note_id=7 user_id=42"
    assert formatter.format(logging.LogRecord("x", logging.INFO, __file__, 1, "plain", (), None)) == "plain"
