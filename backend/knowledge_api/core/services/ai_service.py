from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING, Any

from openai import OpenAIError

from knowledge_api.config import settings
from knowledge_api.core.errors import AIServiceError
from knowledge_api.core.models.base import normalize_tags
from knowledge_api.core.models.document import DocumentSummary
from knowledge_api.utils.logging import get_logger
from knowledge_api.utils.validation import is_placeholder

if TYPE_CHECKING:
    from collections.abc import Sequence

    from openai import AsyncOpenAI  # type: ignore[import-not-found]


logger = get_logger(__name__)

FALLBACK_ANSWER = "I apologize, but I could not generate a response."
FALLBACK_TITLE = "Generated Content"

ASSISTANT_PROMPT = """You are an intelligent multilingual AI assistant for a Knowledge Workspace application.

LANGUAGE HANDLING:
- Automatically detect and respond in the SAME language the user uses
- Support Arabic (العربية), English, and any other language seamlessly
- If user mixes languages, respond in the primary language used
- Never mention language detection - just respond naturally

YOUR CAPABILITIES:
- Help users manage notes, documents, and workspaces
- Answer questions about their content
- Summarize documents and notes
- Search and retrieve information

RESPONSE STYLE:
- Be concise, helpful, and actionable
- Format responses clearly with bullet points when helpful"""

SUMMARY_SYSTEM_PROMPT = "You are an expert document analyzer. Provide clear, structured summaries."
SUMMARY_PROMPT = {
    "en": (
        "Summarize the following document:\n\nTitle: {title}\n\nContent:\n{content}\n\n"
        "Provide:\n1. A comprehensive summary\n2. Key points (5-7 bullet points)\n"
        "3. Main topics\n4. Overall sentiment (positive/neutral/negative)"
    ),
    "ar": (
        "قم بتلخيص المستند التالي باللغة العربية:\n\nالعنوان: {title}\n\nالمحتوى:\n{content}\n\n"
        "قدم:\n1. ملخص شامل\n2. النقاط الرئيسية (5-7 نقاط)\n3. المواضيع الرئيسية\n"
        "4. التوجه العام (إيجابي/محايد/سلبي)"
    ),
}

WRITER_SYSTEM_PROMPT = {
    "en": (
        "You are an expert multilingual content writer. Create high-quality, informative content "
        "based on the user's request. Write in a professional and clear style."
    ),
    "ar": "أنت كاتب محتوى خبير متعدد اللغات. قم بإنشاء محتوى عالي الجودة باللغة العربية بناءً على الطلب.",
}
WRITER_PROMPT = (
    "Create content about: {prompt}{category}\n\nProvide:\n1. An engaging and appropriate title\n"
    "2. Comprehensive, professionally structured content\n3. Relevant tags (5-7 tags)"
)

TAGS_PROMPT = {
    "en": (
        "Extract 5-7 relevant tags from the content. Return only the tags, comma-separated. "
        "Respond in the same language as the content."
    ),
    "ar": "استخرج 5-7 وسوم ذات صلة من المحتوى. أرجع الوسوم فقط، مفصولة بفواصل.",
}

_ARABIC = re.compile(r"[\u0600-\u06FF]")
_LATIN = re.compile(r"[a-zA-Z]")
_KEY_POINT = re.compile(r"^[\d\-•]")
_TOPIC = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\b")

POSITIVE_WORDS = ("good", "great", "excellent", "positive", "success", "achieve")
NEGATIVE_WORDS = ("bad", "poor", "negative", "fail", "problem", "issue")


def ai_configured() -> bool:
    key = settings.openai_api_key or os.environ.get("OPENAI_API_KEY", "")
    return bool(key) and not is_placeholder(key)


def detect_language(text: str) -> str:
    """Return ``ar``, ``en`` or ``mixed`` based on the scripts present."""
    has_arabic = bool(_ARABIC.search(text))
    has_latin = bool(_LATIN.search(text))
    if has_arabic and has_latin:
        return "mixed"
    if has_arabic:
        return "ar"
    return "en"


def extract_topics(text: str, limit: int = 5) -> list[str]:
    topics: list[str] = []
    for match in _TOPIC.findall(text):
        if match not in topics:
            topics.append(match)
    return topics[:limit]


def detect_sentiment(text: str) -> str:
    lowered = text.lower()
    positive = sum(1 for word in POSITIVE_WORDS if word in lowered)
    negative = sum(1 for word in NEGATIVE_WORDS if word in lowered)
    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


def parse_summary(response: str) -> DocumentSummary:
    lines = [line for line in response.split("\n") if line.strip()]
    return DocumentSummary(
        content=" ".join(lines[:3]),
        key_points=[line for line in lines if _KEY_POINT.match(line)][:7],
        topics=extract_topics(response),
        sentiment=detect_sentiment(response),
    )


def parse_generated(response: str) -> tuple[str, str]:
    """Split a completion into (title, body); the title is the first non-empty line without ``#``."""
    lines = response.split("\n")
    first = next((line for line in lines if line.strip()), "")
    title = re.sub(r"^#+\s*", "", first).strip() or FALLBACK_TITLE
    content = "\n".join(lines[1:]).strip()
    return title, content


class AIService:
    """Thin wrapper over chat completions with fixed prompt templates.

    Upstream failures surface as AIServiceError; nothing is retried.
    """

    def __init__(
        self,
        openai_client: AsyncOpenAI | None,
        *,
        model: str,
        tags_model: str,
    ) -> None:
        self._client = openai_client
        self._model = model
        self._tags_model = tags_model

    async def _complete(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str | None = None,
        temperature: float,
        max_tokens: int,
    ) -> str:
        if self._client is None:
            raise AIServiceError("AI service is not configured")
        try:
            completion = await self._client.chat.completions.create(
                model=model or self._model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except OpenAIError as err:
            logger.error(
                "Chat completion failed: %s",
                type(err).__name__,
                extra={"model": model or self._model, "error_summary": str(err)[:200]},
            )
            raise AIServiceError(f"AI service failed: {err}") from err

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""

    async def ask(
        self,
        question: str,
        *,
        context: str | None = None,
        history: Sequence[dict[str, str]] = (),
    ) -> str:
        system = ASSISTANT_PROMPT
        if context:
            system += f"\n\nContext from user's workspace:\n{context}"
        messages: list[dict[str, Any]] = [{"role": "system", "content": system}]
        messages.extend(history)
        messages.append({"role": "user", "content": question})

        logger.debug(
            "Asking assistant",
            extra={"question_length": len(question), "has_context": bool(context), "history_length": len(history)},
        )
        answer = await self._complete(messages, temperature=0.7, max_tokens=1000)
        return answer or FALLBACK_ANSWER

    async def summarize(self, title: str, content: str) -> DocumentSummary:
        language = "ar" if detect_language(content) == "ar" else "en"
        response = await self._complete(
            [
                {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
                {"role": "user", "content": SUMMARY_PROMPT[language].format(title=title, content=content)},
            ],
            temperature=0.5,
            max_tokens=800,
        )
        return parse_summary(response)

    async def generate(self, prompt: str, category: str | None = None) -> tuple[str, str, list[str]]:
        """Return (title, content, tags) for a writing prompt."""
        language = "ar" if detect_language(prompt) == "ar" else "en"
        category_line = f"\nCategory: {category}" if category else ""
        response = await self._complete(
            [
                {"role": "system", "content": WRITER_SYSTEM_PROMPT[language]},
                {"role": "user", "content": WRITER_PROMPT.format(prompt=prompt, category=category_line)},
            ],
            temperature=0.8,
            max_tokens=1500,
        )
        title, content = parse_generated(response)
        tags = await self.generate_tags(f"{title} {content}")
        return title, content, tags

    async def generate_tags(self, content: str) -> list[str]:
        """Comma-separated tags from the model; an upstream failure yields no tags."""
        language = "ar" if detect_language(content) == "ar" else "en"
        try:
            response = await self._complete(
                [
                    {"role": "system", "content": TAGS_PROMPT[language]},
                    {"role": "user", "content": content[:1000]},
                ],
                model=self._tags_model,
                temperature=0.3,
                max_tokens=100,
            )
        except AIServiceError:
            logger.warning("Tag generation failed", extra={"content_length": len(content)})
            return []
        return normalize_tags([tag.lower() for tag in response.split(",")])
