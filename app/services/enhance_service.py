from __future__ import annotations

import json
import logging
import os
import time
from functools import lru_cache

from openai import OpenAI

from app.schemas.enhance import EnhanceResult

logger = logging.getLogger(__name__)

_SECTION_CONTEXT = {
    "summary": "professional summary",
    "work_experience": "work experience bullet",
    "education": "education entry",
    "skills": "skills list",
    "courses_and_certifications": "course or certification description",
}

_SYSTEM_PROMPT = (
    "You are a professional resume enhancement expert. Enhance the given text by adding relevant "
    "keywords and improving the professional language while keeping the original meaning and "
    "achievements. Use action verbs, make achievements more impactful, stay truthful, and optimize "
    "for Applicant Tracking Systems.\n"
    "Return a JSON object with:\n"
    "- enhancedText: the improved version of the text\n"
    "- keywords: array of key terms that were added or emphasized"
)


class EnhancementError(RuntimeError):
    def __init__(self, message: str, *, code: str = "llm_unavailable", status_code: int = 503):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def enhancement_enabled() -> bool:
    if not _env_bool("TOOLS_LLM_ENABLED", True):
        return False
    api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
    return bool(api_key) and not _looks_like_placeholder(api_key)


@lru_cache(maxsize=1)
def _client() -> OpenAI:
    return OpenAI(
        api_key=(os.getenv("OPENAI_API_KEY") or "").strip(),
        base_url=(os.getenv("OPENAI_BASE_URL") or None),
        timeout=float(os.getenv("TOOLS_LLM_TIMEOUT_S", "20")),
        max_retries=int(os.getenv("OPENAI_MAX_RETRIES", "2")),
    )


def _model() -> str:
    return (os.getenv("AI_MODEL") or os.getenv("OPENAI_MODEL") or "gpt-4o-mini").strip()


def _parse_result(content: str) -> EnhanceResult:
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as exc:
        raise EnhancementError("Text enhancement returned malformed JSON.", code="llm_invalid") from exc
    if not isinstance(parsed, dict):
        raise EnhancementError("Text enhancement returned an unexpected payload.", code="llm_invalid")

    enhanced = parsed.get("enhancedText") or parsed.get("enhanced_text")
    if not isinstance(enhanced, str) or not enhanced.strip():
        raise EnhancementError("Text enhancement returned no text.", code="llm_invalid")

    raw_keywords = parsed.get("keywords") or []
    keywords: list[str] = []
    if isinstance(raw_keywords, list):
        for keyword in raw_keywords:
            value = str(keyword).strip()
            if value and value.lower() not in {item.lower() for item in keywords}:
                keywords.append(value)
    return EnhanceResult(enhanced_text=enhanced.strip(), keywords=keywords[:20])


def enhance_text(text: str, section_type: str = "summary") -> EnhanceResult:
    """Rewrite ``text`` with the configured LLM. Only ever invoked by an explicit user request."""
    if not enhancement_enabled():
        raise EnhancementError("Text enhancement is not configured.", code="llm_disabled")

    context = _SECTION_CONTEXT.get(section_type, "professional resume")
    started = time.perf_counter()
    try:
        response = _client().chat.completions.create(
            model=_model(),
            messages=[
                {"role": "system", "content": _SYSTEM_PROMPT},
                {"role": "user", "content": f'Please enhance this {context} text: "{text}"'},
            ],
            temperature=0.3,
            response_format={"type": "json_object"},
            max_tokens=1000,
        )
    except Exception as exc:  # noqa: BLE001 - provider errors surface as a 503
        logger.warning("enhance_llm_failed model=%s section=%s: %s", _model(), section_type, exc)
        raise EnhancementError("Text enhancement is temporarily unavailable. Try again.") from exc

    content = response.choices[0].message.content if response.choices else ""
    if not content:
        raise EnhancementError("Text enhancement returned an empty response.", code="llm_invalid")
    result = _parse_result(content)
    logger.info(
        "enhance_llm_completed model=%s section=%s keywords=%s latency_ms=%s",
        _model(),
        section_type,
        len(result.keywords),
        int((time.perf_counter() - started) * 1000),
    )
    return result


class OpenAITextEnhancer:
    def enhance(self, text: str, section_type: str) -> EnhanceResult:
        return enhance_text(text, section_type)
