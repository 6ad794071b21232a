from __future__ import annotations

import re

_BULLET_CHARS = "•◦▪▫●○■□◆◇▶►-–—*·"
_BULLET_PATTERN = re.compile(rf"^\s*(?:[{re.escape(_BULLET_CHARS)}]|(?:\d+[\.\)]))\s+")
_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")


def normalize_line(line: str) -> str:
    return re.sub(r"\s+", " ", line).strip()


def strip_bullet_prefix(line: str) -> str:
    """Drop a leading bullet glyph or list number pasted in from another editor."""
    return _BULLET_PATTERN.sub("", line).strip()


def is_blank(value: str | None) -> bool:
    return not value or not value.strip()


def looks_like_email(value: str | None) -> bool:
    if is_blank(value):
        return False
    return bool(_EMAIL_RE.fullmatch(normalize_line(value or "")))
