from __future__ import annotations

from app.core.config import settings


def cors_allowed_origins() -> list[str]:
    # Browsers send the Origin header without a trailing slash.
    origins: list[str] = []
    for origin in settings.cors_allowed_origins:
        clean = origin.strip().rstrip("/")
        if clean and clean not in origins:
            origins.append(clean)
    return origins


def cors_allow_origin_regex() -> str | None:
    regex = (settings.cors_allow_origin_regex or "").strip()
    return regex or None
