from __future__ import annotations

from fastapi import HTTPException, status

from app.core.config import settings


def check_api_key(x_api_key: str | None) -> None:
    if not settings.api_key:
        return
    if x_api_key != settings.api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please provide a valid API key.",
        )


def has_valid_api_key(x_api_key: str | None) -> bool:
    """True only when an API key is configured and the caller presented it."""
    return bool(settings.api_key) and x_api_key == settings.api_key


def is_admin_identity(identity: str | None) -> bool:
    """True when ``identity`` (an account email) is one of the configured ADMIN_EMAILS."""
    if not identity:
        return False
    return identity.strip().lower() in settings.admin_emails


def require_admin(admin_email: str | None) -> None:
    if not is_admin_identity(admin_email):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required.",
        )
