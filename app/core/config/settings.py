from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    trust_x_forwarded_for: bool
    resume_store_db_path: str
    subscription_db_path: str
    free_job_target_quota: int
    admin_emails: tuple[str, ...]
    ats_max_input_chars: int


settings = Settings(
    api_key=_get_env("API_KEY"),
    rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
    ),
    cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX"),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
    trust_x_forwarded_for=_get_env_bool("TRUST_X_FORWARDED_FOR", False),
    resume_store_db_path=_get_env("RESUME_STORE_DB_PATH", "data/resumes.db") or "data/resumes.db",
    subscription_db_path=_get_env("SUBSCRIPTION_DB_PATH", "data/subscriptions.db") or "data/subscriptions.db",
    free_job_target_quota=_get_env_int("FREE_JOB_TARGET_QUOTA", 3),
    admin_emails=tuple(email.lower() for email in _get_env_list("ADMIN_EMAILS", [])),
    ats_max_input_chars=_get_env_int("ATS_MAX_INPUT_CHARS", 50000),
)

if settings.free_job_target_quota < 0:
    raise RuntimeError("FREE_JOB_TARGET_QUOTA must be zero or a positive integer.")

if settings.ats_max_input_chars <= 0:
    raise RuntimeError("ATS_MAX_INPUT_CHARS must be a positive integer.")
