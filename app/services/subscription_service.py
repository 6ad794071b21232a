from __future__ import annotations

import logging

from app.core.config import settings
from app.core.subscription_store import (
    SubscriptionQuotaExceeded,
    consume_job_target,
    get_subscription,
    set_tier,
)
from app.schemas.subscription import Quota

logger = logging.getLogger(__name__)

_UNLIMITED_TIERS = {"premium", "admin"}
_KNOWN_TIERS = {"free", "premium", "admin"}


class QuotaExceeded(RuntimeError):
    def __init__(self, message: str, *, status_code: int = 402):
        super().__init__(message)
        self.status_code = status_code


def _tier_for(stored_tier: str) -> str:
    # Tiers come only from the store, which the admin endpoint writes to.
    return stored_tier if stored_tier in _KNOWN_TIERS else "free"


def _job_target_limit(tier: str) -> int | None:
    if tier in _UNLIMITED_TIERS:
        return None
    return settings.free_job_target_quota


def get_quota(user_id: str) -> Quota:
    record = get_subscription(user_id)
    tier = _tier_for(record["tier"])
    limit = _job_target_limit(tier)
    remaining = None if limit is None else max(0, limit - int(record["job_target_used"]))
    return Quota(tier=tier, remaining=remaining, period=record["period"])


def use_job_target_comparison(user_id: str) -> Quota:
    """Charge one job-description comparison against the user's monthly allowance."""
    record = get_subscription(user_id)
    tier = _tier_for(record["tier"])
    try:
        remaining = consume_job_target(user_id, limit=_job_target_limit(tier), period=record["period"])
    except SubscriptionQuotaExceeded as exc:
        logger.info("job_target_quota_exhausted user=%s tier=%s", user_id, tier)
        raise QuotaExceeded(
            "Your free job description comparisons for this month are used up. Upgrade to Premium for unlimited comparisons."
        ) from exc
    return Quota(tier=tier, remaining=remaining, period=record["period"])


def update_tier(user_id: str, tier: str) -> Quota:
    set_tier(user_id, tier)
    logger.info("subscription_tier_updated user=%s tier=%s", user_id, tier)
    return get_quota(user_id)


class LocalSubscriptionService:
    def get_quota(self, user_id: str) -> Quota:
        return get_quota(user_id)
