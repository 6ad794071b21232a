from fastapi import APIRouter, Header, Request

from app.core.rate_limit import rate_limit
from app.core.security import check_api_key, require_admin
from app.schemas.subscription import Quota, TierUpdateRequest
from app.services.subscription_service import get_quota, update_tier

router = APIRouter()


@router.get("/subscriptions/{user_id}/quota", response_model=Quota)
@rate_limit()
async def subscription_quota(
    request: Request,
    user_id: str,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    check_api_key(x_api_key)
    return get_quota(user_id)


@router.put("/admin/subscriptions/{user_id}", response_model=Quota)
@rate_limit()
async def admin_update_subscription(
    request: Request,
    user_id: str,
    payload: TierUpdateRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    x_admin_email: str | None = Header(default=None, alias="X-Admin-Email"),
):
    check_api_key(x_api_key)
    require_admin(x_admin_email)
    return update_tier(user_id, payload.tier)
