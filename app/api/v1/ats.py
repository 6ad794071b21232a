from fastapi import APIRouter, Header, HTTPException, Request

from app.core.rate_limit import client_key, rate_limit
from app.core.security import check_api_key, has_valid_api_key
from app.schemas.ats import ScoreRequest, ScoreResult
from app.scoring import ATSScoringError
from app.services.ats_service import run_ats_score
from app.services.subscription_service import QuotaExceeded

router = APIRouter()


def _raise_scoring_http_error(exc: Exception) -> None:
    if isinstance(exc, (ATSScoringError, QuotaExceeded)):
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    raise exc


@router.post(
    "/ats/score",
    response_model=ScoreResult,
    summary="ATS Compatibility Score",
    description=(
        "Score a resume for ATS compatibility, optionally against a job description. "
        "A user_id is billed only when sent with a valid X-API-Key; otherwise the client address is."
    ),
)
@rate_limit()
async def ats_score(
    request: Request,
    payload: ScoreRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    if payload.user_id:
        check_api_key(x_api_key)
    try:
        return run_ats_score(
            payload,
            client_key=client_key(request),
            authenticated=has_valid_api_key(x_api_key),
        )
    except (ATSScoringError, QuotaExceeded) as exc:
        _raise_scoring_http_error(exc)
