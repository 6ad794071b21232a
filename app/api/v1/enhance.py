from fastapi import APIRouter, HTTPException, Request

from app.core.rate_limit import rate_limit
from app.schemas.enhance import EnhanceRequest, EnhanceResult
from app.services.enhance_service import EnhancementError, enhance_text

router = APIRouter()


@router.post(
    "/enhance",
    response_model=EnhanceResult,
    summary="Enhance Resume Text",
    description="Rewrite one resume section with the language model. Never called during scoring.",
)
@rate_limit("20/minute")
async def enhance(request: Request, payload: EnhanceRequest):
    try:
        return enhance_text(payload.text, payload.section_type)
    except EnhancementError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
