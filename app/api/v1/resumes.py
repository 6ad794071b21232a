from fastapi import APIRouter, Header, HTTPException, Request, Response, status

from app.core import resume_store
from app.core.rate_limit import rate_limit
from app.core.security import check_api_key
from app.schemas.ats import ScoreResult, StoredResumeScoreRequest
from app.schemas.resume import ResumeDocument
from app.scoring import ATSScoringError
from app.services.ats_service import ResumeNotFound, run_stored_resume_score
from app.services.subscription_service import QuotaExceeded

router = APIRouter()


@router.get("/resumes/{user_id}", response_model=ResumeDocument)
@rate_limit()
async def get_resume(
    request: Request,
    user_id: str,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    check_api_key(x_api_key)
    document = resume_store.load_resume(user_id)
    if document is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No saved resume found for this user.")
    return document


@router.put("/resumes/{user_id}", response_model=ResumeDocument)
@rate_limit()
async def put_resume(
    request: Request,
    user_id: str,
    document: ResumeDocument,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    check_api_key(x_api_key)
    resume_store.save_resume(user_id, document)
    return document


@router.delete("/resumes/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
@rate_limit()
async def delete_resume(
    request: Request,
    user_id: str,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    check_api_key(x_api_key)
    if not resume_store.delete_resume(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No saved resume found for this user.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/resumes/{user_id}/score", response_model=ScoreResult)
@rate_limit()
async def score_saved_resume(
    request: Request,
    user_id: str,
    payload: StoredResumeScoreRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    check_api_key(x_api_key)
    try:
        return run_stored_resume_score(user_id, payload)
    except (ATSScoringError, QuotaExceeded, ResumeNotFound) as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
