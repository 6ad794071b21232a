from __future__ import annotations

import logging

from app.core import resume_store
from app.core.config import settings
from app.normalize.text import tokenize
from app.schemas.ats import ScoreRequest, ScoreResult, ScoringConfig, StoredResumeScoreRequest
from app.schemas.resume import ResumeDocument
from app.scoring import score
from app.services.collaborators import ResumeStore
from app.services.subscription_service import QuotaExceeded, get_quota, use_job_target_comparison

logger = logging.getLogger(__name__)


class ResumeNotFound(RuntimeError):
    def __init__(self, message: str, *, status_code: int = 404):
        super().__init__(message)
        self.status_code = status_code


def _with_service_limits(config: ScoringConfig | None) -> ScoringConfig:
    """Apply ATS_MAX_INPUT_CHARS; a request may lower the ceiling but never raise it."""
    ceiling = settings.ats_max_input_chars
    if config is None:
        return ScoringConfig(max_input_chars=ceiling)
    if config.max_input_chars is None:
        return config.model_copy(update={"max_input_chars": ceiling})
    return config.model_copy(update={"max_input_chars": min(config.max_input_chars, ceiling)})


def _score_for(
    document: ResumeDocument,
    job_target: str | None,
    config: ScoringConfig | None,
    *,
    quota_key: str,
) -> ScoreResult:
    compares_job = bool(job_target and tokenize(job_target))
    if compares_job:
        quota = get_quota(quota_key)
        if quota.remaining == 0:
            raise QuotaExceeded(
                "Your free job description comparisons for this month are used up. Upgrade to Premium for unlimited comparisons."
            )

    result = score(document, job_target, _with_service_limits(config))

    if compares_job:
        use_job_target_comparison(quota_key)

    logger.info(
        "ats_score_computed overall=%s band=%s job_target=%s tips=%s",
        result.overall_score,
        result.band,
        compares_job,
        len(result.tips),
    )
    return result


def run_ats_score(payload: ScoreRequest, *, client_key: str, authenticated: bool = False) -> ScoreResult:
    """Score a submitted resume.

    Job-target comparisons are charged to ``user_id`` only for authenticated
    callers; everyone else is metered by client address.
    """
    if authenticated and payload.user_id:
        quota_key = payload.user_id
    else:
        quota_key = f"anon:{client_key}"
    return _score_for(payload.document, payload.job_target, payload.config, quota_key=quota_key)


def run_stored_resume_score(
    user_id: str,
    payload: StoredResumeScoreRequest,
    *,
    store: ResumeStore | None = None,
) -> ScoreResult:
    document = (store or resume_store.SQLiteResumeStore()).load_resume(user_id)
    if document is None:
        raise ResumeNotFound("No saved resume found for this user.")
    return _score_for(document, payload.job_target, payload.config, quota_key=user_id)
