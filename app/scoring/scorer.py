"""ATS compatibility scoring.

``score`` is a pure function: it reads nothing but its arguments and the
static scoring defaults, keeps no state between calls, and performs no
network or storage access. Identical inputs always produce an identical
``ScoreResult``.
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from pydantic import ValidationError

from app.features import KeywordOverlap, build_keyword_overlap, build_resume_features
from app.normalize.text import tokenize
from app.schemas.ats import ScoreResult, ScoringConfig
from app.schemas.resume import ResumeDocument

from .categories import (
    completeness_score,
    formatting_score,
    keyword_match_score,
    quantified_impact_score,
    summary_quality_score,
)
from .errors import InputTooLarge, InvalidDocument
from .profile import KEYWORD_MATCH, ScoringProfile, coerce_config, effective_weights, resolve_profile
from .tips import collect_strengths, collect_warnings, generate_tips, score_band


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def coerce_document(document: ResumeDocument | Mapping[str, Any] | None) -> ResumeDocument:
    if document is None:
        raise InvalidDocument("A resume document is required.")
    if isinstance(document, ResumeDocument):
        return document
    if not isinstance(document, Mapping):
        raise InvalidDocument(f"Expected a resume document, got {type(document).__name__}.")
    try:
        return ResumeDocument.model_validate(document)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise InvalidDocument(f"Invalid resume document at '{location}': {first.get('msg', 'invalid')}") from exc


def _enforce_size(document: ResumeDocument, job_target: str | None, limit: int) -> None:
    total = sum(len(text) for text in document.text_fields())
    total += len(job_target or "")
    if total > limit:
        raise InputTooLarge(f"Resume and job description text is {total} characters; the limit is {limit}.")


def score(
    document: ResumeDocument | Mapping[str, Any] | None,
    job_target: str | None = None,
    config: ScoringConfig | Mapping[str, Any] | None = None,
    *,
    profile: ScoringProfile | None = None,
) -> ScoreResult:
    """Score a resume for ATS compatibility, optionally against a job description.

    A job target that yields no tokens is treated as absent: the keyword_match
    category is excluded and its weight redistributed.

    Raises:
        InvalidDocument: ``document`` is missing or fails schema validation.
        InvalidConfig: an override is malformed (weights not summing to 100, ...).
        InputTooLarge: combined text exceeds ``maxInputChars``.
    """
    resume = coerce_document(document)
    resolved = resolve_profile(coerce_config(config), profile)
    _enforce_size(resume, job_target, resolved.max_input_chars)

    features = build_resume_features(
        resume,
        action_verbs=resolved.action_verbs,
        summary_word_band=resolved.summary_word_band,
        passive_phrases=resolved.passive_phrases,
    )
    overlap: KeywordOverlap | None = None
    if job_target and tokenize(job_target):
        overlap = build_keyword_overlap(resume, job_target)

    weights = effective_weights(resolved, include_keyword_match=overlap is not None)

    raw_scores: dict[str, float] = {}
    for category in weights:
        if category == "formatting":
            raw_scores[category] = formatting_score(features, resolved)
        elif category == KEYWORD_MATCH and overlap is not None:
            raw_scores[category] = keyword_match_score(overlap)
        elif category == "quantified_impact":
            raw_scores[category] = quantified_impact_score(features, resolved)
        elif category == "summary_quality":
            raw_scores[category] = summary_quality_score(features, resolved)
        elif category == "completeness":
            raw_scores[category] = completeness_score(features)

    weighted = sum(raw_scores[category] * weight for category, weight in weights.items()) / 100.0
    overall = max(0, min(100, round_half_up(weighted)))

    return ScoreResult(
        overall_score=overall,
        category_scores={category: round_half_up(value) for category, value in raw_scores.items()},
        weights=weights,
        tips=generate_tips(raw_scores, features, overlap, resolved),
        matched_keywords=list(overlap.matched) if overlap else [],
        missing_keywords=list(overlap.missing) if overlap else [],
        strengths=collect_strengths(raw_scores, features, resolved),
        warnings=collect_warnings(features, resume.personal_info.email, resolved),
        band=score_band(overall, resolved),
        features=features,
    )
