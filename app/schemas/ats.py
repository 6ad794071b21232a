from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.features import ResumeFeatures
from app.schemas.resume import ResumeDocument

Category = Literal["formatting", "keyword_match", "quantified_impact", "summary_quality", "completeness"]
ScoreBand = Literal["excellent", "good", "fair", "poor"]


class ScoringConfig(BaseModel):
    """Per-call overrides of the defaults in config/scoring.yaml."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    category_weights: dict[str, float] | None = None
    action_verb_list: tuple[str, ...] | None = None
    summary_word_band: tuple[int, int] | None = None
    max_input_chars: int | None = None


class ScoreResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_score: int = Field(ge=0, le=100)
    category_scores: dict[str, int]
    weights: dict[str, float]
    tips: list[str] = Field(default_factory=list)
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    band: ScoreBand
    features: ResumeFeatures


class ScoreRequest(BaseModel):
    document: ResumeDocument
    job_target: str | None = None
    config: ScoringConfig | None = None
    user_id: str | None = Field(default=None, min_length=1, max_length=200)


class StoredResumeScoreRequest(BaseModel):
    job_target: str | None = None
    config: ScoringConfig | None = None
