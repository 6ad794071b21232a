from __future__ import annotations

import math
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Any, Mapping

from pydantic import ValidationError

from app.core.config.scoring import get_scoring_value
from app.normalize.text import first_token
from app.schemas.ats import ScoringConfig

from .errors import InvalidConfig

KEYWORD_MATCH = "keyword_match"
CATEGORIES = ("formatting", KEYWORD_MATCH, "quantified_impact", "summary_quality", "completeness")
_WEIGHT_TOTAL = 100.0
_WEIGHT_EPSILON = 1e-6


@dataclass(frozen=True)
class ScoringProfile:
    """Resolved scoring parameters: YAML defaults with any per-call overrides applied."""

    weights: Mapping[str, float]
    action_verbs: frozenset[str]
    summary_word_band: tuple[int, int]
    max_input_chars: int
    summary_below_band_floor: float
    summary_above_band_floor: float
    action_verb_share: float
    contact_share: float
    quantified_base_score: float
    quantified_target_ratio: float
    tip_thresholds: Mapping[str, float]
    tip_templates: Mapping[str, str]
    max_listed_keywords: int
    strength_threshold: float
    strength_messages: Mapping[str, str]
    warning_messages: Mapping[str, str]
    passive_phrases: tuple[str, ...]
    detailed_role_min_bullets: int
    skills_breadth_min: int
    signal_strength_messages: Mapping[str, str]
    bands: tuple[tuple[str, float], ...]


def validate_weights(weights: Mapping[str, Any]) -> dict[str, float]:
    unknown = sorted(set(weights) - set(CATEGORIES))
    if unknown:
        raise InvalidConfig(f"Unknown scoring categories: {', '.join(unknown)}.")
    missing = [category for category in CATEGORIES if category not in weights]
    if missing:
        raise InvalidConfig(f"Category weights are missing: {', '.join(missing)}.")

    clean: dict[str, float] = {}
    for category in CATEGORIES:
        try:
            value = float(weights[category])
        except (TypeError, ValueError) as exc:
            raise InvalidConfig(f"Weight for '{category}' must be a number.") from exc
        if not math.isfinite(value) or value < 0:
            raise InvalidConfig(f"Weight for '{category}' must be a non-negative number.")
        clean[category] = value

    total = sum(clean.values())
    if abs(total - _WEIGHT_TOTAL) > _WEIGHT_EPSILON:
        raise InvalidConfig(f"Category weights must sum to 100 (got {total:g}).")
    return clean


def _validate_band(band: Any) -> tuple[int, int]:
    try:
        low, high = (int(value) for value in band)
    except (TypeError, ValueError) as exc:
        raise InvalidConfig("Summary word band must be a [min, max] pair of integers.") from exc
    if low < 0 or high < 1 or low > high:
        raise InvalidConfig(f"Summary word band [{low}, {high}] is not a valid range.")
    return low, high


def _clean_verbs(verbs: Any) -> frozenset[str]:
    # Bullets are matched on their first token, so "Led." and "led" are the same verb.
    tokens = (first_token(str(verb)) for verb in verbs or ())
    return frozenset(token for token in tokens if token)


@lru_cache(maxsize=1)
def load_default_profile() -> ScoringProfile:
    bands = get_scoring_value("bands", {}) or {}
    return ScoringProfile(
        weights=validate_weights(get_scoring_value("weights", {}) or {}),
        action_verbs=_clean_verbs(get_scoring_value("action_verbs", [])),
        summary_word_band=_validate_band(get_scoring_value("summary.word_band", [80, 120])),
        max_input_chars=int(get_scoring_value("limits.max_input_chars", 50000)),
        summary_below_band_floor=float(get_scoring_value("summary.below_band_floor", 50)),
        summary_above_band_floor=float(get_scoring_value("summary.above_band_floor", 50)),
        action_verb_share=float(get_scoring_value("formatting.action_verb_share", 0.6)),
        contact_share=float(get_scoring_value("formatting.contact_share", 0.4)),
        quantified_base_score=float(get_scoring_value("quantified_impact.base_score", 40)),
        quantified_target_ratio=float(get_scoring_value("quantified_impact.target_ratio", 0.5)),
        tip_thresholds={
            category: float(get_scoring_value(f"tips.thresholds.{category}", 70)) for category in CATEGORIES
        },
        tip_templates={
            category: str(get_scoring_value(f"tips.templates.{category}", "")) for category in CATEGORIES
        },
        max_listed_keywords=int(get_scoring_value("tips.max_listed_keywords", 10)),
        strength_threshold=float(get_scoring_value("strengths.threshold", 85)),
        strength_messages=dict(get_scoring_value("strengths.messages", {}) or {}),
        signal_strength_messages=dict(get_scoring_value("strengths.signals", {}) or {}),
        warning_messages=dict(get_scoring_value("warnings", {}) or {}),
        passive_phrases=tuple(
            str(phrase).strip() for phrase in get_scoring_value("signals.passive_phrases", []) or () if str(phrase).strip()
        ),
        detailed_role_min_bullets=int(get_scoring_value("signals.detailed_role_min_bullets", 3)),
        skills_breadth_min=int(get_scoring_value("signals.skills_breadth_min", 5)),
        bands=tuple(
            sorted(((str(name), float(floor)) for name, floor in bands.items()), key=lambda item: -item[1])
        ),
    )


def coerce_config(config: ScoringConfig | Mapping[str, Any] | None) -> ScoringConfig | None:
    if config is None or isinstance(config, ScoringConfig):
        return config
    try:
        return ScoringConfig.model_validate(config)
    except ValidationError as exc:
        raise InvalidConfig(f"Invalid scoring config: {exc.errors()[0].get('msg', 'validation failed')}") from exc


def resolve_profile(config: ScoringConfig | None, base: ScoringProfile | None = None) -> ScoringProfile:
    profile = base or load_default_profile()
    if config is None:
        return profile

    changes: dict[str, Any] = {}
    if config.category_weights is not None:
        changes["weights"] = validate_weights(config.category_weights)
    if config.action_verb_list is not None:
        changes["action_verbs"] = _clean_verbs(config.action_verb_list)
    if config.summary_word_band is not None:
        changes["summary_word_band"] = _validate_band(config.summary_word_band)
    if config.max_input_chars is not None:
        if config.max_input_chars <= 0:
            raise InvalidConfig("maxInputChars must be a positive integer.")
        changes["max_input_chars"] = config.max_input_chars
    return replace(profile, **changes) if changes else profile


def effective_weights(profile: ScoringProfile, *, include_keyword_match: bool) -> dict[str, float]:
    """Category weights used for one scoring run.

    Without a job target the keyword_match weight is dropped and every
    remaining weight is rescaled by 100 / (sum of remaining weights).
    """
    if include_keyword_match:
        return {category: profile.weights[category] for category in CATEGORIES}

    remaining = {category: profile.weights[category] for category in CATEGORIES if category != KEYWORD_MATCH}
    total = sum(remaining.values())
    if total <= 0:
        raise InvalidConfig("Category weights leave nothing to score without a job target.")
    return {category: weight * _WEIGHT_TOTAL / total for category, weight in remaining.items()}
