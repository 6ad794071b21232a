from __future__ import annotations

from app.features import KeywordOverlap, ResumeFeatures

from .profile import ScoringProfile


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


def formatting_score(features: ResumeFeatures, profile: ScoringProfile) -> float:
    return _clamp(
        100.0
        * (
            profile.action_verb_share * features.action_verb_ratio
            + profile.contact_share * features.contact_completeness
        )
    )


def keyword_match_score(overlap: KeywordOverlap) -> float:
    return _clamp(100.0 * overlap.match_ratio)


def quantified_impact_score(features: ResumeFeatures, profile: ScoringProfile) -> float:
    # Any quantified bullet earns the base score, so adding one never lowers it.
    if not features.has_quantified_achievements:
        return 0.0
    target = profile.quantified_target_ratio
    coverage = 1.0 if target <= 0 else min(1.0, features.quantified_bullet_ratio / target)
    base = profile.quantified_base_score
    return _clamp(base + (100.0 - base) * coverage)


def summary_quality_score(features: ResumeFeatures, profile: ScoringProfile) -> float:
    words = features.summary_word_count
    if words == 0:
        return 0.0
    low, high = profile.summary_word_band
    if words < low:
        floor = profile.summary_below_band_floor
        return _clamp(floor + (100.0 - floor) * words / low)
    if words > high:
        floor = profile.summary_above_band_floor
        return _clamp(max(floor, 100.0 - (100.0 - floor) * (words - high) / high))
    return 100.0


def completeness_score(features: ResumeFeatures) -> float:
    return _clamp(100.0 * features.section_completeness)
