from __future__ import annotations

from typing import Any, Mapping

from app.features import KeywordOverlap, ResumeFeatures
from app.normalize.utils import looks_like_email

from .profile import CATEGORIES, ScoringProfile

_SECTION_LABELS = {
    "summary": "professional summary",
    "work_experience": "work experience",
    "education": "education",
    "skills": "skills",
}
_CONTACT_LABELS = {
    "name": "name",
    "job_title": "job title",
    "location": "location",
    "email": "email",
    "phone": "phone",
}


class _TemplateContext(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def _context(features: ResumeFeatures, overlap: KeywordOverlap | None, profile: ScoringProfile) -> _TemplateContext:
    low, high = profile.summary_word_band
    missing_keywords = list(overlap.missing[: profile.max_listed_keywords]) if overlap else []
    missing_contact = [_CONTACT_LABELS.get(name, name) for name in features.missing_contact_fields]
    return _TemplateContext(
        missing_keywords=", ".join(missing_keywords),
        missing_contact=f" (missing: {', '.join(missing_contact)})" if missing_contact else "",
        missing_sections=", ".join(_SECTION_LABELS.get(name, name) for name in features.missing_sections),
        summary_word_count=features.summary_word_count,
        skill_count=features.skill_count,
        passive_phrases='", "'.join(features.passive_phrases_found),
        min_words=low,
        max_words=high,
    )


def _render(template: str, context: Mapping[str, Any]) -> str:
    return " ".join(template.format_map(context).split())


def generate_tips(
    category_scores: Mapping[str, float],
    features: ResumeFeatures,
    overlap: KeywordOverlap | None,
    profile: ScoringProfile,
) -> list[str]:
    """One tip per category scoring under its threshold, weakest category first."""
    context = _context(features, overlap, profile)
    weak = [
        (score, CATEGORIES.index(category), category)
        for category, score in category_scores.items()
        if score < profile.tip_thresholds.get(category, 70.0)
    ]
    tips: list[str] = []
    for _, _, category in sorted(weak):
        template = profile.tip_templates.get(category)
        if template:
            tips.append(_render(template, context))
    return tips


def collect_strengths(
    category_scores: Mapping[str, float],
    features: ResumeFeatures,
    profile: ScoringProfile,
) -> list[str]:
    ranked = sorted(
        category_scores.items(),
        key=lambda item: (-item[1], CATEGORIES.index(item[0])),
    )
    strengths = [
        profile.strength_messages[category]
        for category, score in ranked
        if score >= profile.strength_threshold and category in profile.strength_messages
    ]

    signals: list[str] = []
    if features.max_role_bullet_count >= profile.detailed_role_min_bullets:
        signals.append("detailed_responsibilities")
    if features.skill_count >= profile.skills_breadth_min:
        signals.append("skills_breadth")
    context = _context(features, None, profile)
    messages = profile.signal_strength_messages
    strengths.extend(_render(messages[key], context) for key in signals if messages.get(key))
    return strengths


def collect_warnings(features: ResumeFeatures, email: str, profile: ScoringProfile) -> list[str]:
    messages = profile.warning_messages
    context = _context(features, None, profile)
    keys: list[str] = []
    if "email" in features.missing_contact_fields:
        keys.append("missing_email")
    elif not looks_like_email(email):
        keys.append("invalid_email")
    if "work_experience" in features.missing_sections:
        keys.append("no_work_experience")
    if features.summary_word_count and not features.summary_in_band:
        keys.append("summary_out_of_band")
    if features.passive_phrases_found:
        keys.append("passive_language")
    return [_render(messages[key], context) for key in keys if messages.get(key)]


def score_band(overall_score: float, profile: ScoringProfile) -> str:
    for name, floor in profile.bands:
        if overall_score >= floor:
            return name
    return "poor"
