from __future__ import annotations

from typing import AbstractSet, Iterable

from pydantic import BaseModel, Field

from app.normalize.text import contains_phrase, first_token, has_metric, word_count
from app.normalize.utils import is_blank, strip_bullet_prefix
from app.schemas.resume import ResumeDocument

CONTACT_FIELDS = ("name", "job_title", "location", "email", "phone")
SECTIONS = ("summary", "work_experience", "education", "skills")


class ResumeFeatures(BaseModel):
    bullet_count: int = 0
    quantified_bullet_count: int = 0
    has_quantified_achievements: bool = False
    quantified_bullet_ratio: float = Field(default=0.0, ge=0.0, le=1.0)
    action_verb_ratio: float = Field(default=0.0, ge=0.0, le=1.0)
    summary_word_count: int = 0
    summary_in_band: bool = False
    section_completeness: float = Field(default=0.0, ge=0.0, le=1.0)
    missing_sections: list[str] = Field(default_factory=list)
    contact_completeness: float = Field(default=0.0, ge=0.0, le=1.0)
    missing_contact_fields: list[str] = Field(default_factory=list)
    max_role_bullet_count: int = 0
    skill_count: int = 0
    passive_phrases_found: list[str] = Field(default_factory=list)


def _clean_bullets(raw_bullets: Iterable[str]) -> list[str]:
    bullets: list[str] = []
    for raw in raw_bullets:
        bullet = strip_bullet_prefix(raw)
        if bullet:
            bullets.append(bullet)
    return bullets


def _missing_sections(document: ResumeDocument) -> list[str]:
    present = {
        "summary": not is_blank(document.summary),
        "work_experience": bool(document.work_experience),
        "education": bool(document.education),
        "skills": bool(document.skills),
    }
    return [section for section in SECTIONS if not present[section]]


def _passive_phrases_found(texts: list[str], phrases: Iterable[str]) -> list[str]:
    return [phrase for phrase in phrases if any(contains_phrase(text, phrase) for text in texts)]


def build_resume_features(
    document: ResumeDocument,
    *,
    action_verbs: AbstractSet[str],
    summary_word_band: tuple[int, int],
    passive_phrases: Iterable[str] = (),
) -> ResumeFeatures:
    bullets = _clean_bullets(document.responsibilities())
    bullet_count = len(bullets)
    if bullet_count == 0:
        quantified = 0
        action_led = 0
    else:
        quantified = sum(1 for bullet in bullets if has_metric(bullet))
        action_led = sum(1 for bullet in bullets if first_token(bullet) in action_verbs)

    summary_words = word_count(document.summary)
    band_min, band_max = summary_word_band
    missing_sections = _missing_sections(document)

    info = document.personal_info
    missing_contact = [name for name in CONTACT_FIELDS if is_blank(getattr(info, name))]

    role_bullet_counts = [len(_clean_bullets(item.responsibilities)) for item in document.work_experience]

    return ResumeFeatures(
        bullet_count=bullet_count,
        quantified_bullet_count=quantified,
        has_quantified_achievements=quantified > 0,
        quantified_bullet_ratio=quantified / bullet_count if bullet_count else 0.0,
        action_verb_ratio=action_led / bullet_count if bullet_count else 0.0,
        summary_word_count=summary_words,
        summary_in_band=band_min <= summary_words <= band_max,
        section_completeness=(len(SECTIONS) - len(missing_sections)) / len(SECTIONS),
        missing_sections=missing_sections,
        contact_completeness=(len(CONTACT_FIELDS) - len(missing_contact)) / len(CONTACT_FIELDS),
        missing_contact_fields=missing_contact,
        max_role_bullet_count=max(role_bullet_counts, default=0),
        skill_count=sum(1 for skill in document.skills if not is_blank(skill.name)),
        passive_phrases_found=_passive_phrases_found([document.summary, *bullets], passive_phrases),
    )
