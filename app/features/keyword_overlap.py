from __future__ import annotations

from pydantic import BaseModel, Field

from app.normalize.text import token_set
from app.schemas.resume import ResumeDocument


class KeywordOverlap(BaseModel):
    target_keywords: list[str] = Field(default_factory=list)
    matched: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)

    @property
    def match_ratio(self) -> float:
        if not self.target_keywords:
            return 0.0
        return len(self.matched) / len(self.target_keywords)


def resume_body_tokens(document: ResumeDocument) -> set[str]:
    texts = [document.summary]
    texts.extend(document.responsibilities())
    texts.extend(skill.name for skill in document.skills)
    return token_set(texts)


def build_keyword_overlap(document: ResumeDocument, job_target: str) -> KeywordOverlap:
    target = token_set([job_target])
    body = resume_body_tokens(document)
    matched = target & body
    return KeywordOverlap(
        target_keywords=sorted(target),
        matched=sorted(matched),
        missing=sorted(target - matched),
    )
