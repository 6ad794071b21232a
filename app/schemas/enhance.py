from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SectionType = Literal["summary", "work_experience", "education", "skills", "courses_and_certifications"]


class EnhanceRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text: str = Field(min_length=1, max_length=5000)
    section_type: SectionType = "summary"


class EnhanceResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    enhanced_text: str
    keywords: list[str] = Field(default_factory=list)
