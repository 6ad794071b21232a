from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CourseType = Literal["course", "certification"]


class _ResumeModel(BaseModel):
    # Editor payloads arrive camelCase; Python callers may use field names.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class PersonalInfo(_ResumeModel):
    name: str = ""
    job_title: str = ""
    location: str = ""
    email: str = ""
    phone: str = ""


class WorkItem(_ResumeModel):
    job_title: str
    company: str
    start_date: str = ""
    end_date: str = ""
    location: str = ""
    responsibilities: tuple[str, ...] = ()


class EduItem(_ResumeModel):
    degree: str
    institution: str
    field: str = ""
    graduation_year: str = ""
    location: str = ""


class Skill(_ResumeModel):
    name: str
    level: int = Field(default=0, ge=0, le=100)


class Course(_ResumeModel):
    title: str
    provider: str = ""
    date: str = ""
    description: str = ""
    type: CourseType = "course"


class ResumeDocument(_ResumeModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: str = ""
    work_experience: tuple[WorkItem, ...] = ()
    education: tuple[EduItem, ...] = ()
    skills: tuple[Skill, ...] = ()
    courses_and_certifications: tuple[Course, ...] = ()

    def text_fields(self) -> list[str]:
        """Every free-text value in the document, used for the input size ceiling."""
        info = self.personal_info
        texts = [info.name, info.job_title, info.location, info.email, info.phone, self.summary]
        for item in self.work_experience:
            texts.extend([item.job_title, item.company, item.start_date, item.end_date, item.location])
            texts.extend(item.responsibilities)
        for edu in self.education:
            texts.extend([edu.degree, edu.institution, edu.field, edu.graduation_year, edu.location])
        texts.extend(skill.name for skill in self.skills)
        for course in self.courses_and_certifications:
            texts.extend([course.title, course.provider, course.date, course.description])
        return texts

    def responsibilities(self) -> list[str]:
        return [bullet for item in self.work_experience for bullet in item.responsibilities]
