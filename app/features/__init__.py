from .keyword_overlap import KeywordOverlap, build_keyword_overlap, resume_body_tokens
from .resume_features import CONTACT_FIELDS, SECTIONS, ResumeFeatures, build_resume_features

__all__ = [
    "CONTACT_FIELDS",
    "SECTIONS",
    "ResumeFeatures",
    "build_resume_features",
    "KeywordOverlap",
    "build_keyword_overlap",
    "resume_body_tokens",
]
