from .errors import ATSScoringError, InputTooLarge, InvalidConfig, InvalidDocument
from .profile import CATEGORIES, KEYWORD_MATCH, ScoringProfile, effective_weights, load_default_profile, resolve_profile
from .scorer import coerce_document, score

__all__ = [
    "ATSScoringError",
    "InvalidDocument",
    "InvalidConfig",
    "InputTooLarge",
    "CATEGORIES",
    "KEYWORD_MATCH",
    "ScoringProfile",
    "effective_weights",
    "load_default_profile",
    "resolve_profile",
    "coerce_document",
    "score",
]
