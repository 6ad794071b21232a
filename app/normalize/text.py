from __future__ import annotations

import re
from typing import Iterable

# Unicode letters and digits, without the underscore that \w also matches.
_TOKEN_RE = re.compile(r"[^\W_]+")
# A percent sign, a currency amount, or a number that stands on its own
# ("12", "1,200", "40k", "3x", "10+"); digits inside words like "Web3" do not count.
_METRIC_RE = re.compile(
    r"%"
    r"|[$€£¥₹]\s?\d"
    r"|(?<![^\W_])\d[\d,.]*(?:[kmbx+])?(?![^\W_])",
    re.IGNORECASE,
)


def tokenize(text: str | None) -> list[str]:
    """Case-folded alphanumeric tokens of ``text`` in source order.

    Punctuation and whitespace only separate tokens; stop words are kept so
    short technical terms survive keyword matching. ``casefold`` keeps
    re-cased text equal ("Straße" and "STRASSE" both become "strasse").
    """
    if not text:
        return []
    return _TOKEN_RE.findall(text.casefold())


def token_set(texts: Iterable[str | None]) -> set[str]:
    tokens: set[str] = set()
    for text in texts:
        tokens.update(tokenize(text))
    return tokens


def word_count(text: str | None) -> int:
    return len(tokenize(text))


def first_token(text: str | None) -> str | None:
    tokens = tokenize(text)
    return tokens[0] if tokens else None


def contains_phrase(text: str | None, phrase: str) -> bool:
    """True when the tokens of ``phrase`` appear consecutively in ``text``."""
    needle = tokenize(phrase)
    if not needle:
        return False
    haystack = f" {' '.join(tokenize(text))} "
    return f" {' '.join(needle)} " in haystack


def has_metric(text: str | None) -> bool:
    if not text:
        return False
    return bool(_METRIC_RE.search(text))
