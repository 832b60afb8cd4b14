# Term matching used to detect which persona a message talks about.
#
# Two kinds of terms:
#   - numeric ids (phone numbers etc, 6+ ASCII digits) -> plain substring
#   - everything else -> whole-word, case-insensitive
# Word boundaries follow Python's Unicode-aware \b, so "josé" and "zoë"
# behave like ASCII names.

from __future__ import annotations
import re
from functools import lru_cache
from typing import Pattern

_NUMERIC_ID = re.compile(r"[0-9]{6,}")


def is_numeric_id(term: str) -> bool:
    return bool(_NUMERIC_ID.fullmatch(term))


@lru_cache(maxsize=512)
def _word_pattern(term: str) -> Pattern[str]:
    return re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)


def contains_term(text: str, term: str) -> bool:
    t = (text or "").lower()
    q = (term or "").strip().lower()
    if not q:
        return False
    if is_numeric_id(q):
        return q in t
    return _word_pattern(q).search(t) is not None
