"""Common text-processing helpers shared across parser modules."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

_NAME_LIST_SEPARATORS = re.compile(r"[,，]\s*|\s+(?:과|와|하고|이랑|랑)\s+")
_WHITESPACE = re.compile(r"\s+")


def contains_keyword(text: str, keywords: Iterable[str]) -> bool:
    """Return True when any keyword is present in ``text``."""

    return any(keyword in text for keyword in keywords)


def first_keyword(text: str, keywords: Iterable[str]) -> Optional[str]:
    """Return the first keyword (in the given order) that occurs in ``text``."""

    for keyword in keywords:
        if keyword in text:
            return keyword
    return None


def split_name_list(text: str) -> List[str]:
    """Split "민규, 송희와 요한" style lists on commas and connective particles."""

    return [token.strip() for token in _NAME_LIST_SEPARATORS.split(text or "") if token.strip()]


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text or "").strip()


__all__ = [
    "collapse_whitespace",
    "contains_keyword",
    "first_keyword",
    "split_name_list",
]
