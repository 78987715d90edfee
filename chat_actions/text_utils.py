"""Fingerprints for chat messages in the parse log.

Chat lines repeat with cosmetic noise ("회의 잡아줘~~", "회의 잡아줘 ㅎㅎ",
full-width "ＯＫ"), so messages are folded to one canonical form before hashing.
"""

from __future__ import annotations

import hashlib
import re
import unicodedata

# Trailing laughter, emoticons and emphasis carry no command meaning.
_TRAILING_NOISE = re.compile(r"(?:\s*(?:[ㅋㅎㅠㅜ]{2,}|\^\^|;;|[~!?.]+))+$")


def normalize_chat_text(value: str) -> str:
    """NFKC-fold, drop trailing chat noise, collapse whitespace and lowercase."""

    folded = unicodedata.normalize("NFKC", value or "")
    folded = " ".join(folded.split())
    return _TRAILING_NOISE.sub("", folded).lower()


def message_fingerprint(value: str) -> str:
    """SHA-256 of the normalized message; empty input fingerprints to ''."""

    normalized = normalize_chat_text(value)
    if not normalized:
        return ""
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


__all__ = ["message_fingerprint", "normalize_chat_text"]
