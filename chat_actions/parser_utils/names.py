"""Resolve Korean name mentions against the chat roster."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from chat_actions.parsers.types import ChatMember

HONORIFICS: Tuple[str, ...] = (
    "님", "씨", "선배", "후배",
    "과장", "대리", "부장", "차장", "사장", "실장", "이사", "본부장",
    "팀장", "대표", "사원", "주임", "계장",
)
# 본부장 has to be tried before 부장.
_HONORIFICS_LONGEST_FIRST = tuple(sorted(HONORIFICS, key=len, reverse=True))
_MENTION_PARTICLES = ("님", "씨", "에게", "한테", "이", "가", "은", "는", "도", "랑", "의")


def strip_honorifics(name: str) -> str:
    """Remove at most one trailing honorific from ``name``."""

    stripped = (name or "").strip()
    for suffix in _HONORIFICS_LONGEST_FIRST:
        if stripped.endswith(suffix):
            return stripped[: -len(suffix)].strip()
    return stripped


def given_name(name: str) -> str:
    """Last two characters of the stripped name (Korean given-name convention)."""

    bare = strip_honorifics(name)
    return bare[-2:] if len(bare) >= 2 else bare


def name_variants(name: str) -> List[str]:
    """Every spelling of a member that may appear in chat, longest first.

    Covers the stored name, the honorific-free name, the given name and both
    of the latter decorated with each honorific. Longest-first ordering keeps
    "민규님" from being cut down to a stray "님" after "민규" is removed. A name
    that is blank or only an honorific has no variants.
    """

    bare = strip_honorifics(name)
    if not bare:
        return []
    short = given_name(name)
    candidates = [name.strip(), bare, short]
    for base in (bare, short):
        candidates.extend(base + suffix for suffix in HONORIFICS)
    unique = list(dict.fromkeys(value for value in candidates if value))
    return sorted(unique, key=len, reverse=True)


def resolve_names(raw_names: Iterable[str], members: Sequence[ChatMember]) -> Tuple[List[str], List[str]]:
    """Map raw mentions to member ids.

    Returns ``(ids, matched_mentions)``. Unresolvable mentions are dropped
    without error; each member id is reported once.
    """

    resolved_ids: List[str] = []
    matched: List[str] = []
    for raw in raw_names:
        stripped = strip_honorifics(raw)
        if not stripped:
            continue
        member = _find_member(stripped, members)
        if member is None:
            continue
        if member.id not in resolved_ids:
            resolved_ids.append(member.id)
            matched.append(raw)
    return resolved_ids, matched


def extract_mentions(text: str, members: Sequence[ChatMember]) -> Tuple[List[str], List[str]]:
    """Find roster members mentioned anywhere in ``text``.

    Returns ``(names, ids)`` in roster order. A bare given name only counts
    with an adjoining honorific or at a word boundary, so "민규" inside an
    unrelated word does not resolve.
    """

    names: List[str] = []
    ids: List[str] = []
    if not text:
        return names, ids
    for member in members:
        if member.id in ids:
            continue
        full = member.name.strip()
        if full and full in text:
            names.append(full)
            ids.append(member.id)
            continue
        short = given_name(member.name)
        if len(short) < 2 or short not in text:
            continue
        if _given_name_is_standalone(short, text):
            names.append(short)
            ids.append(member.id)
    return names, ids


def _find_member(stripped: str, members: Sequence[ChatMember]) -> Optional[ChatMember]:
    for member in members:
        if member.name == stripped:
            return member
    for member in members:
        if member.name and (stripped in member.name or member.name in stripped):
            return member
    return None


def _given_name_is_standalone(short: str, text: str) -> bool:
    if any(short + suffix in text for suffix in HONORIFICS):
        return True
    particles = "|".join(_MENTION_PARTICLES)
    pattern = re.compile(rf"(?:^|[\s,，]){re.escape(short)}(?:{particles}|[\s,，]|$)")
    return bool(pattern.search(text))


__all__ = [
    "HONORIFICS",
    "extract_mentions",
    "given_name",
    "name_variants",
    "resolve_names",
    "strip_honorifics",
]
