"""Location-sharing intent parsing."""

from __future__ import annotations

import re
from typing import Callable, Optional, Tuple

from chat_actions.parsers.types import LocationData, ParsedAction

LOCATION_CONFIDENCE = 0.7

_MEET_AT_PLACE_PATTERN = re.compile(r"^(?P<place>.+?)에서\s*(?:만나자|만나요|만남|모이자|모여|봐요|보자)")
_PLACE_LABEL_PATTERN = re.compile(r"(?:장소|위치|place)\s*[:：]\s*(?P<place>.+)", re.IGNORECASE)
_ADDRESS_LABEL_PATTERN = re.compile(r"(?:주소|address)\s*[:：]\s*(?P<address>.+)", re.IGNORECASE)
_ADDRESS_LABEL_START = re.compile(r"[,，]?\s*(?:주소|address)\s*[:：]", re.IGNORECASE)

# No bare place-noun rule: "카페 다녀와서 연락할게" must not share a location.
LocationRule = Callable[[str], Optional[str]]


def parse(message: str) -> Optional[ParsedAction]:
    """Return a location proposal for "~에서 만나자" or "장소: ~" messages."""
    if not message:
        return None
    title = None
    for rule in LOCATION_RULES:
        title = rule(message)
        if title:
            break
    if not title:
        return None
    data = LocationData(title=title, address=extract_address(message), search_query=title)
    return ParsedAction.location(data, LOCATION_CONFIDENCE)


def extract_address(message: str) -> Optional[str]:
    found = _ADDRESS_LABEL_PATTERN.search(message)
    if not found:
        return None
    address = found.group("address").strip()
    return address or None


def match_meet_at_place(message: str) -> Optional[str]:
    found = _MEET_AT_PLACE_PATTERN.search(message.strip())
    if not found:
        return None
    return found.group("place").strip() or None


def match_place_label(message: str) -> Optional[str]:
    found = _PLACE_LABEL_PATTERN.search(message)
    if not found:
        return None
    place = _ADDRESS_LABEL_START.split(found.group("place"), maxsplit=1)[0]
    return place.strip() or None


LOCATION_RULES: Tuple[LocationRule, ...] = (
    match_meet_at_place,
    match_place_label,
)


__all__ = [
    "LOCATION_RULES",
    "extract_address",
    "match_meet_at_place",
    "match_place_label",
    "parse",
]
