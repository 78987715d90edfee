"""Calendar intent parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Sequence, Tuple

from chat_actions.parser_utils import (
    collapse_whitespace,
    contains_keyword,
    extract_mentions,
    find_datetime_in_text,
    name_variants,
    resolve_names,
    split_name_list,
)
from chat_actions.parsers.types import ChatMember, EventData, EventKind, ParsedAction
from chat_actions.text_parsing import parse_datetime_hint

EVENT_CONFIDENCE = 0.75
DEFAULT_DURATION = timedelta(hours=1)
MIN_LOCATION_LENGTH = 2

MEETING_KEYWORDS = ("회의", "미팅", "모임", "스크럼", "스탠드업", "킥오프", "브리핑", "워크샵")
DEADLINE_KEYWORDS = ("마감", "데드라인", "마감일", "기한", "마감기한")
DELIVERY_KEYWORDS = ("납품", "전달", "배송", "딜리버리", "인도")

_TIMED_TITLE_PATTERN = re.compile(
    r"^(?P<when>.+?)(?:에|날)\s+"
    r"(?P<title>.*?(?:회의|미팅|모임|스크럼|스탠드업|킥오프|브리핑|워크샵|약속|일정|마감|데드라인|납품).*)"
)
_MEET_AT_TIME_PATTERN = re.compile(
    r"^(?P<when>.+?)(?:(?P<oclock>시)에?|에)\s*(?:만나자|모이자|모여|시작|봐요|만나요|만남)"
)
_ATTENDEE_PATTERN = re.compile(r"(?P<names>.+?)\s*(?:참석|참여|포함)")
_LOCATIVE_MARKER = "에서"
_INLINE_LOCATION_NOISE = (
    re.compile(r"\d{1,2}\s*월\s*\d{1,2}\s*일?"),
    re.compile(r"\d{1,2}\s*[월/]\s*\d{1,2}"),
    re.compile(r"(?:오늘|내일|모레|다음\s*주|이번\s*주)"),
    re.compile(r"[월화수목금토일]요일"),
)


@dataclass
class EventMatch:
    title: str
    start_at: datetime
    end_at: datetime
    time_expression: Optional[str] = None


EventRule = Callable[[str, datetime], Optional[EventMatch]]


def parse(
    message: str,
    members: Sequence[ChatMember],
    now: datetime,
    project_id: Optional[str] = None,
) -> Optional[ParsedAction]:
    """Extract a calendar proposal from a message that names a time.

    The title is left raw here; cleaning happens during reconciliation once
    every matcher has run.
    """
    match = match_event(message, now)
    if match is None:
        return None

    location = None
    if match.time_expression:
        location = extract_inline_location(match.time_expression, members)

    data = EventData(
        title=match.title,
        start_at=match.start_at,
        end_at=match.end_at,
        location=location,
        location_url=None,
        attendee_ids=resolve_attendees(message, members),
        kind=detect_event_kind(message),
        project_id=project_id,
    )
    return ParsedAction.event(data, EVENT_CONFIDENCE)


def match_event(message: str, now: datetime) -> Optional[EventMatch]:
    if not message:
        return None
    for rule in EVENT_RULES:
        match = rule(message, now)
        if match is not None:
            return match
    return None


def detect_event_kind(message: str) -> EventKind:
    """Delivery keywords are checked last and win over deadline keywords."""
    kind = EventKind.MEETING
    if contains_keyword(message, DEADLINE_KEYWORDS):
        kind = EventKind.DEADLINE
    if contains_keyword(message, DELIVERY_KEYWORDS):
        kind = EventKind.DELIVERY
    return kind


def resolve_attendees(message: str, members: Sequence[ChatMember]) -> List[str]:
    """Attendee ids from roster mentions, else from a "<names> 참석" clause."""
    _, ids = extract_mentions(message, members)
    if ids:
        return ids
    found = _ATTENDEE_PATTERN.search(message)
    if not found:
        return []
    resolved, _ = resolve_names(split_name_list(found.group("names")), members)
    return resolved


def extract_inline_location(time_expression: str, members: Sequence[ChatMember]) -> Optional[str]:
    """WHAT: recover "강남역 9번출구" from "민규님 2월 16일 강남역 9번출구에서 3시".

    HOW: keep the text before "에서", drop date words, then peel member name
    variants off the front until nothing changes. Only the captured time
    clause is inspected, never the whole message.
    """
    marker = time_expression.find(_LOCATIVE_MARKER)
    if marker <= 0:
        return None
    candidate = time_expression[:marker]
    for pattern in _INLINE_LOCATION_NOISE:
        candidate = pattern.sub("", candidate)
    candidate = collapse_whitespace(candidate)

    variants = [variant for member in members for variant in name_variants(member.name)]
    changed = True
    while changed and candidate:
        changed = False
        for variant in variants:
            if candidate.startswith(variant):
                candidate = candidate[len(variant):].lstrip(" ,，")
                changed = True

    if len(candidate) < MIN_LOCATION_LENGTH:
        return None
    return candidate


def match_timed_title(message: str, now: datetime) -> Optional[EventMatch]:
    """"금요일 3시에 팀 회의" -> title 팀 회의, time clause 금요일 3시."""
    found = _TIMED_TITLE_PATTERN.search(message)
    if not found:
        return None
    when = found.group("when").strip()
    resolved = parse_datetime_hint(when, now)
    if resolved is None:
        return None
    start, end = resolved
    return EventMatch(
        title=found.group("title").strip(),
        start_at=start,
        end_at=end or start + DEFAULT_DURATION,
        time_expression=when,
    )


def match_meet_at_time(message: str, now: datetime) -> Optional[EventMatch]:
    """"오후 2시에 모이자"; the whole message becomes the title."""
    found = _MEET_AT_TIME_PATTERN.search(message)
    if not found:
        return None
    when = found.group("when").strip()
    if found.group("oclock"):
        when += "시"
    resolved = parse_datetime_hint(when, now)
    if resolved is None:
        return None
    start, end = resolved
    return EventMatch(title=message.strip(), start_at=start, end_at=end or start + DEFAULT_DURATION)


def match_meeting_keyword(message: str, now: datetime) -> Optional[EventMatch]:
    if not contains_keyword(message, MEETING_KEYWORDS):
        return None
    resolved = find_datetime_in_text(message, now)
    if resolved is None:
        return None
    start, end = resolved
    return EventMatch(title=message.strip(), start_at=start, end_at=end or start + DEFAULT_DURATION)


EVENT_RULES: Tuple[EventRule, ...] = (
    match_timed_title,
    match_meet_at_time,
    match_meeting_keyword,
)


__all__ = [
    "DEADLINE_KEYWORDS",
    "DELIVERY_KEYWORDS",
    "EVENT_RULES",
    "EventMatch",
    "MEETING_KEYWORDS",
    "detect_event_kind",
    "extract_inline_location",
    "match_event",
    "match_meet_at_time",
    "match_meeting_keyword",
    "match_timed_title",
    "parse",
    "resolve_attendees",
]
