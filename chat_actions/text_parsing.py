"""Korean date and time expression parsing against an explicit reference time."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Callable, Optional, Tuple

DEFAULT_START_TIME = time(10, 0)

_WEEKDAYS = {"월": 0, "화": 1, "수": 2, "목": 3, "금": 4, "토": 5, "일": 6}

# Longest first so 내일모레 is not read as 내일.
_RELATIVE_KEYWORDS = (
    ("내일모레", 2),
    ("오늘", 0),
    ("내일", 1),
    ("모레", 2),
)

_NEXT_WEEK_WEEKDAY_PATTERN = re.compile(r"다음\s*주\s*([월화수목금토일])(?:요일|(?![가-힣]))")
_MONTH_DAY_PATTERN = re.compile(r"(?<!\d)(\d{1,2})\s*[월/]\s*(\d{1,2})(?!\d)\s*일?")
_THIS_WEEK_WEEKDAY_PATTERN = re.compile(r"이번\s*주\s*([월화수목금토일])(?:요일|(?![가-힣]))")
# A bare syllable only counts when spelled out (금요일) or directly followed by
# a clock time (금 3시); "16일", "할 일" and "할 수" must not become weekdays.
_BARE_WEEKDAY_PATTERN = re.compile(r"(?<![\d가-힣])([월화수목금토일])(?:요일|(?=\s*(?:오전|오후|AM|PM|am|pm)?\s*\d{1,2}\s*시))")
_DAYS_LATER_PATTERN = re.compile(r"(\d{1,3})\s*일\s*(?:후|뒤)")
_NEXT_WEEK_PATTERN = re.compile(r"다음\s*주")

_TIME_PATTERN = re.compile(
    r"(오전|오후|AM|PM|am|pm)?\s*(\d{1,2})\s*시(?!간)\s*(?:(\d{1,2})\s*분|(반))?"
)
_TIME_RANGE_PATTERN = re.compile(
    r"(\d{1,2})\s*시\s*(?:부터|에서|~|-)\s*(오전|오후)?\s*(\d{1,2})\s*시(?!간)"
)
_PART_OF_DAY_DEFAULTS = (
    ("점심", 12),
    ("아침", 9),
    ("저녁", 18),
)


@dataclass(frozen=True)
class TimeHint:
    hour: int
    minute: int = 0
    end_hour: Optional[int] = None
    end_minute: int = 0


def parse_date_hint(text: str, now: datetime) -> Optional[date]:
    """Resolve a Korean date expression relative to ``now``.

    Rules run in a fixed order and the first one that yields a date wins.
    Explicit month/day runs before the weekday rules so "16일" never reads as
    Sunday.
    """

    if not text:
        return None
    today = now.date()
    for rule in _DATE_RULES:
        resolved = rule(text, today)
        if resolved is not None:
            return resolved
    return None


def parse_time_hint(text: str) -> Optional[TimeHint]:
    """Return the clock time (and optional end hour) mentioned in ``text``."""

    if not text:
        return None

    hour: Optional[int] = None
    minute = 0
    match = _TIME_PATTERN.search(text)
    if match:
        raw_hour = int(match.group(2))
        raw_minute = 30 if match.group(4) else int(match.group(3) or 0)
        if raw_hour <= 23 and raw_minute <= 59:
            hour = _normalize_hour(raw_hour, match.group(1))
            minute = raw_minute

    if hour is None:
        for keyword, default_hour in _PART_OF_DAY_DEFAULTS:
            if keyword in text:
                hour = default_hour
                minute = 0
                break

    if hour is None:
        return None

    end_hour: Optional[int] = None
    range_match = _TIME_RANGE_PATTERN.search(text)
    if range_match:
        raw_end = int(range_match.group(3))
        if raw_end <= 23:
            end_hour = _normalize_end_hour(raw_end, range_match.group(2))

    return TimeHint(hour=hour, minute=minute, end_hour=end_hour)


def parse_datetime_hint(text: str, now: datetime) -> Optional[Tuple[datetime, Optional[datetime]]]:
    """Return ``(start, end)`` for a date/time expression, or ``None``."""

    return build_datetime(parse_date_hint(text, now), parse_time_hint(text), now)


def build_datetime(
    day: Optional[date],
    hint: Optional[TimeHint],
    now: datetime,
) -> Optional[Tuple[datetime, Optional[datetime]]]:
    """Combine a resolved day and clock time into local timestamps.

    Components are assembled with ``now.tzinfo`` directly; converting through
    UTC would move early-morning KST times onto the previous calendar day.
    """

    if day is None and hint is None:
        return None
    day = day or now.date()
    clock = time(hint.hour, hint.minute) if hint else DEFAULT_START_TIME
    start = datetime.combine(day, clock, tzinfo=now.tzinfo)

    end: Optional[datetime] = None
    if hint is not None and hint.end_hour is not None:
        candidate = datetime.combine(day, time(hint.end_hour, hint.end_minute), tzinfo=now.tzinfo)
        if candidate > start:
            end = candidate
    return start, end


def next_weekday(today: date, weekday: int) -> date:
    """Next occurrence of ``weekday`` strictly after ``today``."""

    delta = (weekday - today.weekday()) % 7
    return today + timedelta(days=delta or 7)


def weekday_of_next_week(today: date, weekday: int) -> date:
    """``weekday`` inside the Monday-based calendar week after ``today``'s."""

    next_monday = today + timedelta(days=7 - today.weekday())
    return next_monday + timedelta(days=weekday)


def _relative_day(text: str, today: date) -> Optional[date]:
    for keyword, offset in _RELATIVE_KEYWORDS:
        if keyword in text:
            return today + timedelta(days=offset)
    return None


def _next_week_weekday(text: str, today: date) -> Optional[date]:
    match = _NEXT_WEEK_WEEKDAY_PATTERN.search(text)
    if not match:
        return None
    return weekday_of_next_week(today, _WEEKDAYS[match.group(1)])


def _month_day(text: str, today: date) -> Optional[date]:
    match = _MONTH_DAY_PATTERN.search(text)
    if not match:
        return None
    month = int(match.group(1))
    day = int(match.group(2))
    try:
        resolved = date(today.year, month, day)
        if resolved < today:
            resolved = date(today.year + 1, month, day)
    except ValueError:
        return None
    return resolved


def _this_week_weekday(text: str, today: date) -> Optional[date]:
    match = _THIS_WEEK_WEEKDAY_PATTERN.search(text) or _BARE_WEEKDAY_PATTERN.search(text)
    if not match:
        return None
    return next_weekday(today, _WEEKDAYS[match.group(1)])


def _days_later(text: str, today: date) -> Optional[date]:
    match = _DAYS_LATER_PATTERN.search(text)
    if not match:
        return None
    return today + timedelta(days=int(match.group(1)))


def _next_week(text: str, today: date) -> Optional[date]:
    if not _NEXT_WEEK_PATTERN.search(text):
        return None
    return weekday_of_next_week(today, 0)


_DATE_RULES: Tuple[Callable[[str, date], Optional[date]], ...] = (
    _relative_day,
    _next_week_weekday,
    _month_day,
    _this_week_weekday,
    _days_later,
    _next_week,
)


def _normalize_hour(hour: int, period: Optional[str]) -> int:
    marker = (period or "").lower()
    if marker in {"오후", "pm"}:
        return hour + 12 if hour < 12 else hour
    if marker in {"오전", "am"}:
        return 0 if hour == 12 else hour
    # No period: 1-6 o'clock is an afternoon time in chat.
    if 1 <= hour <= 6:
        return hour + 12
    return hour


def _normalize_end_hour(hour: int, period: Optional[str]) -> int:
    if period:
        return _normalize_hour(hour, period)
    return hour + 12 if hour <= 6 else hour


__all__ = [
    "DEFAULT_START_TIME",
    "TimeHint",
    "build_datetime",
    "next_weekday",
    "parse_date_hint",
    "parse_datetime_hint",
    "parse_time_hint",
    "weekday_of_next_week",
]
