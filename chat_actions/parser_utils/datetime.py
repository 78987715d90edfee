"""Reusable full-message date helpers for parsers."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional, Tuple

from chat_actions.text_parsing import build_datetime, parse_date_hint, parse_time_hint

_DATE_KEYWORDS = ("오늘", "내일", "모레", "다음주", "이번주", "다음 주", "이번 주")
_DEADLINE_PREFIX_PATTERN = re.compile(r"(.+?)까지")


# WHAT: scan a whole message for the first recognizable date.
# HOW: resolve from the earliest relative keyword onward, then the "~까지" prefix, then the full text.
def find_date_in_text(message: str, now: datetime) -> Optional[date]:
    if not message:
        return None
    positions = [message.find(keyword) for keyword in _DATE_KEYWORDS if keyword in message]
    if positions:
        parsed = parse_date_hint(message[min(positions):], now)
        if parsed:
            return parsed
    deadline = _DEADLINE_PREFIX_PATTERN.search(message)
    if deadline:
        parsed = parse_date_hint(deadline.group(1).strip(), now)
        if parsed:
            return parsed
    return parse_date_hint(message, now)


# WHAT: lighter-weight timestamp scan used when no pattern captured a time clause.
# HOW: pair `find_date_in_text` with the clock time found anywhere in the message.
def find_datetime_in_text(message: str, now: datetime) -> Optional[Tuple[datetime, Optional[datetime]]]:
    if not message:
        return None
    return build_datetime(find_date_in_text(message, now), parse_time_hint(message), now)


__all__ = ["find_date_in_text", "find_datetime_in_text"]
