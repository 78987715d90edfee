"""Task intent parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, List, Optional, Sequence, Tuple

from chat_actions.parser_utils import extract_mentions, find_date_in_text, resolve_names
from chat_actions.parsers.types import ChatMember, ParsedAction, Priority, TaskData
from chat_actions.text_parsing import parse_date_hint

ASSIGNED_CONFIDENCE = 0.85
UNASSIGNED_CONFIDENCE = 0.7

HIGH_PRIORITY_KEYWORDS = ("급한", "급하게", "긴급", "긴급하게", "asap", "빨리", "급히", "당장", "지금 바로", "최우선")
LOW_PRIORITY_KEYWORDS = ("여유있게", "천천히", "시간될 때", "시간 될 때", "시간나면", "시간 나면", "나중에", "여유롭게")

_TRAILING = r"\s*[.!~]*$"
_ASSIGN_PATTERN = re.compile(
    r"^(?P<name>.+?)(?:님|씨|선배)?(?:에게|한테)\s+(?P<title>.+?)\s*"
    r"(?:해줘|해달라|부탁해요|부탁해|부탁합니다|부탁드립니다|부탁드려요|부탁|해주세요|해주십시오|해주시겠어요|맡겨|전달|시켜)"
    + _TRAILING
)
_DEADLINE_PATTERN = re.compile(
    r"^(?P<when>.+?)까지\s+(?P<title>.+?)\s*(?:하기|완성|제출|마감|끝내기|완료|마무리)" + _TRAILING
)
_LABEL_PATTERN = re.compile(r"(?:할\s*일|todo|to-do)\s*[:：]\s*(?P<title>.+)", re.IGNORECASE)
_GENERAL_PATTERN = re.compile(
    r"^(?P<title>.+?)\s*(?:해줘|해달라|부탁해|부탁합니다|해주세요|해주십시오|만들어줘|만들어주세요"
    r"|작성해줘|작성해주세요|완성해줘|완성해주세요)"
    + _TRAILING
)


@dataclass
class TaskMatch:
    title: str
    assignee_names: List[str] = field(default_factory=list)
    assignee_ids: List[str] = field(default_factory=list)
    due_date: Optional[date] = None


TaskRule = Callable[[str, Sequence[ChatMember], datetime], Optional[TaskMatch]]


def parse(
    message: str,
    members: Sequence[ChatMember],
    now: datetime,
    project_id: Optional[str] = None,
) -> Optional[ParsedAction]:
    """WHAT: turn a request phrase into a task proposal.

    HOW: try ``TASK_RULES`` in order, then fill in whatever the winning rule
    left open: a due date from the whole message, assignees from roster
    mentions, and the urgency keywords.
    """
    match = match_task(message, members, now)
    if match is None:
        return None

    if match.due_date is None:
        match.due_date = find_date_in_text(message, now)

    if not match.assignee_ids:
        names, ids = extract_mentions(message, members)
        if ids:
            match.assignee_names = names
            match.assignee_ids = ids

    data = TaskData(
        title=match.title,
        assignee_names=list(match.assignee_names),
        assignee_ids=list(match.assignee_ids),
        due_date=match.due_date,
        priority=detect_priority(message),
        project_id=project_id,
    )
    confidence = ASSIGNED_CONFIDENCE if data.assignee_ids else UNASSIGNED_CONFIDENCE
    return ParsedAction.task(data, confidence)


def match_task(message: str, members: Sequence[ChatMember], now: datetime) -> Optional[TaskMatch]:
    """Return the result of the first task rule that claims ``message``."""
    if not message:
        return None
    for rule in TASK_RULES:
        match = rule(message, members, now)
        if match is not None:
            return match
    return None


def detect_priority(message: str) -> Priority:
    """HIGH wins over LOW when both kinds of keyword appear."""
    lowered = (message or "").lower()
    if any(keyword in lowered for keyword in HIGH_PRIORITY_KEYWORDS):
        return Priority.HIGH
    if any(keyword in lowered for keyword in LOW_PRIORITY_KEYWORDS):
        return Priority.LOW
    return Priority.NORMAL


def match_assignee_request(message: str, members: Sequence[ChatMember], now: datetime) -> Optional[TaskMatch]:
    """"민규에게 보고서 작성 해줘" -> assignee 민규, title 보고서 작성."""
    found = _ASSIGN_PATTERN.search(message.strip())
    if not found:
        return None
    title = found.group("title").strip()
    raw_name = found.group("name").strip()
    if not title or not raw_name:
        return None
    ids, _ = resolve_names([raw_name], members)
    return TaskMatch(title=title, assignee_names=[raw_name], assignee_ids=ids)


def match_deadline(message: str, members: Sequence[ChatMember], now: datetime) -> Optional[TaskMatch]:
    """"금요일까지 보고서 제출" -> due Friday, title 보고서."""
    found = _DEADLINE_PATTERN.search(message.strip())
    if not found:
        return None
    title = found.group("title").strip()
    if not title:
        return None
    return TaskMatch(title=title, due_date=parse_date_hint(found.group("when").strip(), now))


def match_label(message: str, members: Sequence[ChatMember], now: datetime) -> Optional[TaskMatch]:
    """"할 일: 디자인 시안 3개 만들기" / "TODO: 최종 검토"."""
    found = _LABEL_PATTERN.search(message)
    if not found:
        return None
    title = found.group("title").strip()
    return TaskMatch(title=title) if title else None


def match_general_request(message: str, members: Sequence[ChatMember], now: datetime) -> Optional[TaskMatch]:
    found = _GENERAL_PATTERN.search(message.strip())
    if not found:
        return None
    title = found.group("title").strip()
    return TaskMatch(title=title) if title else None


TASK_RULES: Tuple[TaskRule, ...] = (
    match_assignee_request,
    match_deadline,
    match_label,
    match_general_request,
)


__all__ = [
    "HIGH_PRIORITY_KEYWORDS",
    "LOW_PRIORITY_KEYWORDS",
    "TASK_RULES",
    "TaskMatch",
    "detect_priority",
    "match_assignee_request",
    "match_deadline",
    "match_general_request",
    "match_label",
    "match_task",
    "parse",
]
