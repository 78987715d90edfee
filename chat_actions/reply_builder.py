"""Human-readable Korean summaries for parsed actions."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Dict, List, Sequence

from chat_actions.parsers.types import ActionType, EventData, LocationData, ParsedAction, Priority, TaskData


def build_reply_message(actions: Sequence[ParsedAction]) -> str:
    """One line per action, newline-joined; empty when there is nothing to say."""

    lines: List[str] = []
    for action in actions:
        formatter = _FORMATTERS.get(action.type)
        if formatter is not None:
            lines.append(formatter(action.data))
    return "\n".join(lines)


def format_task(data: TaskData) -> str:
    line = f'할 일을 생성합니다: "{data.title}"'
    if data.assignee_names:
        line += f" (담당: {', '.join(data.assignee_names)})"
    if data.due_date is not None:
        line += f" · 기한: {format_month_day(data.due_date)}"
    if data.priority is not Priority.NORMAL:
        line += f" [{data.priority.value}]"
    return line


def format_event(data: EventData) -> str:
    line = f'일정을 생성합니다: "{data.title}" · {format_event_time(data.start_at)}'
    if data.location:
        line += f" 📍 {data.location}"
    if data.attendee_ids:
        line += f" ({len(data.attendee_ids)}명 참석)"
    return line


def format_location(data: LocationData) -> str:
    return f'장소를 공유합니다: "{data.title}"'


def format_month_day(value: date) -> str:
    return f"{value.month}/{value.day}"


def format_event_time(value: datetime) -> str:
    """"1월 17일 오후 3:00"; midnight reads 오전 12:00 and noon 오후 12:00."""

    period = "오후" if value.hour >= 12 else "오전"
    hour = value.hour % 12 or 12
    return f"{value.month}월 {value.day}일 {period} {hour}:{value.minute:02d}"


_FORMATTERS: Dict[ActionType, Callable[..., str]] = {
    ActionType.TASK: format_task,
    ActionType.EVENT: format_event,
    ActionType.LOCATION: format_location,
}


__all__ = [
    "build_reply_message",
    "format_event",
    "format_event_time",
    "format_location",
    "format_month_day",
    "format_task",
]
