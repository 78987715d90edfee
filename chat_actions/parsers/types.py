"""Shared dataclasses for parser outputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Union


class ActionType(str, Enum):
    TASK = "task"
    EVENT = "event"
    LOCATION = "location"


class Priority(str, Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"


class EventKind(str, Enum):
    MEETING = "MEETING"
    TASK = "TASK"
    DEADLINE = "DEADLINE"
    DELIVERY = "DELIVERY"


@dataclass(frozen=True)
class ChatMember:
    """A roster entry eligible for name resolution."""

    id: str
    name: str


@dataclass(frozen=True)
class TaskData:
    title: str
    assignee_names: List[str] = field(default_factory=list)
    assignee_ids: List[str] = field(default_factory=list)
    due_date: Optional[date] = None
    priority: Priority = Priority.NORMAL
    project_id: Optional[str] = None


@dataclass(frozen=True)
class EventData:
    title: str
    start_at: datetime
    end_at: datetime
    location: Optional[str] = None
    location_url: Optional[str] = None
    attendee_ids: List[str] = field(default_factory=list)
    kind: EventKind = EventKind.MEETING
    project_id: Optional[str] = None


@dataclass(frozen=True)
class LocationData:
    title: str
    address: Optional[str] = None
    search_query: str = ""

    def __post_init__(self) -> None:
        if not self.search_query:
            object.__setattr__(self, "search_query", self.title)


ActionData = Union[TaskData, EventData, LocationData]


@dataclass(frozen=True)
class ParsedAction:
    """Tagged union of the three proposal kinds.

    Build instances through ``task``/``event``/``location`` so the ``type`` tag
    always agrees with the payload class.
    """

    type: ActionType
    confidence: float
    data: ActionData

    @classmethod
    def task(cls, data: TaskData, confidence: float) -> "ParsedAction":
        return cls(type=ActionType.TASK, confidence=_clamp(confidence), data=data)

    @classmethod
    def event(cls, data: EventData, confidence: float) -> "ParsedAction":
        return cls(type=ActionType.EVENT, confidence=_clamp(confidence), data=data)

    @classmethod
    def location(cls, data: LocationData, confidence: float) -> "ParsedAction":
        return cls(type=ActionType.LOCATION, confidence=_clamp(confidence), data=data)


@dataclass(frozen=True)
class ParseResult:
    has_action: bool
    reply_message: str = ""
    actions: List[ParsedAction] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "ParseResult":
        return cls(has_action=False, reply_message="", actions=[])

    def first(self, action_type: ActionType) -> Optional[ParsedAction]:
        for action in self.actions:
            if action.type is action_type:
                return action
        return None


def _clamp(value: float) -> float:
    return min(max(float(value), 0.0), 1.0)


__all__ = [
    "ActionData",
    "ActionType",
    "ChatMember",
    "EventData",
    "EventKind",
    "LocationData",
    "ParseResult",
    "ParsedAction",
    "Priority",
    "TaskData",
]
