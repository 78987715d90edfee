"""Deterministic extraction of task, event and location proposals from Korean chat."""

from chat_actions.command_parser import parse_message
from chat_actions.parsers.types import (
    ActionType,
    ChatMember,
    EventData,
    EventKind,
    LocationData,
    ParsedAction,
    ParseResult,
    Priority,
    TaskData,
)

__all__ = [
    "ActionType",
    "ChatMember",
    "EventData",
    "EventKind",
    "LocationData",
    "ParseResult",
    "ParsedAction",
    "Priority",
    "TaskData",
    "parse_message",
]
