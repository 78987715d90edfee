"""Helpers for turning parse results into JSON-ready payloads for logs and HTTP."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List

from chat_actions.parsers.types import ParsedAction, ParseResult


def serialize_action(action: ParsedAction) -> Dict[str, Any]:
    """Flatten one action; dates become ISO strings and enums their values."""

    return {
        "type": action.type.value,
        "confidence": round(action.confidence, 4),
        "data": _to_json_value(asdict(action.data)),
    }


def serialize_result(result: ParseResult) -> Dict[str, Any]:
    actions: List[Dict[str, Any]] = [serialize_action(action) for action in result.actions]
    return {
        "has_action": result.has_action,
        "reply_message": result.reply_message,
        "actions": actions,
    }


def _to_json_value(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json_value(item) for item in value]
    if isinstance(value, Enum):
        return value.value
    # datetime is a date subclass and keeps its offset in isoformat().
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


__all__ = ["serialize_action", "serialize_result"]
