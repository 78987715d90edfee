"""JSONL records of parsed chat messages and low-confidence review items.

Every call through ``ActionExtractionService`` can be persisted as a
``ParseRecord`` so extraction quality can be replayed later; proposals whose
confidence falls under the review threshold are additionally queued as
``ReviewItem`` rows. Chat text is free-form, so string fields are scrubbed of
emails, phone numbers and similar identifiers before they reach disk.
"""

from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, IO, Iterable, List, Optional, Pattern

_KNOWN_PATTERNS: Dict[str, Pattern[str]] = {
    "email": re.compile(r"\b[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}\b", re.IGNORECASE),
    "phone": re.compile(r"(?:\+?\d[\d\s\-().]{6,}\d)"),
    "credit_card": re.compile(r"\b(?:\d[ -]*){13,19}\b"),
    "resident_id": re.compile(r"\b\d{6}-[1-4]\d{6}\b"),
    "url": re.compile(r"https?://[^\s]+", re.IGNORECASE),
}
# Longer numeric identifiers first so a card number is not half-eaten as a phone.
_PATTERN_PRIORITY: Dict[str, int] = {
    "credit_card": 0,
    "resident_id": 1,
    "email": 2,
    "phone": 3,
    "url": 4,
}
_REDACT_FIELDS = {"message", "reply_message", "follow_up_hint", "reason", "actions", "action"}
# ISO timestamps inside action payloads look like phone numbers to the scrubber.
_PRESERVED_KEYS = {"start_at", "end_at", "due_date"}


def _utc_now() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


@dataclass
class ParseRecord:
    """One ``parse`` call: the input hash, outcome and timing."""

    timestamp: str
    message: str
    message_hash: str
    reference_time: str
    has_action: bool
    action_types: List[str] = field(default_factory=list)
    actions: List[Dict[str, Any]] = field(default_factory=list)
    reply_message: str = ""
    follow_up_hint: Optional[str] = None
    project_id: Optional[str] = None
    member_count: int = 0
    latency_ms: Optional[int] = None

    @classmethod
    def new(
        cls,
        *,
        message: str,
        message_hash: str,
        reference_time: str,
        has_action: bool,
        action_types: Iterable[str] = (),
        actions: Iterable[Dict[str, Any]] = (),
        reply_message: str = "",
        follow_up_hint: Optional[str] = None,
        project_id: Optional[str] = None,
        member_count: int = 0,
        latency_ms: Optional[int] = None,
    ) -> "ParseRecord":
        return cls(
            timestamp=_utc_now(),
            message=message,
            message_hash=message_hash,
            reference_time=reference_time,
            has_action=has_action,
            action_types=list(action_types),
            actions=list(actions),
            reply_message=reply_message,
            follow_up_hint=follow_up_hint,
            project_id=project_id,
            member_count=member_count,
            latency_ms=latency_ms,
        )


@dataclass
class ReviewItem:
    """A single proposal flagged for a human to confirm or correct."""

    timestamp: str
    message: str
    message_hash: str
    action_type: str
    confidence: float
    reason: str
    action: Dict[str, Any] = field(default_factory=dict)
    project_id: Optional[str] = None

    @classmethod
    def new(
        cls,
        *,
        message: str,
        message_hash: str,
        action_type: str,
        confidence: float,
        reason: str,
        action: Optional[Dict[str, Any]] = None,
        project_id: Optional[str] = None,
    ) -> "ReviewItem":
        return cls(
            timestamp=_utc_now(),
            message=message,
            message_hash=message_hash,
            action_type=action_type,
            confidence=confidence,
            reason=reason,
            action=action or {},
            project_id=project_id,
        )


class LearningLogger:
    """WHAT: append-only JSONL writer for parse records and review items.

    WHY: extraction rules are tuned from real traffic, which needs a replayable
    history that never stores raw contact details and never grows unbounded.
    HOW: each record is redacted, encoded once, checked against ``max_bytes``
    (rotating into ``.1`` .. ``.N`` backups) and appended as one line.
    """

    def __init__(
        self,
        *,
        parse_log_path: Path,
        review_log_path: Path,
        enabled: bool = True,
        redact: bool = True,
        patterns: Iterable[str] | None = None,
        max_bytes: int = 0,
        backup_count: int = 0,
    ) -> None:
        self._parse_log_path = parse_log_path
        self._review_log_path = review_log_path
        self._enabled = enabled
        self._redact = redact
        self._max_bytes = max_bytes
        self._backup_count = backup_count
        selected = tuple(patterns) if patterns else tuple(_KNOWN_PATTERNS)
        self._redaction_patterns = sorted(
            ((key, _KNOWN_PATTERNS[key]) for key in selected if key in _KNOWN_PATTERNS),
            key=lambda item: _PATTERN_PRIORITY.get(item[0], 10),
        )

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def parse_log_path(self) -> Path:
        return self._parse_log_path

    @property
    def review_log_path(self) -> Path:
        return self._review_log_path

    def log_parse(self, record: ParseRecord) -> None:
        if not self._enabled:
            return
        self._append_json_line(self._parse_log_path, asdict(record))

    def log_review_item(self, review: ReviewItem) -> None:
        if not self._enabled:
            return
        self._append_json_line(self._review_log_path, asdict(review))

    def _append_json_line(self, path: Path, payload: Dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(self._prepare_payload(payload), ensure_ascii=False)
        self._rotate_if_needed(path, len(line.encode("utf-8")) + 1)
        with self._open_file(path) as handle:
            handle.write(line)
            handle.write("\n")

    @staticmethod
    def _open_file(path: Path) -> IO[str]:
        return path.open("a", encoding="utf-8")

    def _prepare_payload(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Scrub the free-text fields; ids, hashes and timings pass through."""
        if not self._redact or not self._redaction_patterns:
            return payload
        return {
            key: self._scrub_value(value) if key in _REDACT_FIELDS else value
            for key, value in payload.items()
        }

    def _scrub_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                key: item if key in _PRESERVED_KEYS else self._scrub_value(item)
                for key, item in value.items()
            }
        if isinstance(value, (list, tuple)):
            return [self._scrub_value(item) for item in value]
        if isinstance(value, str):
            return self._scrub_string(value)
        return value

    def _scrub_string(self, value: str) -> str:
        sanitized = value
        for key, pattern in self._redaction_patterns:
            sanitized = pattern.sub(f"[REDACTED_{key.upper()}]", sanitized)
        return sanitized

    def _rotate_if_needed(self, path: Path, incoming_bytes: int) -> None:
        """Keep ``path`` under ``max_bytes``; without backups the file is truncated."""
        if self._max_bytes <= 0 or not path.exists():
            return
        if path.stat().st_size + incoming_bytes <= self._max_bytes:
            return

        if self._backup_count <= 0:
            path.unlink()
            return

        for index in range(self._backup_count - 1, 0, -1):
            older = Path(f"{path}.{index}")
            if older.exists():
                older.replace(Path(f"{path}.{index + 1}"))
        path.replace(Path(f"{path}.1"))


__all__ = ["LearningLogger", "ParseRecord", "ReviewItem"]
