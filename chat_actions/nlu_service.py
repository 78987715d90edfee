"""Service wrapper that runs the extraction engine with a clock and logging.

``parse_message`` is a pure function of its inputs. This wrapper is the one
place that reads the wall clock, times each call and, when a
``LearningLogger`` is attached, records the outcome and queues weak proposals
for review.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from chat_actions.command_parser import parse_message
from chat_actions.learning_logger import LearningLogger, ParseRecord, ReviewItem
from chat_actions.parser_payloads import serialize_action
from chat_actions.parsers.follow_up import detect_follow_up
from chat_actions.parsers.types import ChatMember, ParsedAction, ParseResult
from chat_actions.text_utils import message_fingerprint

logger = logging.getLogger(__name__)

DEFAULT_REVIEW_THRESHOLD = 0.75

Clock = Callable[[], datetime]


class ActionExtractionService:
    """Entry point used by the CLI and the HTTP API."""

    def __init__(
        self,
        clock: Clock,
        *,
        learning_logger: Optional[LearningLogger] = None,
        review_threshold: float = DEFAULT_REVIEW_THRESHOLD,
    ) -> None:
        self._clock = clock
        self._learning_logger = learning_logger
        self._review_threshold = review_threshold

    @property
    def review_threshold(self) -> float:
        return self._review_threshold

    # WHAT: parse one message against "now" and persist what happened.
    # HOW: read the clock once, call the engine, then hand the result and the elapsed time to the logger.
    def parse(
        self,
        message: str,
        members: Sequence[ChatMember],
        project_id: Optional[str] = None,
    ) -> ParseResult:
        now = self._clock()
        started = time.perf_counter()
        result = parse_message(message or "", members, project_id, now=now)
        latency_ms = int((time.perf_counter() - started) * 1000)
        logger.debug(
            "Parsed message into %d action(s) in %d ms.", len(result.actions), latency_ms
        )
        self._record(message or "", members, project_id, now, result, latency_ms)
        return result

    def follow_up_hint(self, message: str, members: Sequence[ChatMember]) -> Optional[str]:
        """Guidance for invite requests or questions that yielded no action."""
        return detect_follow_up(message or "", members)

    def needs_review(self, action: ParsedAction) -> bool:
        return action.confidence < self._review_threshold

    def review_candidates(self, result: ParseResult) -> List[ParsedAction]:
        return [action for action in result.actions if self.needs_review(action)]

    def _record(
        self,
        message: str,
        members: Sequence[ChatMember],
        project_id: Optional[str],
        now: datetime,
        result: ParseResult,
        latency_ms: int,
    ) -> None:
        if self._learning_logger is None or not self._learning_logger.enabled:
            return

        message_hash = message_fingerprint(message)
        hint = None if result.has_action else self.follow_up_hint(message, members)
        self._learning_logger.log_parse(
            ParseRecord.new(
                message=message,
                message_hash=message_hash,
                reference_time=now.isoformat(),
                has_action=result.has_action,
                action_types=[action.type.value for action in result.actions],
                actions=[serialize_action(action) for action in result.actions],
                reply_message=result.reply_message,
                follow_up_hint=hint,
                project_id=project_id,
                member_count=len(members),
                latency_ms=latency_ms,
            )
        )
        for action in self.review_candidates(result):
            self._learning_logger.log_review_item(
                ReviewItem.new(
                    message=message,
                    message_hash=message_hash,
                    action_type=action.type.value,
                    confidence=action.confidence,
                    reason="low_confidence",
                    action=serialize_action(action),
                    project_id=project_id,
                )
            )


__all__ = ["ActionExtractionService", "Clock", "DEFAULT_REVIEW_THRESHOLD"]
