"""Assemble the extraction service and run the interactive CLI loop."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from zoneinfo import ZoneInfo

from chat_actions.learning_logger import LearningLogger
from chat_actions.nlu_service import ActionExtractionService, Clock
from chat_actions.parsers.types import ChatMember
from chat_actions.roster import load_roster
from service.config import (
    get_log_backup_count,
    get_log_max_bytes,
    get_log_redaction_patterns,
    get_parse_log_path,
    get_review_confidence_threshold,
    get_review_queue_path,
    get_roster_path,
    get_timezone_name,
    is_log_redaction_enabled,
    is_logging_enabled,
)


def build_clock(timezone_name: Optional[str] = None) -> Clock:
    """Wall clock in the chat's local zone; KST unless configured otherwise."""
    zone = ZoneInfo(timezone_name or get_timezone_name())

    def _now() -> datetime:
        return datetime.now(tz=zone)

    return _now


# -- Service construction ------------------------------------------------------
def build_service(clock: Optional[Clock] = None) -> ActionExtractionService:
    """Wire the engine for the CLI and the web API.

    WHAT: attach the configured clock, JSONL logger and review threshold.
    WHY: both entry points must share identical wiring so a message parses
    the same way wherever it was typed.
    HOW: read every setting through ``service.config`` helpers.
    """
    learning_logger = LearningLogger(
        parse_log_path=get_parse_log_path(),
        review_log_path=get_review_queue_path(),
        enabled=is_logging_enabled(),
        redact=is_log_redaction_enabled(),
        patterns=get_log_redaction_patterns(),
        max_bytes=get_log_max_bytes(),
        backup_count=get_log_backup_count(),
    )
    return ActionExtractionService(
        clock or build_clock(),
        learning_logger=learning_logger,
        review_threshold=get_review_confidence_threshold(),
    )


def render_reply(service: ActionExtractionService, message: str, members: List[ChatMember]) -> Optional[str]:
    """Reply line for a message, the follow-up hint, or ``None`` for chatter."""
    result = service.parse(message, members)
    if result.has_action:
        return result.reply_message
    return service.follow_up_hint(message, members)


# -- Interactive CLI loop ------------------------------------------------------
def main() -> None:
    """Read chat lines from stdin and echo what would be proposed."""
    service = build_service()
    members = load_roster(get_roster_path())
    print(f"Loaded {len(members)} member(s). Type 'quit' or 'exit' to stop.")

    while True:
        try:
            message = input("Chat: ")
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            break

        if message.strip().lower() in {"quit", "exit"}:
            print("Goodbye!")
            break

        reply = render_reply(service, message, members)
        print(reply if reply else "(제안할 작업이 없습니다)")
        print()


if __name__ == "__main__":
    main()
