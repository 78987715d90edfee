"""Command parser that extracts task, event and location proposals from chat text."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from chat_actions.parsers import calendar, guards, location, todo
from chat_actions.parsers.types import ChatMember, ParsedAction, ParseResult
from chat_actions.reconciler import reconcile_actions
from chat_actions.reply_builder import build_reply_message

logger = logging.getLogger(__name__)


def parse_message(
    content: str,
    members: Sequence[ChatMember],
    project_id: Optional[str] = None,
    *,
    now: datetime,
) -> ParseResult:
    """Decide whether one chat message carries actionable requests.

    WHAT: reject chatter with the lexical guards, then let the task, event and
    location matchers each propose at most one action.
    WHY: the matchers are independent so a single message can yield a task
    and an event; the reconciler removes the overlap between event and
    location afterwards.
    HOW: ``now`` is the only clock the engine sees, which keeps every call
    deterministic for a given input.
    """
    if not content:
        return ParseResult.empty()

    reason = guards.skip_reason(content)
    if reason:
        logger.debug("Skipping message: %s", reason)
        return ParseResult.empty()

    candidates: List[ParsedAction] = []
    for proposal in (
        todo.parse(content, members, now, project_id),
        calendar.parse(content, members, now, project_id),
        location.parse(content),
    ):
        if proposal is not None:
            candidates.append(proposal)

    actions = reconcile_actions(candidates, members)
    if not actions:
        return ParseResult.empty()

    return ParseResult(
        has_action=True,
        reply_message=build_reply_message(actions),
        actions=actions,
    )


__all__ = ["parse_message", "ParseResult"]
