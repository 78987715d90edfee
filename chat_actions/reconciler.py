"""Cross-action reconciliation and event title cleanup.

Matchers run independently, so a message such as "강남역 카페에서 만나요. 내일
3시에 팀 회의" yields both an event and a location proposal. The location is
the venue of that event, so it is folded into the event and dropped from the
list. Event titles are cleaned here rather than in the event matcher because
name residue is only safe to remove once every matcher has seen the raw text.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import List, Sequence

from chat_actions.parser_utils import first_keyword, name_variants
from chat_actions.parsers.types import ActionType, ChatMember, EventData, LocationData, ParsedAction

TITLE_FALLBACK_KEYWORDS = ("회의", "미팅", "모임", "스크럼", "스탠드업", "킥오프", "브리핑", "워크샵", "약속", "일정")

_SENTENCE_SPLIT = re.compile(r"[.。]\s*")
_INCLUSION_PATTERN = re.compile(r"포함|참석|참여|함께|같이|불러|초대")
_REQUEST_SUFFIX = re.compile(
    r"\s*(?:부탁합니다|부탁해요|부탁해|부탁드립니다|부탁|해주세요|해줘|잡아주세요|잡아줘"
    r"|포함해서요|포함해서|포함해주세요|포함해줘|참석시켜주세요|참석시켜줘)[\s.!~]*$"
)
_TRAILING_CONNECTIVE = re.compile(r"(?:^|\s+)(?:과|와|하고|이랑|랑|도)\s*$")
_EDGE_PUNCTUATION = re.compile(r"^[\s,，.。]+|[\s,，.。]+$")
_CLAUSE_SPLIT = re.compile(r"\s*[,，]\s*")
_FIRST_CLAUSE = re.compile(r"[.。,，]")


def reconcile_actions(actions: Sequence[ParsedAction], members: Sequence[ChatMember]) -> List[ParsedAction]:
    """Fold a co-occurring location into the event and clean event titles.

    The returned list never holds an event and a location together. Order of
    the surviving actions is preserved.
    """

    event = next((action for action in actions if action.type is ActionType.EVENT), None)
    location = next((action for action in actions if action.type is ActionType.LOCATION), None)

    reconciled: List[ParsedAction] = []
    for action in actions:
        if action.type is ActionType.LOCATION and event is not None:
            continue
        if action.type is ActionType.EVENT:
            action = _reconcile_event(action, location, members)
        reconciled.append(action)
    return reconciled


def _reconcile_event(
    action: ParsedAction,
    location: ParsedAction | None,
    members: Sequence[ChatMember],
) -> ParsedAction:
    data: EventData = action.data  # type: ignore[assignment]
    changes = {"title": clean_event_title(data.title, members)}
    if location is not None:
        place: LocationData = location.data  # type: ignore[assignment]
        changes["location"] = place.address or place.title
    return replace(action, data=replace(data, **changes))


def clean_event_title(raw_title: str, members: Sequence[ChatMember]) -> str:
    """WHAT: reduce "내부 미팅 부탁합니다. 민규님, 송희님 포함해서요" to "내부 미팅".

    HOW: keep the first sentence when later ones only list attendees, delete
    every member name variant with its trailing separator, peel request
    suffixes, connective particles and urgency clauses off the end, then trim
    punctuation. An empty result falls back to the first meeting keyword in
    the raw title, then to its first clause.
    """

    title = raw_title or ""
    sentences = _SENTENCE_SPLIT.split(title)
    if len(sentences) > 1 and _INCLUSION_PATTERN.search(" ".join(sentences[1:])):
        title = sentences[0]

    for member in members:
        for variant in name_variants(member.name):
            if len(variant) < 2:
                continue
            title = re.sub(re.escape(variant) + r"(?:과|와|하고|이랑|랑|에게|한테)?[,，\s]*", "", title)

    previous = None
    while previous != title:
        previous = title
        title = _REQUEST_SUFFIX.sub("", title)
        title = _TRAILING_CONNECTIVE.sub("", title)
        title = _drop_trailing_clause(title)
    title = _EDGE_PUNCTUATION.sub("", title).strip()

    if not title:
        title = first_keyword(raw_title or "", TITLE_FALLBACK_KEYWORDS) or ""
    if not title:
        title = _FIRST_CLAUSE.split(raw_title or "", maxsplit=1)[0].strip()
    return title


def _drop_trailing_clause(title: str) -> str:
    # "회의, 급하게" -> "회의": a comma clause without an event word is residue.
    clauses = _CLAUSE_SPLIT.split(title.strip())
    if len(clauses) < 2:
        return title
    last = clauses[-1]
    head = ", ".join(clauses[:-1])
    if first_keyword(head, TITLE_FALLBACK_KEYWORDS) and not first_keyword(last, TITLE_FALLBACK_KEYWORDS):
        return head
    return title


__all__ = ["TITLE_FALLBACK_KEYWORDS", "clean_event_title", "reconcile_actions"]
