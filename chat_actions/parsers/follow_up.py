"""Hints for messages that lean on earlier conversation context."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from chat_actions.parser_utils import resolve_names
from chat_actions.parsers.types import ChatMember

_INVITE_PATTERN = re.compile(
    r"(?P<names>.+?)(?:초대\s*(?:부탁|해줘|해주세요)|추가\s*(?:해줘|해주세요|부탁)|참석\s*(?:시켜|부탁))"
)
_QUESTION_PATTERN = re.compile(r"(?:누가|언제|어디서|몇\s*시|어떻게)\s*(?:참석|올|가|할|하|만나)")
_NAME_TOKEN_SEPARATORS = re.compile(r"[,，]\s*|\s+(?:과|와|하고|이랑|랑)\s+|\s+")

SUPPORTED_REQUESTS_HINT = (
    "질문에 답하는 기능은 아직 지원하지 않습니다. 지금은 다음 요청을 처리할 수 있어요:\n\n"
    '• 할 일 생성: "민규에게 보고서 작성 부탁"\n'
    '• 일정 생성: "금요일 3시에 팀 미팅"\n'
    '• 장소 공유: "강남역 카페에서 만나자"'
)


def detect_follow_up(message: str, members: Sequence[ChatMember]) -> Optional[str]:
    """Return guidance text for invite/add requests and who/when questions.

    Such messages refer to an event from an earlier message, which a single
    message parse cannot see.
    """
    if not message:
        return None

    invite = _INVITE_PATTERN.search(message)
    if invite:
        tokens = [token for token in _NAME_TOKEN_SEPARATORS.split(invite.group("names").strip()) if token]
        _, matched = resolve_names(tokens, members)
        name_list = ", ".join(matched or tokens)
        return (
            f"{name_list}님을 초대하거나 추가하려는 것 같습니다.\n\n"
            "이전 대화의 내용은 참고할 수 없어요. 필요한 정보를 한 메시지에 모두 적어주세요.\n\n"
            "예시:\n"
            f'• "금요일 3시에 팀 미팅, {name_list} 참석"\n'
            f'• "{name_list}에게 보고서 작성 부탁"'
        )

    if _QUESTION_PATTERN.search(message):
        return SUPPORTED_REQUESTS_HINT
    return None


__all__ = ["SUPPORTED_REQUESTS_HINT", "detect_follow_up"]
