"""Early rejection rules for conversational text that is never a command."""

from __future__ import annotations

import re
from typing import Optional

MIN_MESSAGE_LENGTH = 4

_PAST_TENSE_ENDINGS = re.compile(
    r"(?:했어|했다|했네|했음|했어요|했습니다|갔어|갔다|왔어|왔다|봤어|봤다|만났어|만났다|줬어|줬다"
    r"|됐어|됐다|였어|이었어|끝났어|끝났다|완료했어|완료했다|했었어|마쳤어|마쳤다|마쳤습니다"
    r"|했거든|갔거든|왔거든|났어|났다)"
    r"(?:\s*[.!?~ㅎㅋ]*)$"
)
_REPORT_STARTERS = re.compile(
    r"^(?:어제|아까|그때|방금|조금\s*전|지난\s*번에|지난주에|저번에|예전에|그저께|엊그제)"
)
_GRATITUDE_MARKERS = re.compile(
    r"(?:고마워|고맙습니다|감사합니다|감사해|수고했어|수고하셨|잘\s*했어|잘\s*했다|잘했네"
    r"|덕분에|다행이다|다행이야|해줘서|해주셔서)"
)


def skip_reason(text: str) -> Optional[str]:
    """Return the name of the first guard that rejects ``text``, if any."""

    stripped = (text or "").strip()
    if len(stripped) < MIN_MESSAGE_LENGTH:
        return "too_short"
    if _PAST_TENSE_ENDINGS.search(stripped):
        return "past_tense"
    if _REPORT_STARTERS.search(stripped):
        return "report_starter"
    if _GRATITUDE_MARKERS.search(stripped):
        return "gratitude"
    return None


def should_skip(text: str) -> bool:
    return skip_reason(text) is not None


__all__ = ["MIN_MESSAGE_LENGTH", "should_skip", "skip_reason"]
