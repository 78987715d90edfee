from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from chat_actions.parsers.types import ChatMember

KST = timezone(timedelta(hours=9))


@pytest.fixture
def now() -> datetime:
    # Wednesday morning in Seoul.
    return datetime(2025, 1, 15, 9, 30, tzinfo=KST)


@pytest.fixture
def members() -> list[ChatMember]:
    return [
        ChatMember(id="u-001", name="박민규"),
        ChatMember(id="u-002", name="이송희"),
        ChatMember(id="u-003", name="김요한"),
    ]
