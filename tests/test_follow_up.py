from chat_actions.parsers.follow_up import SUPPORTED_REQUESTS_HINT, detect_follow_up


def test_invite_request_names_resolved_members(members):
    hint = detect_follow_up("민규, 송희 초대 부탁", members)
    assert hint is not None
    assert hint.startswith("민규, 송희님을 초대하거나")
    assert '"금요일 3시에 팀 미팅, 민규, 송희 참석"' in hint


def test_question_lists_supported_requests(members):
    assert detect_follow_up("누가 참석해?", members) == SUPPORTED_REQUESTS_HINT


def test_plain_request_has_no_hint(members):
    assert detect_follow_up("강남역 카페에서 만나자", members) is None
    assert detect_follow_up("", members) is None
