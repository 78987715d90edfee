from datetime import date

import chat_actions.parsers.todo as todo_parser
from chat_actions.parsers.types import ActionType, Priority


def test_assignee_request_resolves_given_name(members, now):
    action = todo_parser.parse("민규에게 보고서 작성 해줘", members, now)
    assert action is not None
    assert action.type is ActionType.TASK
    assert action.confidence == todo_parser.ASSIGNED_CONFIDENCE
    assert action.data.title == "보고서 작성"
    assert action.data.assignee_names == ["민규"]
    assert action.data.assignee_ids == ["u-001"]
    assert action.data.priority is Priority.NORMAL
    assert action.data.due_date is None


def test_assignee_request_with_honorific_and_due_date(members, now):
    action = todo_parser.parse("송희님한테 내일까지 기획서 부탁드립니다", members, now)
    assert action is not None
    assert action.data.assignee_names == ["송희"]
    assert action.data.assignee_ids == ["u-002"]
    assert action.data.due_date == date(2025, 1, 16)


def test_unknown_assignee_keeps_raw_name(members, now):
    action = todo_parser.parse("철수한테 회의록 정리 부탁해", members, now)
    assert action is not None
    assert action.data.assignee_names == ["철수"]
    assert action.data.assignee_ids == []
    assert action.confidence == todo_parser.UNASSIGNED_CONFIDENCE


def test_deadline_phrase_sets_due_date(members, now):
    action = todo_parser.parse("금요일까지 보고서 제출", members, now)
    assert action is not None
    assert action.data.title == "보고서"
    assert action.data.due_date == date(2025, 1, 17)
    assert action.data.assignee_ids == []


def test_label_prefix(members, now):
    action = todo_parser.parse("할 일: 디자인 시안 3개 만들기", members, now)
    assert action is not None
    assert action.data.title == "디자인 시안 3개 만들기"
    assert action.data.due_date is None


def test_label_prefix_is_case_insensitive(members, now):
    action = todo_parser.parse("TODO: 최종 검토", members, now, project_id="proj-7")
    assert action is not None
    assert action.data.title == "최종 검토"
    assert action.data.project_id == "proj-7"


def test_general_request_falls_back_to_mentions(members, now):
    action = todo_parser.parse("요한님 발표 자료 만들어줘", members, now)
    assert action is not None
    assert action.data.assignee_ids == ["u-003"]
    assert action.confidence == todo_parser.ASSIGNED_CONFIDENCE


def test_detect_priority():
    assert todo_parser.detect_priority("급하게 처리해줘") is Priority.HIGH
    assert todo_parser.detect_priority("ASAP 부탁") is Priority.HIGH
    assert todo_parser.detect_priority("천천히 해줘") is Priority.LOW
    assert todo_parser.detect_priority("천천히 말고 급하게") is Priority.HIGH
    assert todo_parser.detect_priority("보고서 정리") is Priority.NORMAL


def test_chatter_is_not_a_task(members, now):
    assert todo_parser.parse("오늘 날씨 좋다", members, now) is None
    assert todo_parser.parse("", members, now) is None
