import json

from chat_actions.command_parser import parse_message
from chat_actions.parser_payloads import serialize_action, serialize_result


def test_serialize_event_result(members, now):
    result = parse_message("민규님 2월 16일 강남역 9번출구에서 3시에 회의, 급하게 부탁", members, now=now)
    payload = serialize_result(result)

    assert payload["has_action"] is True
    assert payload["reply_message"] == result.reply_message
    action = payload["actions"][0]
    assert action["type"] == "event"
    assert action["confidence"] == 0.75
    assert action["data"]["start_at"] == "2025-02-16T15:00:00+09:00"
    assert action["data"]["end_at"] == "2025-02-16T16:00:00+09:00"
    assert action["data"]["kind"] == "MEETING"
    assert action["data"]["location"] == "강남역 9번출구"
    assert action["data"]["attendee_ids"] == ["u-001"]
    json.dumps(payload, ensure_ascii=False)


def test_serialize_task_due_date(members, now):
    result = parse_message("금요일까지 보고서 제출", members, now=now)
    data = serialize_action(result.actions[0])["data"]
    assert data["due_date"] == "2025-01-17"
    assert data["priority"] == "NORMAL"
    assert data["assignee_names"] == []


def test_serialize_empty_result(members, now):
    assert serialize_result(parse_message("네", members, now=now)) == {
        "has_action": False,
        "reply_message": "",
        "actions": [],
    }
