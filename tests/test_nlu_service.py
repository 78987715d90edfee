import json

from chat_actions.learning_logger import LearningLogger
from chat_actions.nlu_service import ActionExtractionService
from chat_actions.parsers.follow_up import SUPPORTED_REQUESTS_HINT
from chat_actions.parsers.types import ActionType
from chat_actions.text_utils import message_fingerprint


def _service(now, tmp_path=None, **kwargs):
    learning_logger = None
    if tmp_path is not None:
        learning_logger = LearningLogger(
            parse_log_path=tmp_path / "parses.jsonl",
            review_log_path=tmp_path / "pending.jsonl",
        )
    return ActionExtractionService(lambda: now, learning_logger=learning_logger, **kwargs)


def test_service_uses_injected_clock(members, now):
    result = _service(now).parse("내일 3시에 팀 회의", members)
    assert result.actions[0].data.start_at.date().isoformat() == "2025-01-16"


def test_service_logs_parse_record(members, now, tmp_path):
    service = _service(now, tmp_path)
    service.parse("금요일 3시에 팀 회의", members, project_id="proj-1")

    lines = (tmp_path / "parses.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["has_action"] is True
    assert record["action_types"] == ["event"]
    assert record["message_hash"] == message_fingerprint("금요일 3시에 팀 회의")
    assert record["reference_time"] == now.isoformat()
    assert record["project_id"] == "proj-1"
    assert record["member_count"] == 3
    assert record["actions"][0]["data"]["start_at"] == "2025-01-17T15:00:00+09:00"
    # Event confidence sits exactly on the default threshold.
    assert not (tmp_path / "pending.jsonl").exists()


def test_low_confidence_action_is_queued_for_review(members, now, tmp_path):
    service = _service(now, tmp_path)
    result = service.parse("할 일: 디자인 시안 만들기", members)
    assert service.review_candidates(result) == result.actions

    lines = (tmp_path / "pending.jsonl").read_text(encoding="utf-8").splitlines()
    review = json.loads(lines[0])
    assert review["action_type"] == "task"
    assert review["reason"] == "low_confidence"
    assert review["confidence"] == 0.7


def test_review_threshold_is_configurable(members, now):
    service = _service(now, review_threshold=0.9)
    result = service.parse("민규에게 보고서 작성 해줘", members)
    assert service.needs_review(result.first(ActionType.TASK)) is True


def test_follow_up_hint_is_logged_when_nothing_matched(members, now, tmp_path):
    service = _service(now, tmp_path)
    result = service.parse("누가 참석해?", members)
    assert result.has_action is False
    assert service.follow_up_hint("누가 참석해?", members) == SUPPORTED_REQUESTS_HINT

    record = json.loads((tmp_path / "parses.jsonl").read_text(encoding="utf-8").splitlines()[0])
    assert record["follow_up_hint"] == SUPPORTED_REQUESTS_HINT
    assert record["reply_message"] == ""


def test_disabled_logger_writes_nothing(members, now, tmp_path):
    learning_logger = LearningLogger(
        parse_log_path=tmp_path / "parses.jsonl",
        review_log_path=tmp_path / "pending.jsonl",
        enabled=False,
    )
    service = ActionExtractionService(lambda: now, learning_logger=learning_logger)
    service.parse("할 일: 디자인 시안 만들기", members)
    assert not (tmp_path / "parses.jsonl").exists()
    assert not (tmp_path / "pending.jsonl").exists()
