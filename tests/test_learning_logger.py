import json

from chat_actions.learning_logger import LearningLogger, ParseRecord, ReviewItem


def _record(message: str = "할 일: 보고서") -> ParseRecord:
    return ParseRecord.new(
        message=message,
        message_hash="abc",
        reference_time="2025-01-15T09:30:00+09:00",
        has_action=True,
        action_types=["task"],
        actions=[{"type": "task", "data": {"title": message, "due_date": "2025-01-17"}}],
        reply_message=f'할 일을 생성합니다: "{message}"',
        latency_ms=1,
    )


def test_learning_logger_writes_jsonl_records(tmp_path):
    parse_path = tmp_path / "parses.jsonl"
    review_path = tmp_path / "pending.jsonl"
    logger = LearningLogger(parse_log_path=parse_path, review_log_path=review_path)

    logger.log_parse(_record())
    logger.log_review_item(
        ReviewItem.new(
            message="할 일: 보고서",
            message_hash="abc",
            action_type="task",
            confidence=0.7,
            reason="low_confidence",
        )
    )

    parsed = json.loads(parse_path.read_text(encoding="utf-8").strip())
    assert parsed["message"] == "할 일: 보고서"
    assert parsed["action_types"] == ["task"]
    assert parsed["timestamp"]

    review = json.loads(review_path.read_text(encoding="utf-8").strip())
    assert review["reason"] == "low_confidence"
    assert review["action"] == {}


def test_contact_details_are_redacted(tmp_path):
    parse_path = tmp_path / "parses.jsonl"
    logger = LearningLogger(parse_log_path=parse_path, review_log_path=tmp_path / "pending.jsonl")

    logger.log_parse(_record("할 일: hong@example.com 으로 010-1234-5678 번호 공유"))

    parsed = json.loads(parse_path.read_text(encoding="utf-8").strip())
    assert "hong@example.com" not in parsed["message"]
    assert "[REDACTED_EMAIL]" in parsed["message"]
    assert "[REDACTED_PHONE]" in parsed["message"]
    assert "[REDACTED_EMAIL]" in parsed["actions"][0]["data"]["title"]
    assert parsed["actions"][0]["data"]["due_date"] == "2025-01-17"
    assert parsed["reference_time"] == "2025-01-15T09:30:00+09:00"


def test_redaction_can_be_disabled(tmp_path):
    parse_path = tmp_path / "parses.jsonl"
    logger = LearningLogger(parse_log_path=parse_path, review_log_path=tmp_path / "pending.jsonl", redact=False)
    logger.log_parse(_record("할 일: hong@example.com"))
    assert "hong@example.com" in parse_path.read_text(encoding="utf-8")


def test_rotation_keeps_numbered_backups(tmp_path):
    parse_path = tmp_path / "parses.jsonl"
    logger = LearningLogger(
        parse_log_path=parse_path,
        review_log_path=tmp_path / "pending.jsonl",
        max_bytes=10,
        backup_count=2,
    )
    for _ in range(3):
        logger.log_parse(_record())

    assert parse_path.exists()
    assert (tmp_path / "parses.jsonl.1").exists()
    assert (tmp_path / "parses.jsonl.2").exists()


def test_rotation_without_backups_truncates(tmp_path):
    parse_path = tmp_path / "parses.jsonl"
    logger = LearningLogger(
        parse_log_path=parse_path,
        review_log_path=tmp_path / "pending.jsonl",
        max_bytes=10,
    )
    logger.log_parse(_record())
    logger.log_parse(_record())

    assert len(parse_path.read_text(encoding="utf-8").splitlines()) == 1
    assert not (tmp_path / "parses.jsonl.1").exists()
