from pathlib import Path

from service import config


def test_defaults_without_environment():
    env = {}
    assert config.get_timezone_name(env) == "Asia/Seoul"
    assert config.is_logging_enabled(env) is True
    assert config.is_log_redaction_enabled(env) is True
    assert config.get_parse_log_path(env) == Path("logs/parses.jsonl")
    assert config.get_review_queue_path(env) == Path("data_pipeline/review_queue/pending.jsonl")
    assert config.get_review_confidence_threshold(env) == 0.75
    assert config.get_roster_path(env) == Path("config/roster.yml")
    assert config.get_web_api_port(env) == 9000


def test_overrides_from_environment(tmp_path):
    env = {
        "CHAT_TIMEZONE": "UTC",
        "LOGGING_ENABLED": "off",
        "LOG_DIR": str(tmp_path),
        "LOG_REDACTION_PATTERNS": "Email, url ,",
        "LOG_MAX_BYTES": "2048",
        "LOG_BACKUP_COUNT": "3",
        "REVIEW_CONFIDENCE_THRESHOLD": "0.8",
        "WEB_API_HOST": "0.0.0.0",
        "WEB_API_PORT": "8080",
    }
    assert config.get_timezone_name(env) == "UTC"
    assert config.is_logging_enabled(env) is False
    assert config.get_parse_log_path(env) == tmp_path / "parses.jsonl"
    assert config.get_log_redaction_patterns(env) == ["email", "url"]
    assert config.get_log_max_bytes(env) == 2048
    assert config.get_log_backup_count(env) == 3
    assert config.get_review_confidence_threshold(env) == 0.8
    assert config.get_web_api_host(env) == "0.0.0.0"
    assert config.get_web_api_port(env) == 8080


def test_unparseable_values_fall_back_to_defaults():
    env = {
        "LOGGING_ENABLED": "maybe",
        "LOG_MAX_BYTES": "lots",
        "LOG_BACKUP_COUNT": "-4",
        "REVIEW_CONFIDENCE_THRESHOLD": "high",
        "WEB_API_PORT": "70000",
    }
    assert config.is_logging_enabled(env) is True
    assert config.get_log_max_bytes(env) == 1_000_000
    assert config.get_log_backup_count(env) == 0
    assert config.get_review_confidence_threshold(env) == 0.75
    assert config.get_web_api_port(env) == 9000


def test_threshold_is_clamped():
    assert config.get_review_confidence_threshold({"REVIEW_CONFIDENCE_THRESHOLD": "1.5"}) == 1.0


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("CHAT_TIMEZONE", "Asia/Tokyo")
    assert config.get_timezone_name() == "Asia/Tokyo"
