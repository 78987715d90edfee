"""Centralize defaults and environment lookups for the extraction service."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Mapping

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Default configuration values
# ---------------------------------------------------------------------------
_DEFAULT_TIMEZONE = "Asia/Seoul"
_DEFAULT_LOGGING_ENABLED: bool = True
_DEFAULT_LOG_REDACTION_ENABLED: bool = True
_DEFAULT_LOG_DIR = "logs"
_DEFAULT_REVIEW_QUEUE_DIR = "data_pipeline/review_queue"
_PARSE_LOG_FILENAME = "parses.jsonl"
_REVIEW_QUEUE_FILENAME = "pending.jsonl"
_DEFAULT_LOG_REDACTION_PATTERNS = "email,phone,credit_card,resident_id,url"
_DEFAULT_LOG_MAX_BYTES = 1_000_000
_DEFAULT_LOG_BACKUP_COUNT = 5
_DEFAULT_REVIEW_CONFIDENCE_THRESHOLD = 0.75
_DEFAULT_ROSTER_PATH = "config/roster.yml"
_DEFAULT_WEB_API_HOST = "127.0.0.1"
_DEFAULT_WEB_API_PORT = 9000

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _source(env: Mapping[str, str] | None) -> Mapping[str, str]:
    return env if env is not None else os.environ


def _read_flag(env: Mapping[str, str] | None, key: str, default: bool) -> bool:
    raw = _source(env).get(key)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _FALSE_VALUES:
        return False
    if normalized in _TRUE_VALUES:
        return True
    return default


def _read_int(env: Mapping[str, str] | None, key: str, default: int) -> int:
    raw = _source(env).get(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Environment-derived settings
# ---------------------------------------------------------------------------
def get_timezone_name(env: Dict[str, str] | None = None) -> str:
    """Return the IANA zone that defines "today" for relative dates."""

    value = _source(env).get("CHAT_TIMEZONE", "").strip()
    return value or _DEFAULT_TIMEZONE


def is_logging_enabled(env: Dict[str, str] | None = None) -> bool:
    """Determine whether parse records are written to disk."""

    return _read_flag(env, "LOGGING_ENABLED", _DEFAULT_LOGGING_ENABLED)


def get_log_dir(env: Dict[str, str] | None = None) -> Path:
    override = _source(env).get("LOG_DIR")
    return Path(override) if override else Path(_DEFAULT_LOG_DIR)


def get_parse_log_path(env: Dict[str, str] | None = None) -> Path:
    """Return the full path for the parse log JSONL file."""

    return get_log_dir(env) / _PARSE_LOG_FILENAME


def get_review_queue_dir(env: Dict[str, str] | None = None) -> Path:
    override = _source(env).get("REVIEW_QUEUE_DIR")
    return Path(override) if override else Path(_DEFAULT_REVIEW_QUEUE_DIR)


def get_review_queue_path(env: Dict[str, str] | None = None) -> Path:
    """Return the full path for the low-confidence review queue."""

    return get_review_queue_dir(env) / _REVIEW_QUEUE_FILENAME


def is_log_redaction_enabled(env: Dict[str, str] | None = None) -> bool:
    """Determine whether contact details should be scrubbed before logging."""

    return _read_flag(env, "LOG_REDACTION_ENABLED", _DEFAULT_LOG_REDACTION_ENABLED)


def get_log_redaction_patterns(env: Dict[str, str] | None = None) -> List[str]:
    """Return the list of redaction pattern keys to apply."""

    raw = _source(env).get("LOG_REDACTION_PATTERNS")
    values = raw if raw is not None else _DEFAULT_LOG_REDACTION_PATTERNS
    return [segment.strip().lower() for segment in values.split(",") if segment.strip()]


def get_log_max_bytes(env: Dict[str, str] | None = None) -> int:
    """Return the maximum size in bytes before rotating log files."""

    return max(_read_int(env, "LOG_MAX_BYTES", _DEFAULT_LOG_MAX_BYTES), 0)


def get_log_backup_count(env: Dict[str, str] | None = None) -> int:
    """Return the number of rotated log files to retain."""

    return max(_read_int(env, "LOG_BACKUP_COUNT", _DEFAULT_LOG_BACKUP_COUNT), 0)


def get_review_confidence_threshold(env: Dict[str, str] | None = None) -> float:
    """Proposals scoring below this value are queued for review."""

    raw = _source(env).get("REVIEW_CONFIDENCE_THRESHOLD")
    if raw is None:
        return _DEFAULT_REVIEW_CONFIDENCE_THRESHOLD
    try:
        value = float(raw)
    except ValueError:
        return _DEFAULT_REVIEW_CONFIDENCE_THRESHOLD
    return min(max(value, 0.0), 1.0)


def get_roster_path(env: Dict[str, str] | None = None) -> Path:
    override = _source(env).get("ROSTER_PATH")
    return Path(override) if override else Path(_DEFAULT_ROSTER_PATH)


def get_web_api_host(env: Dict[str, str] | None = None) -> str:
    return _source(env).get("WEB_API_HOST", _DEFAULT_WEB_API_HOST)


def get_web_api_port(env: Dict[str, str] | None = None) -> int:
    value = _read_int(env, "WEB_API_PORT", _DEFAULT_WEB_API_PORT)
    return value if 0 < value <= 65535 else _DEFAULT_WEB_API_PORT
