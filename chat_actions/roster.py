"""Load chat rosters (the members eligible for name resolution) from YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from chat_actions.parsers.types import ChatMember

DEFAULT_ROSTER_PATH = Path("config/roster.yml")


def load_roster(path: Path | str | None = None) -> List[ChatMember]:
    """Read ``members: [{id, name}, ...]`` into ``ChatMember`` entries.

    Entries without an id or a name are skipped; a document that yields no
    member at all is rejected.
    """

    target = Path(path) if path else DEFAULT_ROSTER_PATH
    if not target.exists():
        raise FileNotFoundError(f"Roster not found: {target}")

    data = yaml.safe_load(target.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Roster {target} must be a mapping at the top level.")
    entries = data.get("members")
    if not isinstance(entries, list):
        raise ValueError("Roster must define a top-level 'members' list.")

    members: List[ChatMember] = []
    seen: set[str] = set()
    for entry in entries:
        member = _member_from_entry(entry)
        if member is None or member.id in seen:
            continue
        seen.add(member.id)
        members.append(member)

    if not members:
        raise ValueError(f"Roster {target} did not yield any valid members.")
    return members


def _member_from_entry(entry: Any) -> ChatMember | None:
    if not isinstance(entry, dict):
        return None
    payload: Dict[str, Any] = entry
    member_id = str(payload.get("id") or "").strip()
    name = str(payload.get("name") or "").strip()
    if not member_id or not name:
        return None
    return ChatMember(id=member_id, name=name)


__all__ = ["DEFAULT_ROSTER_PATH", "load_roster"]
