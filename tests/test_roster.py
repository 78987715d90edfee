import pytest

from chat_actions.parsers.types import ChatMember
from chat_actions.roster import load_roster


def test_load_roster(tmp_path):
    path = tmp_path / "roster.yml"
    path.write_text(
        "members:\n"
        "  - id: u-001\n"
        "    name: 박민규\n"
        "  - id: u-002\n"
        "    name: ' 이송희 '\n"
        "  - id: u-001\n"
        "    name: 중복\n"
        "  - name: 아이디없음\n"
        "  - 문자열\n",
        encoding="utf-8",
    )
    assert load_roster(path) == [
        ChatMember(id="u-001", name="박민규"),
        ChatMember(id="u-002", name="이송희"),
    ]


def test_missing_roster_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_roster(tmp_path / "missing.yml")


def test_roster_requires_members_list(tmp_path):
    path = tmp_path / "roster.yml"
    path.write_text("members: 박민규\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_roster(path)


def test_roster_must_be_a_mapping(tmp_path):
    path = tmp_path / "roster.yml"
    path.write_text("- 박민규\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_roster(path)


def test_roster_without_valid_members_raises(tmp_path):
    path = tmp_path / "roster.yml"
    path.write_text("members:\n  - id: u-001\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_roster(path)
