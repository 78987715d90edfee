from chat_actions.parser_utils.names import (
    extract_mentions,
    given_name,
    name_variants,
    resolve_names,
    strip_honorifics,
)
from chat_actions.parsers.types import ChatMember


def test_strip_honorifics_removes_one_suffix():
    assert strip_honorifics("민규님") == "민규"
    assert strip_honorifics("김본부장") == "김"
    assert strip_honorifics("송희") == "송희"


def test_given_name_uses_last_two_characters():
    assert given_name("박민규") == "민규"
    assert given_name("이송희 팀장") == "송희"


def test_name_variants_are_unique_and_longest_first():
    variants = name_variants("박민규")
    assert len(variants) == len(set(variants))
    assert [len(value) for value in variants] == sorted((len(value) for value in variants), reverse=True)
    assert {"박민규", "민규", "민규님", "박민규님"} <= set(variants)


def test_resolve_names_drops_unknown_tokens(members):
    ids, matched = resolve_names(["민규님", "송희", "철수"], members)
    assert ids == ["u-001", "u-002"]
    assert matched == ["민규님", "송희"]


def test_resolve_names_honorific_and_bare_agree(members):
    assert resolve_names(["민규님"], members)[0] == resolve_names(["민규"], members)[0]


def test_resolve_names_reports_each_member_once(members):
    ids, _ = resolve_names(["민규", "박민규"], members)
    assert ids == ["u-001"]


def test_resolve_names_prefers_exact_match():
    members = [ChatMember(id="a", name="김민규"), ChatMember(id="b", name="민규")]
    ids, _ = resolve_names(["민규"], members)
    assert ids == ["b"]


def test_extract_mentions_with_honorific(members):
    names, ids = extract_mentions("민규님 내일 회의 참석", members)
    assert names == ["민규"]
    assert ids == ["u-001"]


def test_extract_mentions_prefers_full_name(members):
    names, ids = extract_mentions("이송희, 김요한 참석", members)
    assert names == ["이송희", "김요한"]
    assert ids == ["u-002", "u-003"]


def test_extract_mentions_ignores_given_name_inside_words(members):
    assert extract_mentions("규민규칙을 정리", members) == ([], [])


def test_blank_name_has_no_variants():
    assert name_variants("") == []
    assert name_variants("  ") == []
    assert name_variants("과장") == []
