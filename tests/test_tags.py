"""Tests for accessory.codegen.core.tags."""

from __future__ import annotations

import pytest

from accessory.codegen.core.model import Tag
from accessory.codegen.core.tags import go_unquote, lookup_struct_tag, parse_field_tag, parse_tag


def test_lookup_finds_accessor_among_other_keys() -> None:
    raw = 'json:"field1,omitempty" accessor:"getter,setter" db:"f1"'
    assert lookup_struct_tag(raw, "accessor") == "getter,setter"
    assert lookup_struct_tag(raw, "db") == "f1"


def test_lookup_strips_backquotes() -> None:
    assert lookup_struct_tag('`accessor:"getter"`', "accessor") == "getter"


def test_lookup_missing_key_or_tag() -> None:
    assert lookup_struct_tag('json:"x"', "accessor") is None
    assert lookup_struct_tag("", "accessor") is None
    assert lookup_struct_tag(None, "accessor") is None


def test_lookup_stops_at_malformed_tag() -> None:
    assert lookup_struct_tag('json:x accessor:"getter"', "accessor") is None
    assert lookup_struct_tag('accessor:"getter', "accessor") is None


def test_lookup_unquotes_escapes() -> None:
    assert lookup_struct_tag(r'accessor:"getter:Get\"X"', "accessor") == 'getter:Get"X'


def test_parse_tag_absent_payload_means_no_tag() -> None:
    assert parse_tag(None) is None


def test_parse_tag_keys_without_values_use_default_names() -> None:
    assert parse_tag("getter,setter") == Tag(getter="", setter="", no_default=False)


def test_parse_tag_explicit_names() -> None:
    tag = parse_tag("getter:GetField1,setter")
    assert tag.getter == "GetField1"
    assert tag.setter == ""


def test_parse_tag_ignore_marker_falls_back_to_default_name() -> None:
    tag = parse_tag("getter:-,setter: - ")
    assert tag.getter == ""
    assert tag.setter == ""


def test_parse_tag_only_setter() -> None:
    tag = parse_tag("setter:Put")
    assert tag.getter is None
    assert tag.setter == "Put"
    assert not tag.wants_getter
    assert tag.wants_setter


def test_parse_tag_no_default_is_presence_only() -> None:
    assert parse_tag("getter,noDefault").no_default is True
    assert parse_tag("getter,noDefault:-").no_default is True
    assert parse_tag("getter").no_default is False


def test_parse_tag_ignores_unknown_keys_and_whitespace() -> None:
    tag = parse_tag(" getter : Name , future:thing,,")
    assert tag == Tag(getter="Name", setter=None, no_default=False)


def test_parse_tag_last_occurrence_wins() -> None:
    assert parse_tag("getter:A,getter:B").getter == "B"
    assert parse_tag("getter:A,getter").getter == ""


def test_parse_tag_splits_on_first_colon_only() -> None:
    assert parse_tag("getter:a:b").getter == "a:b"


def test_parse_tag_passes_malformed_names_through() -> None:
    assert parse_tag("getter:1bad name").getter == "1bad name"


def test_empty_payload_opts_out_of_both_accessors() -> None:
    tag = parse_field_tag('accessor:""')
    assert tag == Tag(getter=None, setter=None, no_default=False)
    assert not tag.wants_getter
    assert not tag.wants_setter


def test_parse_field_tag_without_accessor_key() -> None:
    assert parse_field_tag('json:"name"') is None
    assert parse_field_tag(None) is None


def test_lookup_accepts_go_byte_and_unicode_escapes() -> None:
    assert lookup_struct_tag(r'accessor:"getter:\x41ge"', "accessor") == "getter:Age"
    assert lookup_struct_tag(r'accessor:"getter:\101ge"', "accessor") == "getter:Age"
    assert lookup_struct_tag(r'accessor:"getter:Näme"', "accessor") == "getter:Näme"
    assert lookup_struct_tag(r'accessor:"getter:\U0001F600"', "accessor") == "getter:\U0001F600"


def test_escaped_tag_still_produces_accessors() -> None:
    assert parse_field_tag(r'accessor:"getter:\x41ge,setter"') == Tag(getter="Age", setter="")


def test_go_unquote_multibyte_byte_escapes() -> None:
    assert go_unquote(r'"\xc3\xa4"') == "ä"
    assert go_unquote(r'"a\tb\\c\"d"') == 'a\tb\\c"d'


@pytest.mark.parametrize(
    "literal",
    [
        r'"\'"',
        r'"\q"',
        r'"\x4"',
        r'"\400"',
        r'"\uD800"',
        '"a\nb"',
        "'single'",
        '"unterminated\\"',
    ],
)
def test_go_unquote_rejects_invalid_literals(literal: str) -> None:
    with pytest.raises(ValueError):
        go_unquote(literal)


def test_invalid_escape_means_no_accessor_tag() -> None:
    assert lookup_struct_tag(r'accessor:"getter:\q"', "accessor") is None
