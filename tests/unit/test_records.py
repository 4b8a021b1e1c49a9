"""Unit tests for raw record helpers and the document loader."""

import datetime

import pytest

from voidspan.engine.errors import DecodeError, TaskFileError
from voidspan.engine.loader import decode_records, read_file
from voidspan.engine.records import (
    DirectiveKind,
    RawKind,
    directive_for,
    is_include_role,
    kind_of,
    mapping_field,
    record_sequence,
    string_field,
)


class TestKindOf:

    @pytest.mark.parametrize("value,kind", [
        ("x", RawKind.STRING),
        (1, RawKind.NUMBER),
        (1.5, RawKind.NUMBER),
        (True, RawKind.BOOLEAN),
        ({}, RawKind.MAPPING),
        ([], RawKind.SEQUENCE),
        (None, RawKind.NULL),
        (datetime.date(2024, 1, 1), RawKind.OTHER),
    ])
    def test_kinds(self, value, kind):
        assert kind_of(value) is kind


class TestFields:

    def test_string_field(self):
        assert string_field({"name": "web"}, "name") == "web"
        assert string_field({"name": 5}, "name") == ""
        assert string_field({}, "name") == ""

    def test_mapping_field_returns_copy(self):
        original = {"a": 1}
        result = mapping_field({"vars": original}, "vars")
        assert result == {"a": 1}
        assert result is not original

    def test_mapping_field_ignores_other_kinds(self):
        assert mapping_field({"vars": "x"}, "vars") == {}

    def test_record_sequence(self):
        assert record_sequence([{"a": 1}, "skip", None, {"b": 2}]) == [{"a": 1}, {"b": 2}]
        assert record_sequence("not a list") is None
        assert record_sequence(None) is None


class TestDirectives:

    def test_directive_aliases(self):
        assert directive_for("include_tasks") is DirectiveKind.INCLUDE_TASKS
        assert directive_for("ansible.builtin.include_tasks") is DirectiveKind.INCLUDE_TASKS
        assert directive_for("ansible.builtin.include_role") is DirectiveKind.INCLUDE_ROLE
        assert directive_for("ansible.builtin.debug") is None

    def test_is_include_role(self):
        assert is_include_role("include_role")
        assert is_include_role("ansible.builtin.include_role")
        assert not is_include_role("include_tasks")
        assert not is_include_role("")


class TestLoader:

    def test_decode_records(self):
        records = decode_records(b"- name: a\n- ~\n- 1: one\n", "failed")
        assert records == [{"name": "a"}, {}, {"1": "one"}]

    def test_decode_empty_document(self):
        assert decode_records("", "failed") == []

    def test_decode_scalar_item_rejected(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_records("- name: a\n- just text\n", "failed to parse", file_path="x.yml")
        assert "item 1 must be a mapping" in str(exc_info.value)
        assert exc_info.value.file_path == "x.yml"

    def test_read_file_missing(self, tmp_path):
        with pytest.raises(TaskFileError) as exc_info:
            read_file(str(tmp_path / "missing.yml"), "failed to read thing")
        assert str(exc_info.value).startswith("failed to read thing: ")
