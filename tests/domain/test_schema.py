"""Tests for RecordSchema construction and lookups."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from strictrecord.domain.schema import RecordSchema


class TestRecordSchema:
    def test_minimal(self) -> None:
        schema = RecordSchema(fields=("a", "b"))
        assert schema.fields == ("a", "b")
        assert dict(schema.defaults) == {}
        assert dict(schema.rules) == {}

    def test_list_fields_become_tuple(self) -> None:
        assert RecordSchema(fields=["a", "b"]).fields == ("a", "b")

    def test_whitespace_shorthand(self) -> None:
        assert RecordSchema(fields="a b  c").fields == ("a", "b", "c")

    def test_duplicate_fields_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Duplicate field name"):
            RecordSchema(fields=("a", "a"))

    def test_empty_field_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RecordSchema(fields=("a", ""))

    def test_default_for_undeclared_field(self) -> None:
        with pytest.raises(ValidationError, match="undeclared"):
            RecordSchema(fields=("a",), defaults={"b": 1})

    def test_rule_for_undeclared_field(self) -> None:
        with pytest.raises(ValidationError, match="undeclared"):
            RecordSchema(fields=("a",), rules={"b": "required"})

    def test_tables_are_read_only(self) -> None:
        schema = RecordSchema(fields=("a",), defaults={"a": 1})
        with pytest.raises(TypeError):
            schema.defaults["a"] = 2  # type: ignore[index]

    def test_tables_are_copied(self) -> None:
        defaults = {"a": 1}
        schema = RecordSchema(fields=("a",), defaults=defaults)
        defaults["a"] = 2
        assert schema.default_for("a") == 1

    def test_default_for_returns_a_copy(self) -> None:
        schema = RecordSchema(fields=("tags",), defaults={"tags": []})
        schema.default_for("tags").append("x")
        assert schema.default_for("tags") == []

    def test_frozen(self) -> None:
        schema = RecordSchema(fields=("a",))
        with pytest.raises(ValidationError):
            schema.fields = ("b",)  # type: ignore[misc]

    def test_lookups(self) -> None:
        schema = RecordSchema(
            fields=("a", "b", "c"),
            defaults={"a": None},
            rules={"b": "required"},
        )
        assert schema.has_field("a")
        assert not schema.has_field("z")
        assert schema.has_default("a")
        assert schema.default_for("a") is None
        assert not schema.has_default("b")
        assert schema.has_rule("b")
        assert schema.rule_for("b") == "required"
        assert schema.rule_for("c") is None
