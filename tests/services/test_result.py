"""Tests for RecordResult and RecordFailure."""

import json

import pytest

from strictrecord.domain.record import define_record
from strictrecord.services.result import RecordFailure, RecordResult

Point = define_record("Point", "x y", defaults={"y": 0})


class TestRecordResult:
    def test_success_construction(self) -> None:
        point = Point().set("x", 1)
        result = RecordResult(ok=True, op="set", record=point)
        assert result.ok is True
        assert result.op == "set"
        assert result.record is point
        assert result.value is None
        assert result.warnings == []
        assert result.error is None

    def test_error_construction(self) -> None:
        error = RecordFailure(code="unknown_field", message="Field name 'z' invalid in Point")
        result = RecordResult(ok=False, op="set", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "unknown_field"

    def test_json_serialization(self) -> None:
        result = RecordResult(
            ok=True,
            op="merge",
            record=Point().set("x", 3),
            warnings=["Ignored undeclared field: z"],
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["op"] == "merge"
        assert parsed["record"] == {"x": 3, "y": 0}
        assert parsed["warnings"] == ["Ignored undeclared field: z"]

    def test_json_with_incomplete_record(self) -> None:
        parsed = json.loads(RecordResult(ok=True, op="make", record=Point()).model_dump_json())
        assert parsed["record"] == {"y": 0}

    def test_json_without_record(self) -> None:
        parsed = json.loads(RecordResult(ok=True, op="get", value=5).model_dump_json())
        assert parsed["record"] is None
        assert parsed["value"] == 5

    def test_frozen(self) -> None:
        result = RecordResult(ok=True, op="test")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]


class TestUnwrap:
    def test_returns_record(self) -> None:
        point = Point()
        assert RecordResult(ok=True, op="make", record=point).unwrap() is point

    def test_returns_value(self) -> None:
        assert RecordResult(ok=True, op="get", value=0).unwrap() == 0

    def test_raises_on_failure(self) -> None:
        error = RecordFailure(code="missing_value", message="x isn't set")
        with pytest.raises(ValueError, match="get failed: x isn't set"):
            RecordResult(ok=False, op="get", error=error).unwrap()


class TestRecordFailure:
    def test_with_detail(self) -> None:
        failure = RecordFailure(
            code="validation_failed",
            message="bad",
            detail={"field": "x", "rule": "'int'"},
        )
        assert failure.detail["field"] == "x"

    def test_default_detail(self) -> None:
        assert RecordFailure(code="E", message="bad").detail == {}
