"""Tests for the Validator contract and PredicateValidator."""

from __future__ import annotations

from typing import Any

import pytest

from strictrecord.domain.errors import ValidationFailedError
from strictrecord.domain.record import define_record
from strictrecord.validation.base import PredicateValidator, Validator


class TestValidatorContract:
    def test_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            Validator()  # type: ignore[abstract]

    def test_duck_typed_validator_is_accepted(self) -> None:
        class Anything:
            def validate(self, value: Any, rule: Any) -> bool:
                return True

        Thing = define_record("Thing", ["a"], rules={"a": "whatever"})
        assert Thing(Anything()).set("a", 1).get("a") == 1


class TestPredicateValidator:
    def test_callable_rule(self) -> None:
        validator = PredicateValidator()
        assert validator.validate(4, lambda v: v % 2 == 0)
        assert not validator.validate(3, lambda v: v % 2 == 0)

    def test_truthiness_is_coerced(self) -> None:
        assert PredicateValidator().validate("x", len) is True

    def test_non_callable_rule(self) -> None:
        with pytest.raises(TypeError, match="callable"):
            PredicateValidator().validate(1, "rule")

    def test_record_integration(self) -> None:
        Temperature = define_record(
            "Temperature",
            ["celsius"],
            rules={"celsius": lambda v: isinstance(v, (int, float)) and v >= -273.15},
        )
        reading = Temperature(PredicateValidator()).set("celsius", 21.5)
        assert reading.celsius == 21.5
        with pytest.raises(ValidationFailedError):
            reading.set("celsius", -300)
