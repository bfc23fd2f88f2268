"""Shared pytest fixtures and test helpers for strictrecord tests."""

from __future__ import annotations

from typing import Any

import pytest

from strictrecord.domain.record import Record
from strictrecord.domain.schema import RecordSchema
from strictrecord.validation.base import Validator


class WithDefaults(
    Record,
    schema=RecordSchema(
        fields=("foo", "bar", "baz"),
        defaults={"foo": 123, "bar": None, "baz": 456},
        rules={"foo": "rule1", "bar": "rule2", "baz": "rule3"},
    ),
):
    __slots__ = ()


class WithoutDefaults(Record, schema=RecordSchema(fields=("foo", "bar", "baz"))):
    __slots__ = ()


class MockValidator(Validator):
    """Records every call; answers ``answer`` unless the value is in ``rejects``."""

    def __init__(self, answer: bool = True, rejects: tuple[Any, ...] = ()) -> None:
        self.answer = answer
        self.rejects = rejects
        self.validated: list[tuple[Any, Any]] = []

    def validate(self, value: Any, rule: Any) -> bool:
        self.validated.append((value, rule))
        if value in self.rejects:
            return False
        return self.answer


@pytest.fixture
def validator() -> MockValidator:
    """A permissive mock validator that records its calls."""
    return MockValidator()


@pytest.fixture
def with_defaults() -> type[WithDefaults]:
    """Record type with fields foo/bar/baz, all defaulted, all ruled."""
    return WithDefaults


@pytest.fixture
def without_defaults() -> type[WithoutDefaults]:
    """Record type with fields foo/bar/baz, no defaults, no rules."""
    return WithoutDefaults


@pytest.fixture
def make_validator() -> type[MockValidator]:
    """Factory for mock validators with custom answers or rejected values."""
    return MockValidator
