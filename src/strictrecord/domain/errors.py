"""Error codes and the exception hierarchy raised by records.

Every failure a record can produce is a :class:`RecordError`. Each concrete
error also derives from the builtin exception a Python caller would expect
for the same situation (``KeyError`` for lookups, ``ValueError`` for rejected
values, ``TypeError`` for writes to an immutable object).

INVARIANT: Errors are raised before any new instance is built. A failed
derivation never leaves a partially-populated record behind.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Failure kinds, used as tags by the result layer."""

    UNKNOWN_FIELD = "unknown_field"
    MISSING_VALUE = "missing_value"
    VALIDATION_FAILED = "validation_failed"
    IMMUTABLE_MUTATION = "immutable_mutation"


class RecordError(Exception):
    """Base class for all record failures.

    Attributes:
        code: The :class:`ErrorCode` tag for this failure.
        record_type: Name of the concrete record type that raised.
        field: The field name involved, if any.
        detail: Extra structured context for result payloads.
    """

    code: ErrorCode

    def __init__(
        self,
        message: str,
        *,
        record_type: str | None = None,
        field: str | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.record_type = record_type
        self.field = field
        self.detail = dict(detail or {})

    def __str__(self) -> str:
        return self.message

    def to_detail(self) -> dict[str, Any]:
        """Structured payload: record type, field, plus any extra detail."""
        payload: dict[str, Any] = {}
        if self.record_type is not None:
            payload["record_type"] = self.record_type
        if self.field is not None:
            payload["field"] = self.field
        payload.update(self.detail)
        return payload


class UnknownFieldError(RecordError, KeyError):
    """A name outside the record type's declared fields was used."""

    code = ErrorCode.UNKNOWN_FIELD

    def __init__(self, field: str, record_type: str) -> None:
        super().__init__(
            f"Field name {field!r} invalid in {record_type}",
            record_type=record_type,
            field=field,
        )


class MissingValueError(RecordError, KeyError):
    """A declared field was read but is neither assigned nor defaulted."""

    code = ErrorCode.MISSING_VALUE

    def __init__(self, field: str, record_type: str) -> None:
        super().__init__(
            f"Field name {field!r} isn't set and lacks a default value in {record_type}",
            record_type=record_type,
            field=field,
        )


class ValidationFailedError(RecordError, ValueError):
    """A declared rule rejected a value."""

    code = ErrorCode.VALIDATION_FAILED

    def __init__(self, field: str, record_type: str, rule: Any) -> None:
        super().__init__(
            f"Field name {field!r} didn't validate according to its rules in {record_type}",
            record_type=record_type,
            field=field,
            detail={"rule": repr(rule)},
        )
        self.rule = rule


class ImmutableMutationError(RecordError, TypeError):
    """An in-place write or delete was attempted on a record."""

    code = ErrorCode.IMMUTABLE_MUTATION

    def __init__(self, message: str, *, record_type: str, field: str | None = None) -> None:
        super().__init__(message, record_type=record_type, field=field)
