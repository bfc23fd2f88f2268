"""RecordResult and RecordFailure: tagged outcomes for record operations.

Records raise :class:`~strictrecord.domain.errors.RecordError` subclasses.
Callers that prefer values over exceptions (API layers, batch importers)
go through :mod:`strictrecord.services.outcomes`, which turns those errors
into a ``RecordResult`` tagged with the error code.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_serializer


class RecordFailure(BaseModel):
    """Structured error payload within a RecordResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class RecordResult(BaseModel):
    """Outcome of one record operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"set"``, ``"merge"``).
        record: The derived record on success, for derivation operations.
        value: The resolved value on success, for ``get``.
        warnings: Non-fatal issues (e.g. keys dropped by ``merge``).
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    record: Any = None
    value: Any = None
    warnings: list[str] = Field(default_factory=list)
    error: RecordFailure | None = None

    @field_serializer("record")
    def _serialize_record(self, record: Any) -> Any:
        if record is None:
            return None
        # Present fields only; incomplete records still serialize.
        return record.to_dict(partial=True)

    def unwrap(self) -> Any:
        """Return the record (or value) on success, raise ``ValueError`` otherwise."""
        if not self.ok:
            message = self.error.message if self.error else "Unknown error"
            raise ValueError(f"{self.op} failed: {message}")
        return self.record if self.record is not None else self.value
