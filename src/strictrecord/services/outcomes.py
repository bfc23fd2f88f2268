"""Result-returning wrappers around record operations.

Each ``try_*`` function runs the matching record method and returns a
:class:`RecordResult` instead of raising. Only record failures are
captured; anything else (a bad source type, a crashing validator)
propagates unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from strictrecord.domain.errors import RecordError
from strictrecord.domain.record import Record, iter_entries
from strictrecord.services.result import RecordFailure, RecordResult

logger = logging.getLogger(__name__)


def failure_from(exc: RecordError) -> RecordFailure:
    """Build the structured payload for a record error."""
    return RecordFailure(code=str(exc.code), message=exc.message, detail=exc.to_detail())


def _derive(op: str, action: Callable[[], Record], warnings: list[str] | None = None) -> RecordResult:
    try:
        record = action()
    except RecordError as exc:
        logger.debug("Record operation %s failed: %s", op, exc)
        return RecordResult(ok=False, op=op, error=failure_from(exc))
    return RecordResult(ok=True, op=op, record=record, warnings=warnings or [])


def try_get(record: Record, name: str) -> RecordResult:
    """Resolve *name* on *record*; the value lands in ``result.value``."""
    try:
        value = record.get(name)
    except RecordError as exc:
        logger.debug("Record operation get failed: %s", exc)
        return RecordResult(ok=False, op="get", error=failure_from(exc))
    return RecordResult(ok=True, op="get", value=value)


def try_set(record: Record, name: str, value: Any) -> RecordResult:
    return _derive("set", lambda: record.set(name, value))


def try_update(record: Record, name: str, updater: Callable[[Any], Any]) -> RecordResult:
    return _derive("update", lambda: record.update(name, updater))


def try_make(record: Record, init: Any = None) -> RecordResult:
    return _derive("make", lambda: record.make(init))


def try_replace(record: Record, **changes: Any) -> RecordResult:
    return _derive("replace", lambda: record.replace(**changes))


def try_merge(record: Record, source: Any) -> RecordResult:
    """Merge *source* into *record*, reporting dropped keys as warnings."""
    entries = iter_entries(source)
    warnings = [
        f"Ignored undeclared field: {name}"
        for name, _ in entries
        if not record.schema.has_field(name)
    ]
    return _derive("merge", lambda: record.merge(entries), warnings)


def collect(results: list[RecordResult]) -> tuple[list[Any], list[RecordFailure]]:
    """Split a batch of results into successful payloads and failures."""
    payloads: list[Any] = []
    failures: list[RecordFailure] = []
    for result in results:
        if result.ok:
            payloads.append(result.record if result.record is not None else result.value)
        elif result.error is not None:
            failures.append(result.error)
    return payloads, failures
