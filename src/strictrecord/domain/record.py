"""Record: immutable, schema-constrained value type.

A concrete record type attaches a :class:`RecordSchema` at class definition
time and instances carry only the values explicitly assigned to them.
Everything else (defaults, presence, serialization) is derived from the
schema.

INVARIANT: An instance's assigned data is never changed after the instance
is returned to a caller. ``set``, ``update``, ``merge``, ``make``, ``replace``
and ``reset`` all build a brand-new instance and leave the receiver alone.

Usage::

    class Point(Record, schema=RecordSchema(fields=("x", "y"), defaults={"y": 0})):
        __slots__ = ()

    p = Point().set("x", 3)
    p.to_dict()  # {"x": 3, "y": 0}
"""

from __future__ import annotations

import json
import logging
import sys
import types
from collections.abc import Callable, Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, Self

from pydantic import BaseModel

from strictrecord.domain.errors import (
    ImmutableMutationError,
    MissingValueError,
    UnknownFieldError,
    ValidationFailedError,
)
from strictrecord.domain.schema import RecordSchema

if TYPE_CHECKING:
    from strictrecord.validation.base import Validator

logger = logging.getLogger(__name__)


def iter_entries(source: Any) -> list[tuple[Any, Any]]:
    """Normalize a key/value source into a list of ``(key, value)`` pairs.

    Accepts any mapping (records included), a pydantic model, an iterable of
    pairs, or a plain object with public attributes.
    """
    if isinstance(source, Mapping):
        return list(source.items())
    if isinstance(source, BaseModel):
        return list(source.model_dump().items())
    if isinstance(source, (str, bytes)):
        raise TypeError(f"Cannot read record entries from {type(source).__name__}")
    if isinstance(source, Iterable):
        entries: list[tuple[Any, Any]] = []
        for item in source:
            try:
                key, value = item
            except (TypeError, ValueError) as exc:
                raise TypeError(f"Expected (key, value) pairs, got {item!r}") from exc
            entries.append((key, value))
        return entries
    if hasattr(source, "__dict__"):
        return [(k, v) for k, v in vars(source).items() if not k.startswith("_")]
    raise TypeError(f"Cannot read record entries from {type(source).__name__}")


def _plain(value: Any, partial: bool = False) -> Any:
    """Convert *value* into a plain, JSON-friendly structure.

    With *partial*, nested records contribute only their present fields.
    """
    if isinstance(value, Record):
        return value.to_dict(partial=partial)
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, (str, bytes)):
        return value
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, Mapping):
        return {k: _plain(v, partial) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v, partial) for v in value]
    if type(value) is tuple:
        return tuple(_plain(v, partial) for v in value)
    return value


def _restore(cls: type[Record], data: dict[str, Any], validator: Validator | None) -> Record:
    """Unpickle hook: rebuild a record without re-running validation."""
    return cls(validator)._force(data)


class Record(Mapping[str, Any]):
    """Base type for immutable records.

    Subclasses pass ``schema=RecordSchema(...)`` in the class statement, or
    are produced by :func:`define_record`. The base class itself has no
    schema and cannot be instantiated.

    Map-style reads (``record["name"]``, ``"name" in record``) resolve
    defaults exactly like :meth:`get` and :meth:`has`. Map-style writes and
    deletes are forbidden.
    """

    __slots__ = ("_data", "_validator")

    schema: ClassVar[RecordSchema]

    def __init_subclass__(cls, *, schema: RecordSchema | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if schema is not None:
            cls.schema = schema

    def __init__(self, validator: Validator | None = None) -> None:
        if getattr(type(self), "schema", None) is None:
            raise TypeError(
                f"{type(self).__name__} has no schema; "
                "subclass Record with schema=RecordSchema(...)"
            )
        if validator is not None and not callable(getattr(validator, "validate", None)):
            raise TypeError(f"{type(validator).__name__} has no validate(value, rule) method")
        object.__setattr__(self, "_data", {})
        object.__setattr__(self, "_validator", validator)

    @classmethod
    def of(cls, init: Any = None, *, validator: Validator | None = None) -> Self:
        """Build a record of this type from *init* in one step."""
        return cls(validator).make(init)

    # --- Internal construction ---

    def _force(self, data: Mapping[str, Any]) -> Self:
        """Replace assigned data wholesale, without validation.

        Only called on an instance that has not yet been handed to a caller.
        """
        object.__setattr__(self, "_data", dict(data))
        return self

    def _derive(self, data: Mapping[str, Any]) -> Self:
        return type(self)(self._validator)._force(data)

    def _check(self, name: Any, value: Any) -> None:
        """Raise unless *name* is declared and *value* satisfies its rule."""
        schema = self.schema
        if not schema.has_field(name):
            raise UnknownFieldError(name, type(self).__name__)
        if self._validator is None or not schema.has_rule(name):
            return
        rule = schema.rule_for(name)
        if not self._validator.validate(value, rule):
            logger.debug("Rejected value for %s.%s (rule=%r)", type(self).__name__, name, rule)
            raise ValidationFailedError(name, type(self).__name__, rule)

    # --- Read access ---

    @property
    def validator(self) -> Validator | None:
        return self._validator

    def assigned(self) -> Mapping[str, Any]:
        """Read-only view of the explicitly assigned values (no defaults)."""
        return MappingProxyType(self._data)

    def get(self, name: str) -> Any:  # type: ignore[override]
        """Resolve *name*: assigned value, then default, then fail.

        Raises:
            UnknownFieldError: *name* is not a declared field.
            MissingValueError: *name* is neither assigned nor defaulted.
        """
        schema = self.schema
        if not schema.has_field(name):
            raise UnknownFieldError(name, type(self).__name__)
        if name in self._data:
            return self._data[name]
        if schema.has_default(name):
            return schema.default_for(name)
        raise MissingValueError(name, type(self).__name__)

    def has(self, name: Any) -> bool:
        """True if *name* is assigned or defaulted. Never raises."""
        if not self.schema.has_field(name):
            return False
        return self.schema.has_default(name) or name in self._data

    # --- Derivations ---

    def set(self, name: str, value: Any) -> Self:
        """Return a copy with *name* set to *value*."""
        self._check(name, value)
        data = dict(self._data)
        data[name] = value
        return self._derive(data)

    def update(self, name: str, updater: Callable[[Any], Any]) -> Self:
        """Return a copy with *name* set to ``updater(self.get(name))``."""
        return self.set(name, updater(self.get(name)))

    def make(self, init: Any = None) -> Self:
        """Return a fresh record of this type holding exactly *init*.

        The receiver's assigned values are not carried over; only its type
        and validator are. Every entry must name a declared field.
        """
        entries = iter_entries(init) if init is not None else []
        for name, value in entries:
            self._check(name, value)
        return self._derive(dict(entries))

    def merge(self, source: Any) -> Self:
        """Return a copy with every declared key of *source* overlaid.

        Keys that are not declared fields are ignored.
        """
        data = dict(self._data)
        ignored: list[Any] = []
        for name, value in iter_entries(source):
            if not self.schema.has_field(name):
                ignored.append(name)
                continue
            self._check(name, value)
            data[name] = value
        if ignored:
            logger.debug("Ignored undeclared keys merging into %s: %s", type(self).__name__, ignored)
        return self._derive(data)

    def replace(self, **changes: Any) -> Self:
        """Return a copy with several fields set at once."""
        for name, value in changes.items():
            self._check(name, value)
        return self._derive({**self._data, **changes})

    def reset(self, name: str) -> Self:
        """Return a copy where *name* falls back to its default again.

        Raises:
            UnknownFieldError: *name* is not a declared field.
            ImmutableMutationError: *name* has no default to fall back to.
        """
        schema = self.schema
        if not schema.has_field(name):
            raise UnknownFieldError(name, type(self).__name__)
        if not schema.has_default(name):
            raise ImmutableMutationError(
                f"Field name {name!r} has no default to revert to in {type(self).__name__}",
                record_type=type(self).__name__,
                field=name,
            )
        return self._derive({k: v for k, v in self._data.items() if k != name})

    # --- Serialization ---

    def to_dict(self, *, partial: bool = False) -> dict[str, Any]:
        """Every declared field, in order, resolved and recursively converted.

        With *partial*, fields that are neither assigned nor defaulted are
        left out (here and in nested records) instead of raising.

        Raises:
            MissingValueError: a field is neither assigned nor defaulted.
        """
        names = self if partial else self.schema.fields
        return {name: _plain(self.get(name), partial) for name in names}

    def to_json(self, **kwargs: Any) -> str:
        """JSON text of :meth:`to_dict`; *kwargs* go to :func:`json.dumps`."""
        return json.dumps(self.to_dict(), **kwargs)

    # --- Equality ---

    def equals(self, other: Any) -> bool:
        """Compare by content: resolved values, not identity or defaulting."""
        if self is other:
            return True
        if not isinstance(other, Record):
            return False
        return self.to_dict(partial=True) == other.to_dict(partial=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    # --- Mapping protocol ---

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return self.has(name)

    def __iter__(self) -> Iterator[str]:
        for name in self.schema.fields:
            if self.has(name):
                yield name

    def __len__(self) -> int:
        return sum(1 for name in self.schema.fields if self.has(name))

    def __setitem__(self, name: str, value: Any) -> None:
        raise ImmutableMutationError(
            f"Can't set {name!r} on an immutable record; use set() instead",
            record_type=type(self).__name__,
            field=name,
        )

    def __delitem__(self, name: str) -> None:
        raise ImmutableMutationError(
            f"Can't delete {name!r} from an immutable record",
            record_type=type(self).__name__,
            field=name,
        )

    # --- Attribute access ---

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails; consult the field table.
        schema = getattr(type(self), "schema", None)
        if schema is None or not schema.has_field(name):
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return self.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise ImmutableMutationError(
            f"On an immutable record you must use set() to change {name!r}",
            record_type=type(self).__name__,
            field=name,
        )

    def __delattr__(self, name: str) -> None:
        raise ImmutableMutationError(
            f"Can't delete attribute {name!r} of an immutable record",
            record_type=type(self).__name__,
            field=name,
        )

    # --- Copying and pickling ---

    def __copy__(self) -> Self:
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        return (_restore, (type(self), dict(self._data), self._validator))

    def __repr__(self) -> str:
        body = ", ".join(f"{name}={self.get(name)!r}" for name in self)
        return f"{type(self).__name__}({body})"


def define_record(
    name: str,
    fields: Iterable[str] | str,
    defaults: Mapping[str, Any] | None = None,
    rules: Mapping[str, Any] | None = None,
    *,
    module: str | None = None,
) -> type[Record]:
    """Create a concrete :class:`Record` subclass at runtime.

    *fields* may be a sequence of names or a whitespace-separated string.
    *module* sets ``__module__`` on the new type so instances can be pickled;
    it defaults to the caller's module. Pass it explicitly on interpreters
    without frame introspection.

    Examples:
        >>> Point = define_record("Point", "x y", defaults={"y": 0})
        >>> Point().set("x", 1).to_dict()
        {'x': 1, 'y': 0}
    """
    schema = RecordSchema(
        fields=fields if isinstance(fields, str) else tuple(fields),
        defaults=defaults or {},
        rules=rules or {},
    )
    if module is None:
        try:
            module = sys._getframemodulename(1) or "__main__"
        except AttributeError:
            try:
                module = sys._getframe(1).f_globals.get("__name__", "__main__")
            except (AttributeError, ValueError):
                module = None

    def _body(ns: dict[str, Any]) -> None:
        ns["__slots__"] = ()
        if module is not None:
            ns["__module__"] = module

    return types.new_class(name, (Record,), {"schema": schema}, _body)
