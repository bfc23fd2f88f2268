"""Pydantic-backed validator: rules are type annotations.

Any annotation pydantic understands works as a rule::

    RecordSchema(
        fields=("age", "tags"),
        rules={"age": Annotated[int, Field(ge=0)], "tags": list[str]},
    )

A value is valid when ``TypeAdapter(rule).validate_python(value)`` succeeds.
Coerced results are discarded; the record stores the value it was given.
"""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter, ValidationError

from strictrecord.validation.base import Validator


class TypeAdapterValidator(Validator):
    """Validates values by running them through a pydantic ``TypeAdapter``.

    Args:
        strict: Use pydantic strict mode (no ``"1"`` -> ``1`` coercion).
    """

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict
        self._adapters: dict[Any, TypeAdapter[Any]] = {}

    def _adapter(self, rule: Any) -> TypeAdapter[Any]:
        try:
            adapter = self._adapters.get(rule)
        except TypeError:
            # Unhashable rule: build an adapter every time.
            return TypeAdapter(rule)
        if adapter is None:
            adapter = TypeAdapter(rule)
            self._adapters[rule] = adapter
        return adapter

    def validate(self, value: Any, rule: Any) -> bool:
        try:
            self._adapter(rule).validate_python(value, strict=self.strict)
        except ValidationError:
            return False
        return True

    def __getstate__(self) -> dict[str, Any]:
        # Adapters are rebuilt on demand after unpickling.
        return {"strict": self.strict}

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.strict = state["strict"]
        self._adapters = {}
