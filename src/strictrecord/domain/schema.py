"""RecordSchema: the static descriptors attached to a record type.

A schema bundles the three per-type tables: the ordered field names, the
default values, and the validation rules. It is built once at class
definition time and shared by every instance of the type.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RecordSchema(BaseModel):
    """Field list, defaults, and rules for one record type.

    Attributes:
        fields: Ordered, unique field names. Order drives iteration and
            serialization.
        defaults: Fallback values, keyed by field name. A defaulted field is
            always considered present.
        rules: Opaque rule descriptors, keyed by field name. Fields without a
            rule are never validated.
    """

    model_config = ConfigDict(frozen=True)

    fields: tuple[str, ...]
    defaults: Mapping[str, Any] = Field(default_factory=dict)
    rules: Mapping[str, Any] = Field(default_factory=dict)

    @field_validator("fields", mode="before")
    @classmethod
    def _coerce_fields(cls, value: Any) -> Any:
        if isinstance(value, str):
            # "foo bar baz" shorthand
            return tuple(value.split())
        return value

    @field_validator("fields")
    @classmethod
    def _check_fields(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        seen: set[str] = set()
        for name in value:
            if not name:
                raise ValueError("Field names must be non-empty")
            if name in seen:
                raise ValueError(f"Duplicate field name: {name}")
            seen.add(name)
        return value

    @field_validator("defaults", "rules")
    @classmethod
    def _freeze_table(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def _check_tables(self) -> RecordSchema:
        declared = set(self.fields)
        for table_name in ("defaults", "rules"):
            undeclared = set(getattr(self, table_name)) - declared
            if undeclared:
                raise ValueError(
                    f"{table_name} reference undeclared fields: {sorted(undeclared)}"
                )
        return self

    def has_field(self, name: Any) -> bool:
        return name in self.fields

    def has_default(self, name: Any) -> bool:
        return name in self.defaults

    def default_for(self, name: str) -> Any:
        """A private copy of the default, so callers cannot alter the shared table."""
        return copy.deepcopy(self.defaults[name])

    def rule_for(self, name: str) -> Any | None:
        return self.rules.get(name)

    def has_rule(self, name: str) -> bool:
        return name in self.rules
