"""Validator contract used by records to check field values against rules.

A record never interprets a rule. It hands ``(value, rule)`` to its
validator and treats the answer as a yes/no predicate. A record built
without a validator accepts every value, rules or not.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Validator(ABC):
    """Checks a value against an opaque rule descriptor."""

    @abstractmethod
    def validate(self, value: Any, rule: Any) -> bool:
        """Return True if *value* satisfies *rule*."""
        ...


class PredicateValidator(Validator):
    """Rules are callables: ``rule(value) -> bool``."""

    def validate(self, value: Any, rule: Any) -> bool:
        if not callable(rule):
            raise TypeError(f"PredicateValidator rules must be callable, got {type(rule).__name__}")
        return bool(rule(value))
