"""Directive-string validator.

Rules are pipe-separated directives, optionally with ``:``-separated
arguments::

    "required|string|max:40"
    "nullable|integer|between:1,10"
    ["string", "regex:^(a|b)+$"]   # sequence form, for patterns containing '|'

Arguments are comma-separated, except for ``regex`` which takes the rest of
the directive verbatim. ``nullable`` lets ``None`` through regardless of the
other directives.
"""

from __future__ import annotations

import numbers
import re
from collections.abc import Callable, Mapping, Sequence, Sized
from typing import Any

from strictrecord.validation.base import Validator

DirectiveCheck = Callable[[Any, list[str]], bool]

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _measure(value: Any) -> float | None:
    """Length for strings and collections, magnitude for numbers."""
    if _is_number(value):
        return float(value)
    if isinstance(value, Sized):
        return float(len(value))
    return None


def _required(value: Any, args: list[str]) -> bool:
    if value is None:
        return False
    if isinstance(value, Sized) and len(value) == 0:
        return False
    return True


def _min(value: Any, args: list[str]) -> bool:
    size = _measure(value)
    return size is not None and size >= float(args[0])


def _max(value: Any, args: list[str]) -> bool:
    size = _measure(value)
    return size is not None and size <= float(args[0])


def _between(value: Any, args: list[str]) -> bool:
    size = _measure(value)
    return size is not None and float(args[0]) <= size <= float(args[1])


def _in(value: Any, args: list[str]) -> bool:
    return value is not None and str(value) in args


def _not_in(value: Any, args: list[str]) -> bool:
    return value is None or str(value) not in args


def _regex(value: Any, args: list[str]) -> bool:
    return isinstance(value, str) and re.search(args[0], value) is not None


DIRECTIVES: dict[str, DirectiveCheck] = {
    "required": _required,
    "string": lambda value, args: isinstance(value, str),
    "integer": lambda value, args: isinstance(value, int) and not isinstance(value, bool),
    "numeric": lambda value, args: _is_number(value),
    "boolean": lambda value, args: isinstance(value, bool),
    "array": lambda value, args: isinstance(value, (list, tuple)),
    "mapping": lambda value, args: isinstance(value, Mapping),
    "min": _min,
    "max": _max,
    "between": _between,
    "in": _in,
    "not_in": _not_in,
    "regex": _regex,
    "email": lambda value, args: isinstance(value, str) and EMAIL_PATTERN.match(value) is not None,
}

ALIASES: dict[str, str] = {
    "int": "integer",
    "bool": "boolean",
    "list": "array",
}

# Directives that take exactly this many arguments.
ARITY: dict[str, int] = {
    "min": 1,
    "max": 1,
    "between": 2,
    "regex": 1,
}


def parse_rule(rule: str | Sequence[str]) -> list[tuple[str, list[str]]]:
    """Split a rule into ``(directive, args)`` pairs.

    Examples:
        >>> parse_rule("required|max:5")
        [('required', []), ('max', ['5'])]
        >>> parse_rule(["in:a,b", "regex:^x|y$"])
        [('in', ['a', 'b']), ('regex', ['^x|y$'])]
    """
    parts = rule.split("|") if isinstance(rule, str) else list(rule)
    parsed: list[tuple[str, list[str]]] = []
    for part in parts:
        part = part.strip()
        if not part:
            continue
        name, _, raw_args = part.partition(":")
        name = ALIASES.get(name.strip(), name.strip())
        if name == "regex":
            args = [raw_args]
        else:
            args = [a.strip() for a in raw_args.split(",")] if raw_args else []
        expected = ARITY.get(name)
        if expected is not None and len(args) != expected:
            raise ValueError(f"Directive {name!r} takes {expected} argument(s), got {len(args)}")
        parsed.append((name, args))
    return parsed


class DirectiveValidator(Validator):
    """Validates values against pipe-separated directive rules.

    Extra directives can be added per instance with :meth:`register`;
    they shadow built-ins of the same name.
    """

    def __init__(self, extra: Mapping[str, DirectiveCheck] | None = None) -> None:
        self._extra: dict[str, DirectiveCheck] = dict(extra or {})

    def register(self, name: str, check: DirectiveCheck) -> None:
        """Add or replace a directive."""
        self._extra[name] = check

    def lookup(self, name: str) -> DirectiveCheck | None:
        return self._extra.get(name) or DIRECTIVES.get(name)

    def validate(self, value: Any, rule: Any) -> bool:
        if not isinstance(rule, (str, Sequence)):
            raise TypeError(f"Directive rules must be strings, got {type(rule).__name__}")
        directives = parse_rule(rule)
        if value is None and any(name == "nullable" for name, _ in directives):
            return True
        for name, args in directives:
            if name == "nullable":
                continue
            check = self.lookup(name)
            if check is None:
                raise ValueError(f"Unknown validation directive: {name}")
            if not check(value, args):
                return False
        return True
