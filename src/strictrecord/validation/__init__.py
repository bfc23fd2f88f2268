"""Validators: adapters from validation engines to the record's predicate contract."""

from strictrecord.validation.base import PredicateValidator, Validator
from strictrecord.validation.directives import DirectiveValidator
from strictrecord.validation.typed import TypeAdapterValidator

__all__ = [
    "DirectiveValidator",
    "PredicateValidator",
    "TypeAdapterValidator",
    "Validator",
]
