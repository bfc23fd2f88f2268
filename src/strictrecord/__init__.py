"""strictrecord: immutable, schema-constrained records."""

from strictrecord.domain.errors import (
    ErrorCode,
    ImmutableMutationError,
    MissingValueError,
    RecordError,
    UnknownFieldError,
    ValidationFailedError,
)
from strictrecord.domain.record import Record, define_record
from strictrecord.domain.schema import RecordSchema
from strictrecord.validation.base import Validator

__version__ = "0.1.0"

__all__ = [
    "ErrorCode",
    "ImmutableMutationError",
    "MissingValueError",
    "Record",
    "RecordError",
    "RecordSchema",
    "UnknownFieldError",
    "ValidationFailedError",
    "Validator",
    "__version__",
    "define_record",
]
