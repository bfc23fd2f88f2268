"""Settings: environment-driven defaults for hosts wiring up records.

Priority chain (highest to lowest):
  1. Init kwargs: passed by the host application
  2. Env vars: ``STRICTRECORD_*`` prefix
  3. Code defaults

Records never read settings themselves. A host builds a
:class:`RecordSettings`, asks it for a validator, and passes that validator
to the records it constructs.
"""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings

from strictrecord.config.logging import configure_logging
from strictrecord.validation.base import PredicateValidator, Validator
from strictrecord.validation.directives import DirectiveValidator
from strictrecord.validation.typed import TypeAdapterValidator

ValidatorKind = Literal["none", "predicate", "directive", "typed"]


class RecordSettings(BaseSettings):
    """Unified settings for strictrecord hosts.

    Attributes:
        validator: Which bundled validator :meth:`build_validator` returns.
            ``"none"`` disables rule checking.
        strict_types: Strict mode for the ``"typed"`` validator.
        verbose: DEBUG logging for the ``strictrecord`` logger.
        log_json: JSON log lines instead of console output.
        log_root: Install the log handler on the root logger.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "STRICTRECORD_",
    }

    validator: ValidatorKind = "none"
    strict_types: bool = False
    verbose: bool = False
    log_json: bool = False
    log_root: bool = False

    def build_validator(self) -> Validator | None:
        """Instantiate the configured validator, or None when disabled."""
        if self.validator == "predicate":
            return PredicateValidator()
        if self.validator == "directive":
            return DirectiveValidator()
        if self.validator == "typed":
            return TypeAdapterValidator(strict=self.strict_types)
        return None

    def apply_logging(self) -> None:
        """Configure structlog from these settings."""
        configure_logging(
            verbose=self.verbose,
            log_json=self.log_json,
            install_root=self.log_root,
        )
