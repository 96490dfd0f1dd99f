"""
Exception hierarchy.

Failed rules are data (ValidationFailure), never exceptions. The classes
below signal a misconfigured validator (UsageError and subclasses) or are
raised on request by ``Validator.validate_and_raise``.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ValidationFailure, ValidationOutcome


class RuleForgeError(Exception):
    """Base class for all errors raised by ruleforge."""


class UsageError(RuleForgeError):
    """Raised when a validator or rule is used in a way it does not support."""


class UnsupportedOperationError(UsageError):
    """Raised when a rule built from an async-only predicate is evaluated synchronously."""


class UnknownRuleSetError(UsageError):
    """Raised when a single requested rule set is not registered on the validator."""

    def __init__(self, rule_set: str, available: list[str] | None = None):
        self.rule_set = rule_set
        self.available = sorted(available or [])
        super().__init__(
            f"Rule set '{rule_set}' does not exist. Available rule sets: {self.available or 'none'}"
        )


class InvalidPropertyExpressionError(UsageError, ValueError):
    """Raised when a property expression is not a simple member access."""


class ValidatorNotRegisteredError(UsageError, LookupError):
    """Raised when no validator is registered for a model type."""

    def __init__(self, model_type: type):
        self.model_type = model_type
        super().__init__(f"No validator registered for type {model_type.__name__}")


class RuleConfigError(UsageError, ValueError):
    """Raised when a declarative rule configuration is invalid."""


class ValidationException(RuleForgeError):
    """
    Raised by ``Validator.validate_and_raise`` when an instance is invalid.

    Attributes:
        outcome: The full validation outcome
    """

    def __init__(self, outcome: "ValidationOutcome", message: str | None = None):
        self.outcome = outcome
        super().__init__(message or outcome.error_message or "Validation failed")

    @property
    def failures(self) -> list["ValidationFailure"]:
        return self.outcome.failures

    def __str__(self) -> str:
        lines = "\n".join(str(f) for f in self.outcome.failures)
        return f"Validation failed: {lines}" if lines else super().__str__()
