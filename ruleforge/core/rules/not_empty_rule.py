"""
Presence rules - NotNullRule, NotEmptyRule and EmptyRule.
"""

from collections.abc import Sized
from typing import Any

from ..models import ValidationContext, ValidationOutcome
from .base_rule import BaseRule


def is_empty(value: Any) -> bool:
    """
    Whether a value is empty.

    Empty means:
    - None
    - a string that is empty or whitespace-only
    - a sized container (list, dict, set, ...) with no items

    Numbers are never empty; ``0`` is a value.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, Sized):
        return len(value) == 0
    return False


class NotNullRule(BaseRule):
    """Fails only when the value is None."""

    default_message_key = "NotNull"

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if value is None:
            return self.fail(value, context)
        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "not_null"


class NotEmptyRule(BaseRule):
    """
    Validates that a value is present and not empty.

    This is the only rule (with NotNullRule) that fails on None; every
    shape rule treats a missing value as valid and leaves presence to it.
    """

    default_message_key = "NotEmpty"

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        """
        Validate that the value is not None, blank, or an empty container.

        Args:
            value: The property value to check
            context: Evaluation context

        Returns:
            Success, or a single NotEmpty failure
        """
        if is_empty(value):
            return self.fail(value, context)
        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "not_empty"


class EmptyRule(BaseRule):
    """Inverse of NotEmptyRule."""

    default_message_key = "Empty"

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if not is_empty(value):
            return self.fail(value, context)
        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "empty"
