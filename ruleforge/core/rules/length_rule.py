"""
LengthRule - validates string length is within bounds.
"""

from collections.abc import Sized
from typing import Any

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent


class LengthRule(BaseRule):
    """
    Validates that a string's length is within [min_length, max_length].

    Parameters:
    - min_length: Minimum number of characters (inclusive)
    - max_length: Maximum number of characters (inclusive), None for unbounded

    The default message follows the bounds: Length, MinLength (no maximum),
    MaxLength (minimum of zero) or ExactLength (equal bounds).
    """

    def __init__(
        self,
        min_length: int = 0,
        max_length: int | None = None,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        if min_length < 0:
            raise ValueError(f"min_length must be non-negative, got {min_length}")
        if max_length is not None and max_length < min_length:
            raise ValueError(f"max_length ({max_length}) must be greater than or equal to min_length ({min_length})")

        self.min_length = min_length
        self.max_length = max_length

        if max_length is None:
            self.default_message_key = "MinLength"
        elif min_length == max_length:
            self.default_message_key = "ExactLength"
        elif min_length == 0:
            self.default_message_key = "MaxLength"
        else:
            self.default_message_key = "Length"

        super().__init__(error_message, severity=severity, error_code=error_code)

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        """
        Validate the value's length.

        Args:
            value: The value to check (strings; other sized values use len())
            context: Evaluation context

        Returns:
            Success, or a single length failure
        """
        # Skip validation for missing values (handled by NotEmptyRule)
        if is_absent(value):
            return ValidationOutcome.success()

        length = len(value) if isinstance(value, Sized) else len(str(value))

        too_short = length < self.min_length
        too_long = self.max_length is not None and length > self.max_length
        if too_short or too_long:
            return self.fail(
                value,
                context,
                MinLength=self.min_length,
                MaxLength=self.max_length,
                TotalLength=length,
            )

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "length"
