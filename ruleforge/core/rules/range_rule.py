"""
BetweenRule - validates values are within a specified range.
"""

from typing import Any

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent


class BetweenRule(BaseRule):
    """
    Validates that a value is within a range using its natural ordering.

    Parameters:
    - lower: Lower bound, None for unbounded
    - upper: Upper bound, None for unbounded
    - lower_inclusive: Whether the lower bound itself is allowed (default: True)
    - upper_inclusive: Whether the upper bound itself is allowed (default: True)

    Works for anything comparable with ``<`` (numbers, dates, strings, Decimals).
    """

    def __init__(
        self,
        lower: Any = None,
        upper: Any = None,
        lower_inclusive: bool = True,
        upper_inclusive: bool = True,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        # Validate that at least one boundary is specified
        if lower is None and upper is None:
            raise ValueError("BetweenRule requires at least one of: lower, upper")
        if lower is not None and upper is not None and upper < lower:
            raise ValueError(f"upper ({upper}) must be greater than or equal to lower ({lower})")

        self.lower = lower
        self.upper = upper
        self.lower_inclusive = lower_inclusive
        self.upper_inclusive = upper_inclusive

        both_bounds = lower is not None and upper is not None
        if both_bounds and lower_inclusive and upper_inclusive:
            self.default_message_key = "InclusiveBetween"
        elif both_bounds and not lower_inclusive and not upper_inclusive:
            self.default_message_key = "ExclusiveBetween"
        else:
            self.default_message_key = "Between"

        super().__init__(error_message, severity=severity, error_code=error_code)

    @property
    def range_description(self) -> str:
        """Interval notation for the configured bounds, e.g. ``[1, 10)``."""
        left = ("[" if self.lower_inclusive else "(") if self.lower is not None else "("
        right = ("]" if self.upper_inclusive else ")") if self.upper is not None else ")"
        lower = "-inf" if self.lower is None else self.lower
        upper = "inf" if self.upper is None else self.upper
        return f"{left}{lower}, {upper}{right}"

    def is_in_range(self, value: Any) -> bool:
        if self.lower is not None:
            if self.lower_inclusive and value < self.lower:
                return False
            if not self.lower_inclusive and value <= self.lower:
                return False

        if self.upper is not None:
            if self.upper_inclusive and value > self.upper:
                return False
            if not self.upper_inclusive and value >= self.upper:
                return False

        return True

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        """
        Validate that the value is within the range.

        Args:
            value: The value to check
            context: Evaluation context

        Returns:
            Success, or a single range failure
        """
        # Skip validation for missing values (handled by NotEmptyRule)
        if is_absent(value):
            return ValidationOutcome.success()

        if not self.is_in_range(value):
            return self.fail(value, context, From=self.lower, To=self.upper, Range=self.range_description)

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "between"
