"""
Comparison rules - ordering (GreaterThan, LessThan, ...) and equality.
"""

import operator
from collections.abc import Callable
from enum import Enum
from typing import Any

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent


class Comparison(str, Enum):
    """Ordering comparisons and their catalog keys."""

    GREATER_THAN = "GreaterThan"
    GREATER_THAN_OR_EQUAL = "GreaterThanOrEqual"
    LESS_THAN = "LessThan"
    LESS_THAN_OR_EQUAL = "LessThanOrEqual"


_OPERATORS: dict[Comparison, Callable[[Any, Any], bool]] = {
    Comparison.GREATER_THAN: operator.gt,
    Comparison.GREATER_THAN_OR_EQUAL: operator.ge,
    Comparison.LESS_THAN: operator.lt,
    Comparison.LESS_THAN_OR_EQUAL: operator.le,
}


class ComparisonRule(BaseRule):
    """
    Compares the value against a fixed operand.

    Parameters:
    - comparison: Which ordering to enforce
    - value_to_compare: The operand on the right-hand side
    """

    def __init__(
        self,
        comparison: Comparison,
        value_to_compare: Any,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        if value_to_compare is None:
            raise ValueError("ComparisonRule requires a value to compare against")

        self.comparison = Comparison(comparison)
        self.value_to_compare = value_to_compare
        self.default_message_key = self.comparison.value
        super().__init__(error_message, severity=severity, error_code=error_code)

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if is_absent(value):
            return ValidationOutcome.success()

        if not _OPERATORS[self.comparison](value, self.value_to_compare):
            return self.fail(value, context, ComparisonValue=self.value_to_compare)

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return self.comparison.name.lower()


class EqualRule(BaseRule):
    """
    Validates that the value equals an expected value.

    Parameters:
    - value_to_compare: Expected value
    - comparer: Optional callable (value, expected) -> bool replacing ``==``

    Unlike shape rules, equality has no absent shortcut: ``None`` is compared
    like any other value.
    """

    default_message_key = "Equal"
    negate = False

    def __init__(
        self,
        value_to_compare: Any,
        comparer: Callable[[Any, Any], bool] | None = None,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        super().__init__(error_message, severity=severity, error_code=error_code)
        self.value_to_compare = value_to_compare
        self.comparer = comparer or operator.eq

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        equal = bool(self.comparer(value, self.value_to_compare))
        if equal == self.negate:
            return self.fail(value, context, ComparisonValue=self.value_to_compare)
        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "equal"


class NotEqualRule(EqualRule):
    """Validates that the value differs from a forbidden value."""

    default_message_key = "NotEqual"
    negate = True

    @property
    def rule_type(self) -> str:
        return "not_equal"
