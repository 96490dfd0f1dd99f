"""
Collection size rules - CountRule and UniqueRule.
"""

from collections.abc import Iterable
from enum import Enum
from typing import Any

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule


class CountRuleType(str, Enum):
    """Count checks and their catalog keys."""

    MIN = "MinCount"
    MAX = "MaxCount"
    EXACT = "ExactCount"


class CountRule(BaseRule):
    """
    Validates the number of items in a collection.

    A None collection is valid; pair with NotEmptyRule or NotNullRule when the
    collection itself is required.
    """

    def __init__(
        self,
        count_rule_type: CountRuleType,
        count: int,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")

        self.count_rule_type = CountRuleType(count_rule_type)
        self.count = count
        self.default_message_key = self.count_rule_type.value
        super().__init__(error_message, severity=severity, error_code=error_code)

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if value is None:
            return ValidationOutcome.success()

        actual = len(value) if hasattr(value, "__len__") else sum(1 for _ in value)

        if self.count_rule_type is CountRuleType.MIN:
            valid = actual >= self.count
        elif self.count_rule_type is CountRuleType.MAX:
            valid = actual <= self.count
        else:
            valid = actual == self.count

        if not valid:
            return self.fail(value, context, Count=self.count, TotalCount=actual)
        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return self.count_rule_type.name.lower() + "_count"


def has_duplicates(items: Iterable[Any]) -> bool:
    """Whether ``items`` holds equal elements; unhashable items fall back to ``==``."""
    seen_hashable: set[Any] = set()
    seen_other: list[Any] = []
    for item in items:
        try:
            if item in seen_hashable:
                return True
            seen_hashable.add(item)
        except TypeError:
            if item in seen_other:
                return True
            seen_other.append(item)
    return False


class UniqueRule(BaseRule):
    """Validates that a collection holds no duplicate items."""

    default_message_key = "Unique"

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if value is None:
            return ValidationOutcome.success()

        if has_duplicates(value):
            return self.fail(value, context)
        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "unique"
