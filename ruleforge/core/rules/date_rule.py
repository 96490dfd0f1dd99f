"""
DateRule - validates dates and datetimes against the clock or a fixed moment.
"""

from collections.abc import Callable
from datetime import date, datetime
from enum import Enum
from typing import Any

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent


class DateRuleType(str, Enum):
    """Date checks and their catalog keys."""

    FUTURE = "Future"
    FUTURE_OR_PRESENT = "FutureOrPresent"
    PAST = "Past"
    PAST_OR_PRESENT = "PastOrPresent"
    AFTER = "After"
    AFTER_OR_EQUAL = "AfterOrEqual"
    BEFORE = "Before"
    BEFORE_OR_EQUAL = "BeforeOrEqual"


_RELATIVE_TO_NOW = {
    DateRuleType.FUTURE,
    DateRuleType.FUTURE_OR_PRESENT,
    DateRuleType.PAST,
    DateRuleType.PAST_OR_PRESENT,
}


class DateRule(BaseRule):
    """
    Validates a ``date`` or ``datetime`` value.

    Parameters:
    - rule_type: Which check to perform (see DateRuleType)
    - comparison_value: The fixed moment for After/Before checks
    - clock: Callable returning "now"; defaults to ``datetime.now`` in the
      value's own timezone (naive values compare against naive local time)

    Plain ``date`` values are compared against ``clock().date()``.
    """

    def __init__(
        self,
        date_rule_type: DateRuleType,
        comparison_value: date | None = None,
        error_message: str | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        self.date_rule_type = DateRuleType(date_rule_type)
        if self.date_rule_type in _RELATIVE_TO_NOW:
            if comparison_value is not None:
                raise ValueError(f"{self.date_rule_type.value} checks compare against the clock, not a fixed value")
        elif comparison_value is None:
            raise ValueError(f"{self.date_rule_type.value} checks require a comparison_value")

        self.comparison_value = comparison_value
        self.clock = clock
        self.default_message_key = self.date_rule_type.value
        super().__init__(error_message, severity=severity, error_code=error_code)

    def _now(self, value: date) -> date:
        if self.clock is not None:
            now = self.clock()
        elif isinstance(value, datetime) and value.tzinfo is not None:
            now = datetime.now(tz=value.tzinfo)
        else:
            now = datetime.now()

        if not isinstance(value, datetime) and isinstance(now, datetime):
            return now.date()
        return now

    def _reference(self, value: date) -> date:
        if self.date_rule_type in _RELATIVE_TO_NOW:
            return self._now(value)
        return self.comparison_value

    def _passes(self, value: date, reference: date) -> bool:
        kind = self.date_rule_type
        if kind in (DateRuleType.FUTURE, DateRuleType.AFTER):
            return value > reference
        if kind in (DateRuleType.FUTURE_OR_PRESENT, DateRuleType.AFTER_OR_EQUAL):
            return value >= reference
        if kind in (DateRuleType.PAST, DateRuleType.BEFORE):
            return value < reference
        return value <= reference

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        """
        Validate the date.

        Args:
            value: A ``date`` or ``datetime``
            context: Evaluation context

        Returns:
            Success, or a single date failure (also for non-date values)

        Raises:
            TypeError: If naive and aware datetimes are mixed
        """
        if is_absent(value):
            return ValidationOutcome.success()

        if not isinstance(value, date):
            return self.fail(value, context, ComparisonValue=self.comparison_value)

        reference = self._reference(value)
        if not self._passes(value, reference):
            return self.fail(value, context, ComparisonValue=reference)

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return self.date_rule_type.name.lower()
