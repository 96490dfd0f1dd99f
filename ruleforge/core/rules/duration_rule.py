"""
DurationRule - validates timedelta values against bounds.
"""

from datetime import timedelta
from typing import Any

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent


class DurationRule(BaseRule):
    """
    Validates a ``timedelta``.

    Checks run in order and the first one that fails is reported: zero
    (NonZeroDuration), negative (NonNegativeDuration), minimum (MinDuration),
    maximum (MaxDuration). Values that are not timedeltas fail with Duration.
    None and "" are valid.

    Parameters:
    - minimum: Smallest accepted duration (inclusive), None for unbounded
    - maximum: Largest accepted duration (inclusive), None for unbounded
    - allow_zero: Accept a zero duration
    - allow_negative: Accept negative durations
    """

    default_message_key = "Duration"

    def __init__(
        self,
        minimum: timedelta | None = None,
        maximum: timedelta | None = None,
        allow_zero: bool = True,
        allow_negative: bool = False,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        if minimum is not None and maximum is not None and minimum > maximum:
            raise ValueError(f"minimum ({minimum}) must not exceed maximum ({maximum})")
        super().__init__(error_message, severity=severity, error_code=error_code)
        self.minimum = minimum
        self.maximum = maximum
        self.allow_zero = allow_zero
        self.allow_negative = allow_negative

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if is_absent(value):
            return ValidationOutcome.success()

        if not isinstance(value, timedelta):
            return self.fail(value, context)
        if not self.allow_zero and value == timedelta(0):
            return self.fail(value, context, variant_key="NonZeroDuration")
        if not self.allow_negative and value < timedelta(0):
            return self.fail(value, context, variant_key="NonNegativeDuration")
        if self.minimum is not None and value < self.minimum:
            return self.fail(value, context, variant_key="MinDuration", MinDuration=self.minimum)
        if self.maximum is not None and value > self.maximum:
            return self.fail(value, context, variant_key="MaxDuration", MaxDuration=self.maximum)

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "duration"
