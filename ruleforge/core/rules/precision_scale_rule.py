"""
PrecisionScaleRule - validates decimal precision and scale.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent


def digits_and_scale(value: Decimal) -> tuple[int, int]:
    """
    Return (total significant digits, digits after the decimal point).

    Trailing zeros after the decimal point are ignored, so ``Decimal("1.50")``
    has scale 1.
    """
    normalized = value.normalize()
    _, digits, exponent = normalized.as_tuple()
    if exponent >= 0:
        return len(digits) + exponent, 0
    scale = -exponent
    return max(len(digits), scale), scale


class PrecisionScaleRule(BaseRule):
    """
    Validates that a number fits a SQL-style ``DECIMAL(precision, scale)``.

    Parameters:
    - precision: Maximum number of digits in total
    - scale: Maximum number of digits after the decimal point

    At most ``precision - scale`` digits may precede the decimal point, so
    ``1234.5`` does not fit ``DECIMAL(5, 2)``.

    Floats are converted through ``str`` so ``0.1`` counts as one decimal.
    """

    default_message_key = "PrecisionScale"

    def __init__(
        self,
        precision: int,
        scale: int,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        if precision <= 0:
            raise ValueError(f"precision must be positive, got {precision}")
        if scale < 0:
            raise ValueError(f"scale must be non-negative, got {scale}")
        if scale > precision:
            raise ValueError(f"scale ({scale}) must not exceed precision ({precision})")

        super().__init__(error_message, severity=severity, error_code=error_code)
        self.precision = precision
        self.scale = scale

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if is_absent(value):
            return ValidationOutcome.success()

        try:
            number = value if isinstance(value, Decimal) else Decimal(str(value))
        except InvalidOperation:
            return self.fail(value, context, Precision=self.precision, Scale=self.scale)

        if not number.is_finite():
            return self.fail(value, context, Precision=self.precision, Scale=self.scale)

        total_digits, actual_scale = digits_and_scale(number)
        integer_digits = total_digits - actual_scale
        if actual_scale > self.scale or integer_digits > self.precision - self.scale:
            return self.fail(
                value,
                context,
                Precision=self.precision,
                Scale=self.scale,
                Digits=total_digits,
                ActualScale=actual_scale,
            )

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "precision_scale"
