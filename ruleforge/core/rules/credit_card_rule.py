"""
CreditCardRule - validates card numbers with a brand pattern and the Luhn checksum.
"""

import re
from typing import Any

from ..models import ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent

MIN_CARD_DIGITS = 13
MAX_CARD_DIGITS = 19

# Visa, Mastercard, Amex, Diners Club, Discover, JCB
CARD_BRAND_PATTERN = re.compile(
    r"^(?:4[0-9]{12}(?:[0-9]{3})?"
    r"|5[1-5][0-9]{14}"
    r"|3[47][0-9]{13}"
    r"|3(?:0[0-5]|[68][0-9])[0-9]{11}"
    r"|6(?:011|5[0-9]{2})[0-9]{12}"
    r"|(?:2131|1800|35\d{3})\d{11})$"
)


def luhn_checksum_valid(digits: str) -> bool:
    """
    Apply the Luhn checksum to a string of digits.

    Walking right to left, every second digit is doubled (minus 9 when the
    result exceeds 9); the number is valid when the digit sum is a multiple
    of 10.
    """
    total = 0
    double = False
    for char in reversed(digits):
        digit = int(char)
        if double:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
        double = not double
    return total % 10 == 0


class CreditCardRule(BaseRule):
    """
    Validates credit card numbers.

    Separators (spaces, dashes) are ignored. The remaining digits must be
    13-19 long, match a known card brand layout and pass the Luhn check.
    """

    default_message_key = "CreditCard"

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if is_absent(value):
            return ValidationOutcome.success()

        digits = re.sub(r"\D", "", str(value))

        if not MIN_CARD_DIGITS <= len(digits) <= MAX_CARD_DIGITS:
            return self.fail(value, context)
        if not CARD_BRAND_PATTERN.match(digits):
            return self.fail(value, context)
        if not luhn_checksum_valid(digits):
            return self.fail(value, context)

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "credit_card"
