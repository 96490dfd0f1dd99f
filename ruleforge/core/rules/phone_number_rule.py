"""
PhoneNumberRule - loose international phone number check.
"""

import re
from typing import Any

from ..models import ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent

PHONE_PATTERN = re.compile(r"^\+?([0-9\s\-\(\)]{10,})$")
MIN_PHONE_DIGITS = 10
MAX_PHONE_DIGITS = 15


class PhoneNumberRule(BaseRule):
    """
    Validates phone numbers such as ``+90 (212) 555-1234``.

    An optional leading "+", then digits, spaces, dashes and parentheses;
    the number must carry between 10 and 15 digits.
    """

    default_message_key = "PhoneNumber"

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if is_absent(value):
            return ValidationOutcome.success()

        text = str(value).strip()
        if not PHONE_PATTERN.match(text):
            return self.fail(value, context)

        digit_count = sum(1 for c in text if c.isdigit())
        if not MIN_PHONE_DIGITS <= digit_count <= MAX_PHONE_DIGITS:
            return self.fail(value, context)

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "phone_number"
