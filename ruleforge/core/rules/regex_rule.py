"""
RegexRule - validates values against a regular expression pattern.
"""

import re
from re import Pattern
from typing import Any

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent


class RegexRule(BaseRule):
    """
    Validates that a value matches a regular expression pattern.

    Parameters:
    - pattern: Regular expression pattern (string or compiled Pattern)
    - flags: Optional regex flags (e.g., re.IGNORECASE), only for string patterns

    The pattern is searched anywhere in the value; anchor it with ^ and $ to
    require a full match.
    """

    default_message_key = "Regex"

    def __init__(
        self,
        pattern: str | Pattern,
        flags: int = 0,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        super().__init__(error_message, severity=severity, error_code=error_code)

        if not pattern:
            raise ValueError("RegexRule requires a pattern")

        # Compile pattern
        try:
            if isinstance(pattern, str):
                self.pattern: Pattern = re.compile(pattern, flags)
            elif isinstance(pattern, Pattern):
                self.pattern = pattern
            else:
                raise ValueError(f"Pattern must be string or compiled Pattern, got {type(pattern)}")
        except re.error as e:
            raise ValueError(f"Invalid regex pattern: {e}")

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        """
        Validate that the value matches the pattern.

        Args:
            value: The value to check (non-strings are converted with str())
            context: Evaluation context

        Returns:
            Success, or a single format failure
        """
        # Skip validation for missing values (handled by NotEmptyRule)
        if is_absent(value):
            return ValidationOutcome.success()

        value_str = value if isinstance(value, str) else str(value)

        if not self.pattern.search(value_str):
            return self.fail(value, context, Pattern=self.pattern.pattern)

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "regex"
