"""
PasswordRule - validates password strength.
"""

from typing import Any

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent


class PasswordRule(BaseRule):
    """
    Validates that a password meets the configured strength requirements.

    Every unmet requirement is listed in the {Problems} placeholder, joined
    with ". ", so one failure explains everything the user has to fix.

    Parameters:
    - min_length: Minimum number of characters
    - require_uppercase: At least one uppercase letter
    - require_lowercase: At least one lowercase letter
    - require_digit: At least one digit
    - require_special_character: At least one character that is neither a
      letter nor a digit
    """

    default_message_key = "Password"

    def __init__(
        self,
        min_length: int = 8,
        require_uppercase: bool = True,
        require_lowercase: bool = True,
        require_digit: bool = True,
        require_special_character: bool = True,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        if min_length < 0:
            raise ValueError(f"min_length must be non-negative, got {min_length}")
        super().__init__(error_message, severity=severity, error_code=error_code)
        self.min_length = min_length
        self.require_uppercase = require_uppercase
        self.require_lowercase = require_lowercase
        self.require_digit = require_digit
        self.require_special_character = require_special_character

    def problems(self, password: str) -> list[str]:
        """List the unmet requirements for ``password``, in a fixed order."""
        problems = []
        if len(password) < self.min_length:
            problems.append(f"Must be at least {self.min_length} characters long")
        if self.require_uppercase and not any(c.isupper() for c in password):
            problems.append("Must contain at least one uppercase letter")
        if self.require_lowercase and not any(c.islower() for c in password):
            problems.append("Must contain at least one lowercase letter")
        if self.require_digit and not any(c.isdigit() for c in password):
            problems.append("Must contain at least one digit")
        if self.require_special_character and all(c.isalnum() for c in password):
            problems.append("Must contain at least one special character")
        return problems

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if is_absent(value):
            return ValidationOutcome.success()

        problems = self.problems(str(value))
        if problems:
            return self.fail(value, context, Problems=". ".join(problems))

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "password"
