"""
EmailRule - permissive email address format check.
"""

import re

from ..models import Severity
from .regex_rule import RegexRule

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", re.IGNORECASE)


class EmailRule(RegexRule):
    """
    Validates that a string looks like an email address.

    Intentionally permissive: one "@", no whitespace, and a dot in the
    domain part. It does not attempt RFC 5322 compliance.
    """

    default_message_key = "Email"

    def __init__(
        self,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        super().__init__(EMAIL_PATTERN, error_message=error_message, severity=severity, error_code=error_code)

    @property
    def rule_type(self) -> str:
        return "email"
