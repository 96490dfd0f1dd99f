"""
UrlRule - validates absolute URLs, optionally requiring HTTPS.
"""

from typing import Any
from urllib.parse import urlparse

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent


class UrlRule(BaseRule):
    """
    Validates that a string is an absolute URL (scheme and host present).

    Parameters:
    - require_https: Reject URLs whose scheme is not ``https``
    """

    default_message_key = "Url"

    def __init__(
        self,
        require_https: bool = False,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        super().__init__(error_message, severity=severity, error_code=error_code)
        self.require_https = require_https

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if is_absent(value):
            return ValidationOutcome.success()

        text = str(value)
        try:
            parsed = urlparse(text)
        except ValueError:
            return self.fail(value, context)

        if not parsed.scheme or not parsed.netloc or any(c.isspace() for c in text):
            return self.fail(value, context)

        if self.require_https and parsed.scheme.lower() != "https":
            return self.fail(value, context, variant_key="HttpsUrl")

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "url"
