"""
UuidRule - validates UUID strings.
"""

import uuid
from typing import Any

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent


class UuidRule(BaseRule):
    """
    Validates that a value is a UUID (a ``uuid.UUID`` or its string form).

    Parameters:
    - allow_nil: Accept the all-zero UUID (default: False)
    """

    default_message_key = "Uuid"

    def __init__(
        self,
        allow_nil: bool = False,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        super().__init__(error_message, severity=severity, error_code=error_code)
        self.allow_nil = allow_nil

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if is_absent(value):
            return ValidationOutcome.success()

        if isinstance(value, uuid.UUID):
            parsed = value
        else:
            try:
                parsed = uuid.UUID(str(value).strip())
            except ValueError:
                return self.fail(value, context)

        if not self.allow_nil and parsed.int == 0:
            return self.fail(value, context, variant_key="NilUuid")

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "uuid"
