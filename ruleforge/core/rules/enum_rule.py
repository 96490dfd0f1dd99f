"""
IsInEnumRule - validates that a value belongs to an Enum.
"""

from enum import Enum
from typing import Any

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent


class IsInEnumRule(BaseRule):
    """
    Validates that a value is a member of ``enum_type`` or one of its values.

    ``Color.RED`` and ``"red"`` both pass for ``class Color(str, Enum): RED = "red"``.
    """

    default_message_key = "Enum"

    def __init__(
        self,
        enum_type: type[Enum],
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        if not (isinstance(enum_type, type) and issubclass(enum_type, Enum)):
            raise ValueError(f"enum_type must be an Enum subclass, got {enum_type!r}")

        super().__init__(error_message, severity=severity, error_code=error_code)
        self.enum_type = enum_type

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if is_absent(value):
            return ValidationOutcome.success()

        if isinstance(value, self.enum_type):
            return ValidationOutcome.success()

        try:
            self.enum_type(value)
        except ValueError:
            return self.fail(value, context, EnumName=self.enum_type.__name__)

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "is_in_enum"
