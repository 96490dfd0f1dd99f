"""
Base rule interface for all validation rules.

All rules inherit from BaseRule and implement the evaluate() method. A rule
checks one value and reports failures with paths relative to that value; the
property chain that owns the rule roots them under the property name.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..localization.message_formatter import MessageFormatter, format_template
from ..localization.messages import ENGLISH_MESSAGES
from ..models import Severity, ValidationContext, ValidationOutcome

DEFAULT_DISPLAY_NAME = "Value"


def is_absent(value: Any) -> bool:
    """
    Whether a value counts as "not provided" for shape rules.

    None and the empty string are absent. Whitespace-only strings and empty
    collections are present values; deciding whether they are acceptable is
    the job of NotEmptyRule.
    """
    return value is None or (isinstance(value, str) and value == "")


class BaseRule(ABC):
    """
    Abstract base class for all rules.

    Each rule implements a single testable condition over one value and
    exposes the same contract synchronously (``evaluate``) and
    asynchronously (``evaluate_async``). The default async path wraps the
    synchronous one, so purely synchronous rules behave identically on both.

    Attributes:
        error_message: Message template used when no keyed lookup applies
        message_key: Catalog key for localized messages (None when a custom message is set)
        message_formatter: Rule-level formatter taking precedence over the call's formatter
        severity: Severity of the failures this rule produces
        error_code: Optional machine-readable code copied onto failures
    """

    default_message_key: str = "Predicate"

    def __init__(
        self,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        """
        Initialize rule.

        Args:
            error_message: Custom message template; replaces the catalog message
            severity: Severity of produced failures
            error_code: Optional error code
        """
        if error_message:
            self.error_message = error_message
            self.message_key: str | None = None
        else:
            self.error_message = ENGLISH_MESSAGES.get(self.default_message_key, "{PropertyName} is invalid")
            self.message_key = self.default_message_key
        self.message_formatter: MessageFormatter | None = None
        self.severity = severity
        self.error_code = error_code

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Return the rule type identifier."""

    @abstractmethod
    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        """
        Evaluate the rule against a value.

        Args:
            value: The value to check
            context: Evaluation context (parent instance, formatter, display name)

        Returns:
            Outcome whose failure paths are relative to ``value``
        """

    async def evaluate_async(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        return self.evaluate(value, context)

    @property
    def has_custom_message(self) -> bool:
        """True once the message was replaced or re-keyed after construction."""
        return self.message_key != self.default_message_key

    def with_message(self, message: str) -> "BaseRule":
        self.error_message = message
        self.message_key = None
        return self

    def with_message_key(self, key: str) -> "BaseRule":
        self.message_key = key
        return self

    def format_message(
        self,
        value: Any,
        context: ValidationContext | None,
        variant_key: str | None = None,
        **placeholders: Any,
    ) -> tuple[str, str | None]:
        """
        Resolve the failure message for ``value``.

        Rules with several failure modes (e.g., Url vs HttpsUrl) pass
        ``variant_key``; it is only used while the rule still carries its
        default key, so custom messages always win.

        Returns:
            Tuple of (message, message key used)
        """
        context = context or ValidationContext()
        args = {
            "PropertyName": context.display_name or DEFAULT_DISPLAY_NAME,
            "PropertyValue": value,
            **placeholders,
        }

        key = self.message_key
        if variant_key and key == self.default_message_key:
            key = variant_key
        template = ENGLISH_MESSAGES.get(key, self.error_message) if key else self.error_message

        formatter = self.message_formatter or context.formatter
        if key and formatter is not None:
            return formatter.format_message(key, args), key
        return format_template(template, args), key

    def fail(
        self,
        value: Any,
        context: ValidationContext | None,
        variant_key: str | None = None,
        **placeholders: Any,
    ) -> ValidationOutcome:
        """Build a single-failure outcome for ``value``."""
        message, key = self.format_message(value, context, variant_key, **placeholders)
        return ValidationOutcome.failure(
            "",
            message,
            self.severity,
            message_key=key,
            error_code=self.error_code,
            attempted_value=value,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(severity={self.severity.value})"
