"""
ValidationOutcome model representing the result of evaluating a rule, a
property chain or a whole validator.
"""

from typing import Any

from pydantic import BaseModel, Field

from .enums import Severity
from .validation_failure import ValidationFailure


class ValidationOutcome(BaseModel):
    """
    Ordered list of failures produced by one evaluation.

    Outcomes are built once per evaluation call and merged upward; the only
    mutating operations are ``add_failure`` and ``merge``, both of which
    append and keep discovery order.

    Attributes:
        failures: Failures in the order they were discovered
    """

    failures: list[ValidationFailure] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True exactly when no failure was recorded, whatever its severity."""
        return not self.failures

    @property
    def error_message(self) -> str | None:
        """Message of the first failure, if any."""
        return self.failures[0].message if self.failures else None

    @classmethod
    def success(cls) -> "ValidationOutcome":
        return cls()

    @classmethod
    def failure(
        cls,
        property_path: str,
        message: str,
        severity: Severity = Severity.ERROR,
        **details: Any,
    ) -> "ValidationOutcome":
        """
        Create an outcome holding a single failure.

        Args:
            property_path: Path of the failing property
            message: Formatted failure message
            severity: Failure severity (default: error)
            **details: Extra ValidationFailure fields (message_key, error_code, attempted_value)
        """
        return cls(failures=[
            ValidationFailure(property_path=property_path, message=message, severity=severity, **details)
        ])

    @classmethod
    def combine(cls, *outcomes: "ValidationOutcome") -> "ValidationOutcome":
        """Concatenate failures in argument order. No de-duplication."""
        failures: list[ValidationFailure] = []
        for outcome in outcomes:
            failures.extend(outcome.failures)
        return cls(failures=failures)

    def add_failure(
        self,
        property_path: str,
        message: str,
        severity: Severity = Severity.ERROR,
        **details: Any,
    ) -> None:
        self.failures.append(
            ValidationFailure(property_path=property_path, message=message, severity=severity, **details)
        )

    def merge(self, other: "ValidationOutcome") -> "ValidationOutcome":
        """Append the failures of ``other`` to this outcome in place."""
        self.failures.extend(other.failures)
        return self

    def with_path_prefix(self, prefix: str) -> "ValidationOutcome":
        """Return a new outcome with every failure rooted under ``prefix``."""
        if not prefix or not self.failures:
            return ValidationOutcome(failures=list(self.failures))
        return ValidationOutcome(failures=[f.with_path_prefix(prefix) for f in self.failures])

    def by_severity(self, *severities: Severity) -> list[ValidationFailure]:
        return [f for f in self.failures if f.severity in severities]

    @property
    def has_errors(self) -> bool:
        """True when at least one failure has ERROR severity."""
        return any(f.severity is Severity.ERROR for f in self.failures)

    def group_by_property(self) -> dict[str, list[str]]:
        """
        Group failure messages by property path, keeping first-seen order.

        Returns:
            Mapping of property path to its messages
        """
        grouped: dict[str, list[str]] = {}
        for failure in self.failures:
            grouped.setdefault(failure.property_path, []).append(failure.message)
        return grouped

    def __str__(self) -> str:
        if self.is_valid:
            return "Validation succeeded"
        return "\n".join(str(f) for f in self.failures)

    class Config:
        json_schema_extra = {
            "example": {
                "failures": [
                    {
                        "property_path": "first_name",
                        "message": "first_name must not be empty",
                        "severity": "error",
                        "message_key": "NotEmpty",
                    },
                    {
                        "property_path": "address.city",
                        "message": "city must be between 2 and 50 characters",
                        "severity": "error",
                        "message_key": "Length",
                    },
                ]
            }
        }
