"""
RuleDefinition model representing one declaratively configured rule.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from .enums import Severity

RuleType = Literal[
    "not_null",
    "not_empty",
    "empty",
    "length",
    "min_length",
    "max_length",
    "exact_length",
    "regex",
    "email",
    "credit_card",
    "between",
    "inclusive_between",
    "exclusive_between",
    "greater_than",
    "greater_than_or_equal",
    "less_than",
    "less_than_or_equal",
    "equal",
    "not_equal",
    "url",
    "phone_number",
    "ip_address",
    "uuid",
    "future",
    "future_or_present",
    "past",
    "past_or_present",
    "after",
    "after_or_equal",
    "before",
    "before_or_equal",
    "min_count",
    "max_count",
    "exact_count",
    "unique",
    "precision_scale",
    "password",
    "json",
    "file_extension",
    "duration",
    "color",
    "for_each",
]


class RuleDefinition(BaseModel):
    """
    A configurable rule declared for one property in a rule file.

    Attributes:
        type: Rule type ("not_empty", "length", "regex", "for_each", ...)
        name: Optional human-readable rule name (used in logs)
        params: Rule-specific parameters (e.g., {"min_length": 2, "max_length": 50})
        severity: Severity of the failures this rule produces
        message: Custom message template overriding the default
        message_key: Catalog key for localized messages
        error_code: Machine-readable error code
        enabled: Whether the rule is active
        items: Item rules, only for type "for_each"
    """

    type: RuleType
    name: str | None = None
    params: dict[str, Any] = Field(default_factory=dict)
    severity: Severity = Severity.ERROR
    message: str | None = None
    message_key: str | None = None
    error_code: str | None = None
    enabled: bool = True
    items: list["RuleDefinition"] | None = None

    @field_validator("params", mode="before")
    @classmethod
    def default_params(cls, v):
        """Treat an explicit null params block as no parameters."""
        return v or {}

    @model_validator(mode="after")
    def check_items_consistency(self):
        """Validate that item rules are given to for_each and only to for_each, which carries no options itself."""
        if self.items is not None and self.type != "for_each":
            raise ValueError(f"'items' is only allowed for 'for_each' rules, not '{self.type}'")
        if self.type == "for_each" and not self.items:
            raise ValueError("'for_each' rules require a non-empty 'items' list")
        if self.type == "for_each" and (
            self.message or self.message_key or self.error_code or self.severity is not Severity.ERROR
        ):
            raise ValueError(
                "'for_each' rules take no message, message_key, error_code or severity; set them on the item rules"
            )
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "type": "length",
                "name": "first_name_length",
                "params": {"min_length": 2, "max_length": 50},
                "severity": "error",
                "message": None,
                "enabled": True,
            }
        }


RuleDefinition.model_rebuild()
