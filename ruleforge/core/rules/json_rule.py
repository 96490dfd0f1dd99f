"""
JsonRule - validates that a string holds well-formed JSON.
"""

import json
from typing import Any

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent


def json_depth(document: Any) -> int:
    """Nesting depth of a parsed document: scalars are 0, each container adds 1."""
    if isinstance(document, dict):
        return 1 + max((json_depth(item) for item in document.values()), default=0)
    if isinstance(document, list):
        return 1 + max((json_depth(item) for item in document), default=0)
    return 0


class JsonRule(BaseRule):
    """
    Validates that a string parses as JSON.

    Parameters:
    - require_object: The document must be a JSON object
    - require_array: The document must be a JSON array
    - max_depth: Maximum nesting depth, None for unbounded

    Failures use Json (not parseable), JsonObject, JsonArray or JsonDepth.
    Non-string values fail as not parseable.
    """

    default_message_key = "Json"

    def __init__(
        self,
        require_object: bool = False,
        require_array: bool = False,
        max_depth: int | None = None,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        if require_object and require_array:
            raise ValueError("require_object and require_array are mutually exclusive")
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        super().__init__(error_message, severity=severity, error_code=error_code)
        self.require_object = require_object
        self.require_array = require_array
        self.max_depth = max_depth

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if is_absent(value):
            return ValidationOutcome.success()

        if not isinstance(value, (str, bytes, bytearray)):
            return self.fail(value, context)
        try:
            document = json.loads(value)
        except ValueError:
            return self.fail(value, context)

        if self.require_object and not isinstance(document, dict):
            return self.fail(value, context, variant_key="JsonObject")
        if self.require_array and not isinstance(document, list):
            return self.fail(value, context, variant_key="JsonArray")
        if self.max_depth is not None and json_depth(document) > self.max_depth:
            return self.fail(value, context, variant_key="JsonDepth", MaxDepth=self.max_depth)

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "json"
