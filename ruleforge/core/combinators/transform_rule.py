"""
TransformRule - maps the value before delegating to an inner rule.
"""

from collections.abc import Callable
from typing import Any

from ..models import ValidationContext, ValidationOutcome
from ..rules.base_rule import BaseRule


def trim_string(value: Any) -> Any:
    """Strip surrounding whitespace from strings; other values pass through."""
    return value.strip() if isinstance(value, str) else value


def lowercase(value: Any) -> Any:
    """Lower-case strings; other values pass through."""
    return value.lower() if isinstance(value, str) else value


class TransformRule(BaseRule):
    """
    Applies ``transformer`` to the incoming value, then evaluates ``inner``.

    The inner rule's failures are returned unchanged (message, severity, key);
    the owning chain roots them under the outer property's path.
    """

    def __init__(self, transformer: Callable[[Any], Any], inner: BaseRule):
        if not callable(transformer):
            raise ValueError("transformer must be callable")
        super().__init__()
        self.transformer = transformer
        self.inner = inner

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        return self.inner.evaluate(self.transformer(value), context)

    async def evaluate_async(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        return await self.inner.evaluate_async(self.transformer(value), context)

    @property
    def rule_type(self) -> str:
        return "transform"

    def __repr__(self) -> str:
        return f"TransformRule(inner={self.inner!r})"
