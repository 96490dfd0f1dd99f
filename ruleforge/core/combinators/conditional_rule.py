"""
ConditionalRule - gates an inner rule on a predicate over the parent instance.
"""

from collections.abc import Callable
from typing import Any

from ..models import ValidationContext, ValidationOutcome
from ..rules.base_rule import BaseRule


class ConditionalRule(BaseRule):
    """
    Runs ``inner`` only when ``predicate(instance)`` holds.

    The predicate sees the parent instance (``context.instance``), never the
    property value. ``invert=True`` turns When into Unless. When the gate is
    closed the inner rule is not invoked at all.
    """

    def __init__(self, inner: BaseRule, predicate: Callable[[Any], bool], invert: bool = False):
        if not callable(predicate):
            raise ValueError("predicate must be callable")
        super().__init__()
        self.inner = inner
        self.predicate = predicate
        self.invert = invert

    def should_apply(self, context: ValidationContext | None) -> bool:
        instance = context.instance if context else None
        return bool(self.predicate(instance)) != self.invert

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if not self.should_apply(context):
            return ValidationOutcome.success()
        return self.inner.evaluate(value, context)

    async def evaluate_async(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if not self.should_apply(context):
            return ValidationOutcome.success()
        return await self.inner.evaluate_async(value, context)

    @property
    def rule_type(self) -> str:
        return "unless" if self.invert else "when"

    def __repr__(self) -> str:
        return f"ConditionalRule({self.rule_type}, inner={self.inner!r})"
