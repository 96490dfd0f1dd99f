"""
ChildValidatorRule - delegates a nested object to its own Validator.
"""

from typing import TYPE_CHECKING, Any

from ..models import ValidationContext, ValidationOutcome
from ..rules.base_rule import BaseRule

if TYPE_CHECKING:
    from ..engine.validator import Validator


class ChildValidatorRule(BaseRule):
    """
    Validates the value with a nested validator.

    The nested validator is shared, not owned: build it fully before handing
    it over. Its failures already carry paths relative to the child object,
    so this rule adds no segment of its own; the owning chain (or a
    surrounding CollectionRule) supplies the prefix. A None child is valid.
    The caller's formatter is passed down so nested messages use the same
    locale. The nested validator is evaluated without logging or metrics of
    its own; only the outermost validate call is recorded.
    """

    def __init__(self, validator: "Validator", rule_set: str | None = None):
        if validator is None:
            raise ValueError("ChildValidatorRule requires a validator")
        super().__init__()
        self.validator = validator
        self.rule_set = rule_set

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if value is None:
            return ValidationOutcome.success()
        formatter = context.formatter if context else None
        return self.validator.evaluate(value, rule_set=self.rule_set, formatter=formatter)

    async def evaluate_async(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if value is None:
            return ValidationOutcome.success()
        formatter = context.formatter if context else None
        return await self.validator.evaluate_async(value, rule_set=self.rule_set, formatter=formatter)

    @property
    def rule_type(self) -> str:
        return "child_validator"

    def __repr__(self) -> str:
        return f"ChildValidatorRule(validator={self.validator.name!r})"
