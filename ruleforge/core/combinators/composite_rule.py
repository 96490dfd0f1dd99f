"""
CompositeRule - AND / OR over a list of sub-rules.
"""

from typing import Any

from ..models import CompositeOperator, Severity, ValidationContext, ValidationOutcome
from ..rules.base_rule import BaseRule


class CompositeRule(BaseRule):
    """
    Combines sub-rules with AND or OR.

    Policy:
    - AND evaluates sub-rules in order and stops at the first failure, which
      is returned as-is.
    - OR stops at the first success; when every sub-rule fails, the first
      failure is returned.

    When the composite itself was given a message (``with_message`` or a
    non-default key), a single failure with that message replaces the
    sub-rule failure.
    """

    def __init__(
        self,
        rules: list[BaseRule],
        operator: CompositeOperator = CompositeOperator.AND,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        if not rules:
            raise ValueError("CompositeRule requires at least one sub-rule")

        self.rules = list(rules)
        self.operator = CompositeOperator(operator)
        self.default_message_key = "AllOf" if self.operator is CompositeOperator.AND else "AnyOf"
        super().__init__(error_message, severity=severity, error_code=error_code)

    def _failed(self, value: Any, context: ValidationContext | None, outcome: ValidationOutcome) -> ValidationOutcome:
        if self.has_custom_message:
            return self.fail(value, context)
        return outcome

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        first_failure: ValidationOutcome | None = None
        for rule in self.rules:
            outcome = rule.evaluate(value, context)
            if self.operator is CompositeOperator.AND and not outcome.is_valid:
                return self._failed(value, context, outcome)
            if self.operator is CompositeOperator.OR:
                if outcome.is_valid:
                    return ValidationOutcome.success()
                first_failure = first_failure or outcome

        if first_failure is not None:
            return self._failed(value, context, first_failure)
        return ValidationOutcome.success()

    async def evaluate_async(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        first_failure: ValidationOutcome | None = None
        for rule in self.rules:
            outcome = await rule.evaluate_async(value, context)
            if self.operator is CompositeOperator.AND and not outcome.is_valid:
                return self._failed(value, context, outcome)
            if self.operator is CompositeOperator.OR:
                if outcome.is_valid:
                    return ValidationOutcome.success()
                first_failure = first_failure or outcome

        if first_failure is not None:
            return self._failed(value, context, first_failure)
        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "all_of" if self.operator is CompositeOperator.AND else "any_of"

    def __repr__(self) -> str:
        return f"CompositeRule({self.operator.value}, rules={self.rules!r})"
