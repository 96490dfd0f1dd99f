"""
PropertyRuleChain - the rules declared for one property of a validated type.
"""

import keyword
from collections.abc import Callable, Mapping
from typing import Any

from ..errors import InvalidPropertyExpressionError
from ..models import CascadeMode, ValidationContext, ValidationOutcome
from ..rules.base_rule import BaseRule


def attribute_accessor(name: str) -> Callable[[Any], Any]:
    """
    Build an accessor reading ``name`` from an instance.

    Mappings are read with ``.get`` (a missing key is None); any other object
    with ``getattr``, so a misspelled attribute raises AttributeError.
    """
    def accessor(instance: Any) -> Any:
        if isinstance(instance, Mapping):
            return instance.get(name)
        return getattr(instance, name)

    accessor.__name__ = f"get_{name}"
    return accessor


def resolve_property(expression: str | Callable[[Any], Any], name: str | None = None) -> tuple[str, Callable[[Any], Any]]:
    """
    Turn a property expression into (property name, accessor).

    Args:
        expression: An attribute name ("first_name") or a callable taking the instance
        name: Property name; required for callables, overrides the attribute name otherwise

    Returns:
        Tuple of (name used in failure paths, accessor)

    Raises:
        InvalidPropertyExpressionError: If the expression is not a simple member access
    """
    if isinstance(expression, str):
        if not expression.isidentifier() or keyword.iskeyword(expression):
            raise InvalidPropertyExpressionError(
                f"Property expression '{expression}' is not a simple member access"
            )
        return name or expression, attribute_accessor(expression)

    if callable(expression):
        if not name:
            raise InvalidPropertyExpressionError(
                "A property name is required when the property is selected with a callable"
            )
        return name, expression

    raise InvalidPropertyExpressionError(
        f"Property expression must be an attribute name or a callable, got {type(expression).__name__}"
    )


class PropertyRuleChain:
    """
    Ordered rules bound to one property.

    Evaluation runs Gate -> Extract -> RunRules -> Accumulate:
    every condition must hold for the parent instance, the value is read
    fresh from the instance, rules run in declaration order and their
    failures are rooted under the property name.

    Chains are built once while a validator is set up and are never mutated
    by evaluation, so one chain can serve concurrent validate calls.

    Attributes:
        property_name: Name used as the path prefix of failures
        accessor: Callable reading the property from the parent instance
        display_name: Name shown in messages ({PropertyName})
        cascade_mode: Chain-level cascade; None defers to the validator
        conditions: (predicate, invert) pairs, all of which must pass
        rules: Rules in declaration order
    """

    def __init__(
        self,
        property_name: str,
        accessor: Callable[[Any], Any],
        display_name: str | None = None,
        cascade_mode: CascadeMode | None = None,
    ):
        self.property_name = property_name
        self.accessor = accessor
        self.display_name = display_name or property_name
        self.cascade_mode = cascade_mode
        self.conditions: list[tuple[Callable[[Any], bool], bool]] = []
        self.rules: list[BaseRule] = []

    def add_rule(self, rule: BaseRule) -> None:
        self.rules.append(rule)

    def add_condition(self, predicate: Callable[[Any], bool], invert: bool = False) -> None:
        if not callable(predicate):
            raise ValueError("predicate must be callable")
        self.conditions.append((predicate, invert))

    def should_evaluate(self, instance: Any) -> bool:
        """Return True when every condition holds for ``instance``."""
        return all(bool(predicate(instance)) != invert for predicate, invert in self.conditions)

    def _prepare(
        self,
        instance: Any,
        context: ValidationContext | None,
        mode: CascadeMode,
    ) -> tuple[Any, ValidationContext]:
        base = context or ValidationContext(instance=instance)
        return self.accessor(instance), base.for_property(self.display_name, cascade_mode=mode)

    def _mode(self, cascade_mode: CascadeMode | None, context: ValidationContext | None) -> CascadeMode:
        if context is not None and context.stop_forced:
            return CascadeMode.STOP_ON_FIRST_FAILURE
        return cascade_mode or self.cascade_mode or CascadeMode.CONTINUE

    def evaluate(
        self,
        instance: Any,
        context: ValidationContext | None = None,
        cascade_mode: CascadeMode | None = None,
    ) -> ValidationOutcome:
        """
        Evaluate the chain against one parent instance.

        Args:
            instance: The parent object
            context: Call context (formatter, shared data); created when omitted
            cascade_mode: Effective cascade resolved by the validator; falls
                back to the chain's own mode, then CONTINUE

        Returns:
            Outcome with paths rooted under the property name
        """
        result = ValidationOutcome.success()
        if not self.should_evaluate(instance):
            return result

        mode = self._mode(cascade_mode, context)
        value, property_context = self._prepare(instance, context, mode)
        stop_on_failure = mode is CascadeMode.STOP_ON_FIRST_FAILURE

        for rule in self.rules:
            outcome = rule.evaluate(value, property_context)
            result.merge(outcome.with_path_prefix(self.property_name))
            if stop_on_failure and not outcome.is_valid:
                break

        return result

    async def evaluate_async(
        self,
        instance: Any,
        context: ValidationContext | None = None,
        cascade_mode: CascadeMode | None = None,
    ) -> ValidationOutcome:
        result = ValidationOutcome.success()
        if not self.should_evaluate(instance):
            return result

        mode = self._mode(cascade_mode, context)
        value, property_context = self._prepare(instance, context, mode)
        stop_on_failure = mode is CascadeMode.STOP_ON_FIRST_FAILURE

        for rule in self.rules:
            outcome = await rule.evaluate_async(value, property_context)
            result.merge(outcome.with_path_prefix(self.property_name))
            if stop_on_failure and not outcome.is_valid:
                break

        return result

    def __repr__(self) -> str:
        return f"PropertyRuleChain({self.property_name!r}, rules={len(self.rules)}, conditions={len(self.conditions)})"
