"""
CollectionRule - applies item rules to every element of a sequence.
"""

from collections.abc import Iterable
from typing import Any

from ..models import CascadeMode, ValidationContext, ValidationOutcome
from ..rules.base_rule import DEFAULT_DISPLAY_NAME, BaseRule


class CollectionRule(BaseRule):
    """
    Evaluates ``item_rules`` against each item, in index order.

    Failures are rooted under ``[index]``; the owning chain adds the property
    name, giving ``tags[2]`` or ``addresses[1].street``. A None collection is
    valid, and so is an empty one (count rules decide that).

    Parameters:
    - item_rules: Rules evaluated for every item
    - cascade_mode: STOP_ON_FIRST_FAILURE stops the remaining item rules of
      one item after its first failure; other items are still evaluated.
      None inherits the mode of the owning chain, and a validator-level
      STOP_ON_FIRST_FAILURE always wins
    """

    def __init__(self, item_rules: list[BaseRule], cascade_mode: CascadeMode | None = None):
        if not item_rules:
            raise ValueError("CollectionRule requires at least one item rule")
        super().__init__()
        self.item_rules = list(item_rules)
        self.cascade_mode = CascadeMode(cascade_mode) if cascade_mode is not None else None

    def _mode(self, context: ValidationContext | None) -> CascadeMode:
        if context is not None and context.stop_forced:
            return CascadeMode.STOP_ON_FIRST_FAILURE
        if self.cascade_mode is not None:
            return self.cascade_mode
        if context is not None and context.cascade_mode is not None:
            return context.cascade_mode
        return CascadeMode.CONTINUE

    @staticmethod
    def _item_context(context: ValidationContext | None, index: int) -> ValidationContext:
        context = context or ValidationContext()
        display = context.display_name or DEFAULT_DISPLAY_NAME
        return context.for_property(f"{display}[{index}]")

    def _items(self, value: Any) -> Iterable[Any]:
        if isinstance(value, (str, bytes)):
            raise TypeError(f"CollectionRule expects a collection of items, got {type(value).__name__}")
        return value

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        result = ValidationOutcome.success()
        if value is None:
            return result

        stop_on_failure = self._mode(context) is CascadeMode.STOP_ON_FIRST_FAILURE
        for index, item in enumerate(self._items(value)):
            item_context = self._item_context(context, index)
            for rule in self.item_rules:
                outcome = rule.evaluate(item, item_context)
                result.merge(outcome.with_path_prefix(f"[{index}]"))
                if not outcome.is_valid and stop_on_failure:
                    break

        return result

    async def evaluate_async(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        result = ValidationOutcome.success()
        if value is None:
            return result

        stop_on_failure = self._mode(context) is CascadeMode.STOP_ON_FIRST_FAILURE
        for index, item in enumerate(self._items(value)):
            item_context = self._item_context(context, index)
            for rule in self.item_rules:
                outcome = await rule.evaluate_async(item, item_context)
                result.merge(outcome.with_path_prefix(f"[{index}]"))
                if not outcome.is_valid and stop_on_failure:
                    break

        return result

    @property
    def rule_type(self) -> str:
        return "for_each"

    def __repr__(self) -> str:
        return f"CollectionRule(item_rules={self.item_rules!r})"
