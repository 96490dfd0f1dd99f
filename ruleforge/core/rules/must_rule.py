"""
MustRule - validates using a custom predicate, synchronous or asynchronous.
"""

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from ..errors import UnsupportedOperationError
from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule


class MustRule(BaseRule):
    """
    Validates using a custom predicate.

    Parameters:
    - predicate: Callable returning True when the value is valid. A coroutine
      function passed here is treated as ``async_predicate``.
    - async_predicate: Coroutine function returning True when the value is valid
    - with_instance: When True, predicates are called as ``(instance, value)``
      so they can compare against other properties of the parent object

    The predicate signature should be:
        def is_adult(age: int) -> bool:
            return age >= 18

    Exceptions raised by a predicate propagate to the caller of ``validate``;
    they are never turned into failures.

    A rule built only from an async predicate cannot be evaluated
    synchronously: ``evaluate`` raises UnsupportedOperationError instead of
    blocking on the event loop.
    """

    default_message_key = "Predicate"

    def __init__(
        self,
        predicate: Callable[..., bool] | None = None,
        error_message: str | None = None,
        *,
        async_predicate: Callable[..., Awaitable[bool]] | None = None,
        with_instance: bool = False,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        super().__init__(error_message, severity=severity, error_code=error_code)

        if predicate is not None and inspect.iscoroutinefunction(predicate):
            if async_predicate is not None:
                raise ValueError("Pass the coroutine function either as predicate or as async_predicate, not both")
            predicate, async_predicate = None, predicate

        if predicate is None and async_predicate is None:
            raise ValueError("MustRule requires a predicate or an async_predicate")
        if predicate is not None and not callable(predicate):
            raise ValueError("predicate must be callable")
        if async_predicate is not None and not callable(async_predicate):
            raise ValueError("async_predicate must be callable")

        self.predicate = predicate
        self.async_predicate = async_predicate
        self.with_instance = with_instance

    @property
    def is_async_only(self) -> bool:
        return self.predicate is None

    def _arguments(self, value: Any, context: ValidationContext | None) -> tuple[Any, ...]:
        if self.with_instance:
            return (context.instance if context else None, value)
        return (value,)

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        """
        Validate using the synchronous predicate.

        Raises:
            UnsupportedOperationError: If the rule only has an async predicate
        """
        if self.predicate is None:
            raise UnsupportedOperationError(
                "This rule was built with an asynchronous predicate; use evaluate_async / validate_async"
            )

        if not self.predicate(*self._arguments(value, context)):
            return self.fail(value, context)
        return ValidationOutcome.success()

    async def evaluate_async(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if self.async_predicate is None:
            return self.evaluate(value, context)

        if not await self.async_predicate(*self._arguments(value, context)):
            return self.fail(value, context)
        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "must_async" if self.is_async_only else "must"
