"""
Explicit registry mapping model types to their validators.
"""

import threading
from collections.abc import Callable
from typing import Any

from ...observability.logger import get_logger
from ..errors import UsageError, ValidatorNotRegisteredError
from ..localization.message_formatter import MessageFormatter
from ..models import ValidationOutcome
from .validator import Validator

logger = get_logger(__name__)

ValidatorFactory = Callable[[], Validator]


class ValidatorRegistry:
    """
    Looks up the validator for a value's type.

    Registration happens once at startup; lookups are by exact type, so a
    subclass needs its own registration. Factories run lazily on first use
    and their validator is cached for later calls.

    Usage:
        registry = ValidatorRegistry()
        registry.register(Address, AddressValidator)
        registry.register(Person, lambda: PersonValidator(registry.get_validator(Address)))

        outcome = registry.validate(person)
    """

    def __init__(self):
        self._factories: dict[type, ValidatorFactory] = {}
        self._instances: dict[type, Validator] = {}
        self._lock = threading.Lock()

    def register(self, model_type: type, validator: Validator | ValidatorFactory) -> "ValidatorRegistry":
        """
        Register a validator instance or a zero-argument factory for ``model_type``.

        Re-registering a type replaces the previous entry.

        Raises:
            UsageError: If ``validator`` is neither a Validator nor callable
        """
        if not isinstance(model_type, type):
            raise UsageError(f"model_type must be a type, got {model_type!r}")

        with self._lock:
            self._instances.pop(model_type, None)
            if isinstance(validator, Validator):
                self._instances[model_type] = validator
                self._factories[model_type] = lambda: validator
            elif callable(validator):
                self._factories[model_type] = validator
            else:
                raise UsageError(f"Expected a Validator or a factory for {model_type.__name__}, got {validator!r}")

        logger.info("Validator registered", extra={"model_type": model_type.__name__})
        return self

    def is_registered(self, model_type: type) -> bool:
        return model_type in self._factories

    @property
    def registered_types(self) -> list[type]:
        return list(self._factories)

    def get_validator(self, model_type: type) -> Validator:
        """
        Return the (cached) validator for ``model_type``.

        Raises:
            ValidatorNotRegisteredError: If nothing is registered for the type
        """
        cached = self._instances.get(model_type)
        if cached is not None:
            return cached

        factory = self._factories.get(model_type)
        if factory is None:
            raise ValidatorNotRegisteredError(model_type)

        # The factory may look up other validators, so it runs outside the lock
        validator = factory()
        if not isinstance(validator, Validator):
            raise UsageError(f"Factory for {model_type.__name__} returned {type(validator).__name__}, not a Validator")

        with self._lock:
            return self._instances.setdefault(model_type, validator)

    def validator_for(self, instance: Any) -> Validator:
        return self.get_validator(type(instance))

    def validate(
        self,
        instance: Any,
        rule_set: str | None = None,
        formatter: MessageFormatter | None = None,
    ) -> ValidationOutcome:
        """Validate ``instance`` with the validator registered for its type."""
        return self.validator_for(instance).validate(instance, rule_set, formatter)

    async def validate_async(
        self,
        instance: Any,
        rule_set: str | None = None,
        formatter: MessageFormatter | None = None,
    ) -> ValidationOutcome:
        return await self.validator_for(instance).validate_async(instance, rule_set, formatter)
