"""
Validator - the named collection of property chains for one type.
"""

import asyncio
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from ...observability.logger import get_logger
from ...observability.metrics import record_validation
from ..errors import UnknownRuleSetError, UsageError, ValidationException
from ..localization.message_formatter import MessageFormatter
from ..models import CascadeMode, ValidationContext, ValidationOutcome
from .property_chain import PropertyRuleChain, resolve_property
from .rule_builder import RuleBuilder

logger = get_logger(__name__)

DEFAULT_RULE_SET = "default"
ALL_RULE_SETS = "*"
RESERVED_RULE_SETS = (DEFAULT_RULE_SET, ALL_RULE_SETS)


class Validator:
    """
    Validates instances of one type against declared property rules.

    Rules are declared once, usually in a subclass constructor:

        class PersonValidator(Validator):
            def __init__(self, address_validator: Validator):
                super().__init__()
                self.rule_for("first_name").not_empty().length(2, 50)
                self.rule_for("email").not_empty().email()
                self.rule_for("address").not_empty().set_validator(address_validator)

    and evaluated any number of times with ``validate`` / ``validate_async``.
    A fully built validator holds no per-call state, so one instance can
    validate different inputs concurrently.

    Cascade:
    - ``rule_level_cascade_mode`` is the default for chains that did not call
      ``cascade()``.
    - ``cascade_mode=STOP_ON_FIRST_FAILURE`` stops after the first chain that
      fails and also forces every chain to stop at its first failing rule.
      It takes precedence over any chain-level mode.

    Attributes:
        name: Name used in logs and metrics (defaults to the class name)
        cascade_mode: Validator-level cascade across chains
        rule_level_cascade_mode: Default cascade within a chain
        formatter: Formatter for keyed messages when the call does not pass one
        collect_metrics: Record Prometheus metrics for each validate call
        run_chains_concurrently: Gather chain coroutines in ``validate_async``
    """

    def __init__(
        self,
        *,
        name: str | None = None,
        cascade_mode: CascadeMode = CascadeMode.CONTINUE,
        rule_level_cascade_mode: CascadeMode = CascadeMode.CONTINUE,
        formatter: MessageFormatter | None = None,
        collect_metrics: bool = True,
        run_chains_concurrently: bool = False,
    ):
        self.name = name or type(self).__name__
        self.cascade_mode = CascadeMode(cascade_mode)
        self.rule_level_cascade_mode = CascadeMode(rule_level_cascade_mode)
        self.formatter = formatter
        self.collect_metrics = collect_metrics
        self.run_chains_concurrently = run_chains_concurrently

        self._chains: list[PropertyRuleChain] = []
        self._rule_sets: dict[str, list[PropertyRuleChain]] = {}
        self._pre_validations: list[Callable[[Any], bool]] = []
        self._active_rule_set: str | None = None

    # =======================
    # DECLARATION
    # =======================

    @staticmethod
    def _check_rule_set_name(rule_set: str) -> str:
        if not rule_set or not rule_set.strip():
            raise UsageError("Rule set name must be a non-empty string")
        if "," in rule_set:
            raise UsageError(f"Rule set name '{rule_set}' must not contain ','")
        if rule_set in RESERVED_RULE_SETS:
            raise UsageError(f"Rule set name '{rule_set}' is reserved")
        return rule_set.strip()

    def _add_chain(self, chain: PropertyRuleChain, rule_set: str | None) -> None:
        if rule_set is None:
            self._chains.append(chain)
        else:
            self._rule_sets.setdefault(self._check_rule_set_name(rule_set), []).append(chain)

    def rule_for(
        self,
        expression: str | Callable[[Any], Any],
        name: str | None = None,
        rule_set: str | None = None,
    ) -> RuleBuilder:
        """
        Start declaring rules for one property.

        Args:
            expression: Attribute name ("first_name") or a callable taking the instance
            name: Property name used in failure paths (required for callables)
            rule_set: Put the chain in a named rule set instead of the default one

        Returns:
            Fluent builder for the new chain

        Raises:
            InvalidPropertyExpressionError: If the expression is not a simple member access
        """
        property_name, accessor = resolve_property(expression, name)
        chain = PropertyRuleChain(property_name, accessor)
        self._add_chain(chain, rule_set or self._active_rule_set)
        return RuleBuilder(chain)

    def rule_for_each(
        self,
        expression: str | Callable[[Any], Any],
        name: str | None = None,
        rule_set: str | None = None,
    ) -> RuleBuilder:
        """
        Like ``rule_for`` but every rule applies to each item of the collection.

        Failures are reported as ``tags[0]``, ``addresses[1].street``.
        """
        property_name, accessor = resolve_property(expression, name)
        chain = PropertyRuleChain(property_name, accessor)
        self._add_chain(chain, rule_set or self._active_rule_set)
        return RuleBuilder(chain, each=True)

    @contextmanager
    def rule_set(self, name: str) -> Iterator["Validator"]:
        """
        Declare every chain inside the block in the rule set ``name``.

        Usage:
            with self.rule_set("registration"):
                self.rule_for("password").not_empty().min_length(8)
        """
        name = self._check_rule_set_name(name)
        previous = self._active_rule_set
        self._active_rule_set = name
        try:
            yield self
        finally:
            self._active_rule_set = previous

    def include(self, other: "Validator") -> "Validator":
        """
        Append another validator's chains (default and named sets) to this one.

        Chains are shared by reference, not copied: finish building ``other``
        before including it, later changes to it are not guaranteed to show.
        """
        if other is self:
            raise UsageError("A validator cannot include itself")
        if not isinstance(other, Validator):
            raise UsageError(f"include() expects a Validator, got {type(other).__name__}")

        self._chains.extend(other._chains)
        for rule_set, chains in other._rule_sets.items():
            self._rule_sets.setdefault(rule_set, []).extend(chains)
        return self

    def add_pre_validation(self, predicate: Callable[[Any], bool]) -> "Validator":
        """
        Register a hook run before any rule; when it returns False the
        instance is skipped and ``validate`` returns success.
        """
        if not callable(predicate):
            raise UsageError("pre-validation hook must be callable")
        self._pre_validations.append(predicate)
        return self

    # =======================
    # RULE SET RESOLUTION
    # =======================

    @property
    def rule_set_names(self) -> list[str]:
        return list(self._rule_sets)

    def _all_chains(self) -> list[PropertyRuleChain]:
        chains = list(self._chains)
        for rule_set_chains in self._rule_sets.values():
            chains.extend(rule_set_chains)
        return chains

    def _resolve_chains(self, rule_set: str | None) -> list[PropertyRuleChain]:
        """
        Resolve the chains selected by ``rule_set``.

        - None, "" or "default": the chains declared outside any rule set
        - "*": default chains followed by every named set
        - "a,b": each name in request order; unknown names are skipped with
          a warning and chains selected twice run once
        - any other single name: that set, or UnknownRuleSetError
        """
        if rule_set is None or not rule_set.strip() or rule_set.strip() == DEFAULT_RULE_SET:
            return list(self._chains)

        requested = rule_set.strip()
        if requested == ALL_RULE_SETS:
            return self._dedupe(self._all_chains())

        if "," not in requested:
            if requested not in self._rule_sets:
                raise UnknownRuleSetError(requested, self.rule_set_names)
            return list(self._rule_sets[requested])

        chains: list[PropertyRuleChain] = []
        for name in (part.strip() for part in requested.split(",")):
            if not name:
                continue
            if name == DEFAULT_RULE_SET:
                chains.extend(self._chains)
            elif name == ALL_RULE_SETS:
                chains.extend(self._all_chains())
            elif name in self._rule_sets:
                chains.extend(self._rule_sets[name])
            else:
                logger.warning(
                    "Skipping unknown rule set",
                    extra={"validator": self.name, "rule_set": name, "available": self.rule_set_names},
                )
        return self._dedupe(chains)

    @staticmethod
    def _dedupe(chains: list[PropertyRuleChain]) -> list[PropertyRuleChain]:
        seen: set[int] = set()
        unique: list[PropertyRuleChain] = []
        for chain in chains:
            if id(chain) not in seen:
                seen.add(id(chain))
                unique.append(chain)
        return unique

    # =======================
    # EVALUATION
    # =======================

    def _chain_cascade(self, chain: PropertyRuleChain) -> CascadeMode:
        if self.cascade_mode is CascadeMode.STOP_ON_FIRST_FAILURE:
            return CascadeMode.STOP_ON_FIRST_FAILURE
        return chain.cascade_mode or self.rule_level_cascade_mode

    def _prepare(
        self,
        instance: Any,
        rule_set: str | None,
        formatter: MessageFormatter | None,
    ) -> tuple[list[PropertyRuleChain], ValidationContext] | None:
        if instance is None:
            raise ValueError(f"{self.name} cannot validate None")

        chains = self._resolve_chains(rule_set)
        if not all(hook(instance) for hook in self._pre_validations):
            logger.debug("Pre-validation skipped instance", extra={"validator": self.name})
            return None

        context = ValidationContext(
            instance=instance,
            formatter=formatter or self.formatter,
            validator_cascade_mode=self.cascade_mode,
        )
        return chains, context

    def _finish(self, mode: str, outcome: ValidationOutcome, started: float) -> ValidationOutcome:
        duration = time.perf_counter() - started
        logger.debug(
            "Validation completed",
            extra={
                "validator": self.name,
                "mode": mode,
                "is_valid": outcome.is_valid,
                "failure_count": len(outcome.failures),
            },
        )
        if self.collect_metrics:
            record_validation(self.name, mode, outcome, duration)
        return outcome

    def evaluate(
        self,
        instance: Any,
        rule_set: str | None = None,
        formatter: MessageFormatter | None = None,
    ) -> ValidationOutcome:
        """
        Run the selected chains without logging or recording metrics.

        Nested validators (``set_validator``) are evaluated through this
        method so only the outermost ``validate`` call is logged and counted.
        """
        outcome = ValidationOutcome.success()
        prepared = self._prepare(instance, rule_set, formatter)
        if prepared is None:
            return outcome

        chains, context = prepared
        for chain in chains:
            chain_outcome = chain.evaluate(instance, context, self._chain_cascade(chain))
            outcome.merge(chain_outcome)
            if not chain_outcome.is_valid and self.cascade_mode is CascadeMode.STOP_ON_FIRST_FAILURE:
                break

        return outcome

    async def evaluate_async(
        self,
        instance: Any,
        rule_set: str | None = None,
        formatter: MessageFormatter | None = None,
    ) -> ValidationOutcome:
        """Asynchronous counterpart of ``evaluate``."""
        outcome = ValidationOutcome.success()
        prepared = self._prepare(instance, rule_set, formatter)
        if prepared is None:
            return outcome

        chains, context = prepared
        if self.run_chains_concurrently and self.cascade_mode is CascadeMode.CONTINUE:
            tasks = [
                asyncio.ensure_future(chain.evaluate_async(instance, context, self._chain_cascade(chain)))
                for chain in chains
            ]
            try:
                chain_outcomes = await asyncio.gather(*tasks)
            except BaseException:
                # one chain failed or the caller was cancelled: stop the siblings
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise
            for chain_outcome in chain_outcomes:
                outcome.merge(chain_outcome)
        else:
            for chain in chains:
                chain_outcome = await chain.evaluate_async(instance, context, self._chain_cascade(chain))
                outcome.merge(chain_outcome)
                if not chain_outcome.is_valid and self.cascade_mode is CascadeMode.STOP_ON_FIRST_FAILURE:
                    break

        return outcome

    def validate(
        self,
        instance: Any,
        rule_set: str | None = None,
        formatter: MessageFormatter | None = None,
    ) -> ValidationOutcome:
        """
        Validate an instance.

        Args:
            instance: The object to validate (attribute objects or mappings)
            rule_set: Rule set selector (see ``_resolve_chains``); default set when omitted
            formatter: Formatter for this call, overriding the validator's

        Returns:
            Outcome with failures in declaration order

        Raises:
            ValueError: If instance is None
            UnknownRuleSetError: If a single unknown rule set is requested
            UnsupportedOperationError: If a selected rule only has an async predicate
        """
        started = time.perf_counter()
        outcome = self.evaluate(instance, rule_set, formatter)
        return self._finish("sync", outcome, started)

    async def validate_async(
        self,
        instance: Any,
        rule_set: str | None = None,
        formatter: MessageFormatter | None = None,
    ) -> ValidationOutcome:
        """
        Asynchronous counterpart of ``validate``.

        For validators without async-only rules the failures are identical,
        in content and order, to ``validate``. With ``run_chains_concurrently``
        (and a CONTINUE validator cascade) chains are awaited together and
        their failures are merged back in declaration order. When one chain
        raises, the other chains are cancelled before the error propagates.
        """
        started = time.perf_counter()
        outcome = await self.evaluate_async(instance, rule_set, formatter)
        return self._finish("async", outcome, started)

    def validate_and_raise(
        self,
        instance: Any,
        rule_set: str | None = None,
        formatter: MessageFormatter | None = None,
    ) -> ValidationOutcome:
        """
        Validate and raise ValidationException when any failure is found.

        Returns:
            The (valid) outcome
        """
        outcome = self.validate(instance, rule_set, formatter)
        if not outcome.is_valid:
            raise ValidationException(outcome)
        return outcome

    async def validate_and_raise_async(
        self,
        instance: Any,
        rule_set: str | None = None,
        formatter: MessageFormatter | None = None,
    ) -> ValidationOutcome:
        outcome = await self.validate_async(instance, rule_set, formatter)
        if not outcome.is_valid:
            raise ValidationException(outcome)
        return outcome

    # =======================
    # INTROSPECTION
    # =======================

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of declared rules.

        Returns:
            Dictionary with chain and rule counts per rule set and rule type
        """
        rule_sets = {DEFAULT_RULE_SET: self._chains, **self._rule_sets}
        return {
            "validator": self.name,
            "total_chains": sum(len(chains) for chains in rule_sets.values()),
            "total_rules": sum(len(chain.rules) for chains in rule_sets.values() for chain in chains),
            "rule_sets": {
                rule_set: [chain.property_name for chain in chains] for rule_set, chains in rule_sets.items()
            },
            "rules_by_type": self._count_by_type(),
        }

    def _count_by_type(self) -> dict[str, int]:
        """Count top-level rules by rule type."""
        counts: dict[str, int] = {}
        for chain in self._all_chains():
            for rule in chain.rules:
                counts[rule.rule_type] = counts.get(rule.rule_type, 0) + 1
        return counts

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, chains={len(self._chains)}, rule_sets={self.rule_set_names})"
