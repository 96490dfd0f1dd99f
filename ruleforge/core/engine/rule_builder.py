"""
Fluent rule builder returned by ``Validator.rule_for``.
"""

from collections.abc import Awaitable, Callable
from datetime import date, datetime, timedelta
from enum import Enum
from re import Pattern
from typing import TYPE_CHECKING, Any

from ..combinators import (
    ChildValidatorRule,
    CollectionRule,
    CompositeRule,
    ConditionalRule,
    TransformRule,
)
from ..errors import UsageError
from ..localization.message_formatter import MessageFormatter
from ..models import ApplyConditionTo, CascadeMode, CompositeOperator, Severity
from ..rules import (
    BaseRule,
    BetweenRule,
    ColorFormat,
    ColorRule,
    Comparison,
    ComparisonRule,
    CountRule,
    CountRuleType,
    CreditCardRule,
    DateRule,
    DateRuleType,
    DurationRule,
    EmailRule,
    EmptyRule,
    EqualRule,
    FileExtensionRule,
    IpAddressRule,
    IsInEnumRule,
    JsonRule,
    LengthRule,
    MustRule,
    NotEmptyRule,
    NotEqualRule,
    NotNullRule,
    PasswordRule,
    PhoneNumberRule,
    PrecisionScaleRule,
    RegexRule,
    UniqueRule,
    UrlRule,
    UuidRule,
)
from .property_chain import PropertyRuleChain

if TYPE_CHECKING:
    from .validator import Validator

Clock = Callable[[], datetime]


class RuleBuilder:
    """
    Declares the rules of one property chain.

    Every rule method appends a rule and returns the builder, so rules read
    in the order they are evaluated:

        validator.rule_for("first_name").not_empty().length(2, 50)

    ``with_*`` methods configure the most recently added rule; ``when`` and
    ``unless`` gate the whole chain or, with ``apply_to=CURRENT_RULE``, only
    the most recent rule.

    Builders created by ``rule_for_each`` add their rules per item: all item
    rules live in one CollectionRule so failures are reported item by item.
    """

    def __init__(self, chain: PropertyRuleChain, each: bool = False):
        self.chain = chain
        self._each = each
        self._collection: CollectionRule | None = None
        self._transformer: Callable[[Any], Any] | None = None
        self._current: BaseRule | None = None
        self._slot: tuple[list[BaseRule], int] | None = None

    # =======================
    # CORE
    # =======================

    def add_rule(self, rule: BaseRule) -> "RuleBuilder":
        """
        Append a rule (built-in or custom BaseRule subclass) to the chain.

        Args:
            rule: The rule to add

        Returns:
            This builder
        """
        if not isinstance(rule, BaseRule):
            raise UsageError(f"Rules must derive from BaseRule, got {type(rule).__name__}")

        self._current = rule
        if self._transformer is not None:
            rule = TransformRule(self._transformer, rule)

        if self._each:
            if self._collection is None:
                self._collection = CollectionRule([rule])
                self.chain.add_rule(self._collection)
            else:
                self._collection.item_rules.append(rule)
            target = self._collection.item_rules
        else:
            self.chain.add_rule(rule)
            target = self.chain.rules

        self._slot = (target, len(target) - 1)
        return self

    def _require_rule(self, operation: str) -> BaseRule:
        if self._current is None:
            raise UsageError(f"{operation}() must follow a rule; add a rule first")
        if isinstance(self._current, CollectionRule):
            raise UsageError(
                f"{operation}() cannot configure for_each(); call it on the item rules inside the for_each callback"
            )
        return self._current

    def transform(self, transformer: Callable[[Any], Any]) -> "RuleBuilder":
        """
        Map the property value before it reaches the rules added afterwards.

        Successive transforms compose in call order.
        """
        if not callable(transformer):
            raise UsageError("transformer must be callable")

        previous = self._transformer
        if previous is None:
            self._transformer = transformer
        else:
            self._transformer = lambda value: transformer(previous(value))
        return self

    # =======================
    # PRESENCE
    # =======================

    def not_null(self) -> "RuleBuilder":
        return self.add_rule(NotNullRule())

    def not_empty(self) -> "RuleBuilder":
        return self.add_rule(NotEmptyRule())

    def empty(self) -> "RuleBuilder":
        return self.add_rule(EmptyRule())

    # =======================
    # STRINGS
    # =======================

    def length(self, min_length: int, max_length: int | None = None) -> "RuleBuilder":
        return self.add_rule(LengthRule(min_length, max_length))

    def min_length(self, min_length: int) -> "RuleBuilder":
        return self.add_rule(LengthRule(min_length, None))

    def max_length(self, max_length: int) -> "RuleBuilder":
        return self.add_rule(LengthRule(0, max_length))

    def exact_length(self, length: int) -> "RuleBuilder":
        return self.add_rule(LengthRule(length, length))

    def matches(self, pattern: str | Pattern, flags: int = 0) -> "RuleBuilder":
        return self.add_rule(RegexRule(pattern, flags))

    def email(self) -> "RuleBuilder":
        return self.add_rule(EmailRule())

    def credit_card(self) -> "RuleBuilder":
        return self.add_rule(CreditCardRule())

    def url(self, require_https: bool = False) -> "RuleBuilder":
        return self.add_rule(UrlRule(require_https))

    def phone_number(self) -> "RuleBuilder":
        return self.add_rule(PhoneNumberRule())

    def ip_address(self, allow_ipv4: bool = True, allow_ipv6: bool = True) -> "RuleBuilder":
        return self.add_rule(IpAddressRule(allow_ipv4, allow_ipv6))

    def uuid(self, allow_nil: bool = False) -> "RuleBuilder":
        return self.add_rule(UuidRule(allow_nil))

    def password(
        self,
        min_length: int = 8,
        require_uppercase: bool = True,
        require_lowercase: bool = True,
        require_digit: bool = True,
        require_special_character: bool = True,
    ) -> "RuleBuilder":
        return self.add_rule(
            PasswordRule(min_length, require_uppercase, require_lowercase, require_digit, require_special_character)
        )

    def json(self, require_object: bool = False, require_array: bool = False, max_depth: int | None = None) -> "RuleBuilder":
        return self.add_rule(JsonRule(require_object, require_array, max_depth))

    def file_extension(self, *allowed_extensions: str, case_sensitive: bool = False) -> "RuleBuilder":
        """Usage: ``.file_extension("pdf", ".docx")``"""
        return self.add_rule(FileExtensionRule(list(allowed_extensions), case_sensitive))

    def color(self, formats: ColorFormat = ColorFormat.ALL) -> "RuleBuilder":
        return self.add_rule(ColorRule(formats))

    # =======================
    # COMPARISONS
    # =======================

    def equal(self, value: Any, comparer: Callable[[Any, Any], bool] | None = None) -> "RuleBuilder":
        return self.add_rule(EqualRule(value, comparer))

    def not_equal(self, value: Any, comparer: Callable[[Any, Any], bool] | None = None) -> "RuleBuilder":
        return self.add_rule(NotEqualRule(value, comparer))

    def greater_than(self, value: Any) -> "RuleBuilder":
        return self.add_rule(ComparisonRule(Comparison.GREATER_THAN, value))

    def greater_than_or_equal(self, value: Any) -> "RuleBuilder":
        return self.add_rule(ComparisonRule(Comparison.GREATER_THAN_OR_EQUAL, value))

    def less_than(self, value: Any) -> "RuleBuilder":
        return self.add_rule(ComparisonRule(Comparison.LESS_THAN, value))

    def less_than_or_equal(self, value: Any) -> "RuleBuilder":
        return self.add_rule(ComparisonRule(Comparison.LESS_THAN_OR_EQUAL, value))

    def between(
        self,
        lower: Any = None,
        upper: Any = None,
        lower_inclusive: bool = True,
        upper_inclusive: bool = True,
    ) -> "RuleBuilder":
        return self.add_rule(BetweenRule(lower, upper, lower_inclusive, upper_inclusive))

    def inclusive_between(self, lower: Any, upper: Any) -> "RuleBuilder":
        return self.add_rule(BetweenRule(lower, upper, True, True))

    def exclusive_between(self, lower: Any, upper: Any) -> "RuleBuilder":
        return self.add_rule(BetweenRule(lower, upper, False, False))

    def is_in_enum(self, enum_type: type[Enum]) -> "RuleBuilder":
        return self.add_rule(IsInEnumRule(enum_type))

    def precision_scale(self, precision: int, scale: int) -> "RuleBuilder":
        return self.add_rule(PrecisionScaleRule(precision, scale))

    def duration(
        self,
        minimum: timedelta | None = None,
        maximum: timedelta | None = None,
        allow_zero: bool = True,
        allow_negative: bool = False,
    ) -> "RuleBuilder":
        return self.add_rule(DurationRule(minimum, maximum, allow_zero, allow_negative))

    # =======================
    # DATES
    # =======================

    def future(self, clock: Clock | None = None) -> "RuleBuilder":
        return self.add_rule(DateRule(DateRuleType.FUTURE, clock=clock))

    def future_or_present(self, clock: Clock | None = None) -> "RuleBuilder":
        return self.add_rule(DateRule(DateRuleType.FUTURE_OR_PRESENT, clock=clock))

    def past(self, clock: Clock | None = None) -> "RuleBuilder":
        return self.add_rule(DateRule(DateRuleType.PAST, clock=clock))

    def past_or_present(self, clock: Clock | None = None) -> "RuleBuilder":
        return self.add_rule(DateRule(DateRuleType.PAST_OR_PRESENT, clock=clock))

    def after(self, moment: date) -> "RuleBuilder":
        return self.add_rule(DateRule(DateRuleType.AFTER, moment))

    def after_or_equal(self, moment: date) -> "RuleBuilder":
        return self.add_rule(DateRule(DateRuleType.AFTER_OR_EQUAL, moment))

    def before(self, moment: date) -> "RuleBuilder":
        return self.add_rule(DateRule(DateRuleType.BEFORE, moment))

    def before_or_equal(self, moment: date) -> "RuleBuilder":
        return self.add_rule(DateRule(DateRuleType.BEFORE_OR_EQUAL, moment))

    # =======================
    # COLLECTIONS
    # =======================

    def min_count(self, count: int) -> "RuleBuilder":
        return self.add_rule(CountRule(CountRuleType.MIN, count))

    def max_count(self, count: int) -> "RuleBuilder":
        return self.add_rule(CountRule(CountRuleType.MAX, count))

    def exact_count(self, count: int) -> "RuleBuilder":
        return self.add_rule(CountRule(CountRuleType.EXACT, count))

    def unique(self) -> "RuleBuilder":
        return self.add_rule(UniqueRule())

    def for_each(self, configure: Callable[["RuleBuilder"], Any]) -> "RuleBuilder":
        """
        Validate every item of the collection with rules declared by ``configure``.

        Usage:
            validator.rule_for("tags").not_null().for_each(lambda item: item.not_empty().max_length(20))

        Conditions declared on the item builder still see the parent instance.
        Item rules follow the cascade of this chain unless the item builder
        calls ``cascade()`` itself. Options such as ``with_message`` belong on
        the item rules; calling them right after ``for_each`` raises UsageError.
        """
        item_chain = PropertyRuleChain("", lambda item: item)
        configure(RuleBuilder(item_chain))
        if not item_chain.rules:
            raise UsageError("for_each() requires at least one item rule")

        item_rules = item_chain.rules
        for predicate, invert in item_chain.conditions:
            item_rules = [ConditionalRule(rule, predicate, invert) for rule in item_rules]

        return self.add_rule(CollectionRule(item_rules, cascade_mode=item_chain.cascade_mode))

    # =======================
    # CUSTOM / STRUCTURAL
    # =======================

    def must(
        self,
        predicate: Callable[..., bool],
        message: str | None = None,
        with_instance: bool = False,
    ) -> "RuleBuilder":
        """
        Add a custom predicate. ``with_instance=True`` calls ``predicate(instance, value)``.
        """
        return self.add_rule(MustRule(predicate, message, with_instance=with_instance))

    def must_async(
        self,
        predicate: Callable[..., Awaitable[bool]],
        message: str | None = None,
        with_instance: bool = False,
    ) -> "RuleBuilder":
        """Add an asynchronous predicate; the chain then only supports ``validate_async``."""
        return self.add_rule(MustRule(None, message, async_predicate=predicate, with_instance=with_instance))

    def set_validator(self, validator: "Validator", rule_set: str | None = None) -> "RuleBuilder":
        return self.add_rule(ChildValidatorRule(validator, rule_set))

    def all_of(self, *rules: BaseRule) -> "RuleBuilder":
        return self.add_rule(CompositeRule(list(rules), CompositeOperator.AND))

    def any_of(self, *rules: BaseRule) -> "RuleBuilder":
        return self.add_rule(CompositeRule(list(rules), CompositeOperator.OR))

    # =======================
    # CONDITIONS / OPTIONS
    # =======================

    def _condition(self, predicate: Callable[[Any], bool], invert: bool, apply_to: ApplyConditionTo) -> "RuleBuilder":
        if not callable(predicate):
            raise UsageError("predicate must be callable")

        if ApplyConditionTo(apply_to) is ApplyConditionTo.ALL_RULES:
            self.chain.add_condition(predicate, invert)
            return self

        if self._slot is None:
            raise UsageError("A condition applied to the current rule must follow a rule")
        rules, index = self._slot
        rules[index] = ConditionalRule(rules[index], predicate, invert)
        return self

    def when(self, predicate: Callable[[Any], bool], apply_to: ApplyConditionTo = ApplyConditionTo.ALL_RULES) -> "RuleBuilder":
        """Only evaluate when ``predicate(instance)`` is true."""
        return self._condition(predicate, False, apply_to)

    def unless(self, predicate: Callable[[Any], bool], apply_to: ApplyConditionTo = ApplyConditionTo.ALL_RULES) -> "RuleBuilder":
        """Skip evaluation when ``predicate(instance)`` is true."""
        return self._condition(predicate, True, apply_to)

    def cascade(self, mode: CascadeMode) -> "RuleBuilder":
        mode = CascadeMode(mode)
        self.chain.cascade_mode = mode
        if self._collection is not None:
            self._collection.cascade_mode = mode
        return self

    def with_name(self, display_name: str) -> "RuleBuilder":
        """Override the name shown in messages; failure paths keep the property name."""
        if not display_name:
            raise UsageError("display name must be a non-empty string")
        self.chain.display_name = display_name
        return self

    def with_message(self, message: str) -> "RuleBuilder":
        self._require_rule("with_message").with_message(message)
        return self

    def with_message_key(self, key: str) -> "RuleBuilder":
        self._require_rule("with_message_key").with_message_key(key)
        return self

    def with_message_formatter(self, formatter: MessageFormatter) -> "RuleBuilder":
        self._require_rule("with_message_formatter").message_formatter = formatter
        return self

    def with_severity(self, severity: Severity) -> "RuleBuilder":
        self._require_rule("with_severity").severity = Severity(severity)
        return self

    def with_error_code(self, error_code: str) -> "RuleBuilder":
        self._require_rule("with_error_code").error_code = error_code
        return self

    def __repr__(self) -> str:
        return f"RuleBuilder({self.chain!r})"
