"""
Rule configuration management.

Builds validators for mapping or attribute records from YAML rule files.
"""

import re
from collections.abc import Callable, Mapping
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ...observability.logger import get_logger, log_operation
from ...observability.metrics import record_rule_config_load, rule_config_load_duration_seconds, track_duration
from ..combinators import CollectionRule
from ..errors import RuleConfigError, UsageError
from ..models import CascadeMode, RuleDefinition
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
    JsonRule,
    LengthRule,
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
from .validator import Validator

logger = get_logger(__name__)


def _moment(value: Any) -> date:
    """Accept YAML dates/datetimes as parsed, or ISO-8601 strings."""
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            raise ValueError(f"'{value}' is not an ISO-8601 date or datetime")
    raise ValueError(f"Expected a date, got {type(value).__name__}")


def _regex(pattern: str, ignore_case: bool = False) -> RegexRule:
    return RegexRule(pattern, re.IGNORECASE if ignore_case else 0)


def _comparison(comparison: Comparison) -> Callable[..., BaseRule]:
    return lambda value: ComparisonRule(comparison, value)


def _date(date_rule_type: DateRuleType) -> Callable[..., BaseRule]:
    if date_rule_type in (DateRuleType.AFTER, DateRuleType.AFTER_OR_EQUAL, DateRuleType.BEFORE, DateRuleType.BEFORE_OR_EQUAL):
        return lambda value: DateRule(date_rule_type, _moment(value))
    return lambda: DateRule(date_rule_type)


def _count(count_rule_type: CountRuleType) -> Callable[..., BaseRule]:
    return lambda count: CountRule(count_rule_type, count)


def _seconds(value: Any) -> timedelta | None:
    """Accept durations as a number of seconds."""
    if value is None or isinstance(value, timedelta):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Expected a duration in seconds, got {value!r}")
    return timedelta(seconds=value)


def _duration(minimum=None, maximum=None, allow_zero: bool = True, allow_negative: bool = False) -> DurationRule:
    return DurationRule(_seconds(minimum), _seconds(maximum), allow_zero, allow_negative)


def _color(formats: list[str] | str | None = None) -> ColorRule:
    """Accept color formats by name, e.g. ["hex", "rgb"]."""
    if formats is None:
        return ColorRule()
    if isinstance(formats, str):
        formats = [formats]
    try:
        flags = [ColorFormat[str(name).upper()] for name in formats]
    except KeyError as e:
        raise ValueError(f"Unknown color format {e.args[0]!r}; expected one of hex, rgb, rgba, all") from e
    combined = ColorFormat(0)
    for flag in flags:
        combined |= flag
    return ColorRule(combined)


RULE_FACTORIES: dict[str, Callable[..., BaseRule]] = {
    "not_null": NotNullRule,
    "not_empty": NotEmptyRule,
    "empty": EmptyRule,
    "length": lambda min_length=0, max_length=None: LengthRule(min_length, max_length),
    "min_length": lambda min_length: LengthRule(min_length, None),
    "max_length": lambda max_length: LengthRule(0, max_length),
    "exact_length": lambda length: LengthRule(length, length),
    "regex": _regex,
    "email": EmailRule,
    "credit_card": CreditCardRule,
    "between": lambda lower=None, upper=None, lower_inclusive=True, upper_inclusive=True: BetweenRule(
        lower, upper, lower_inclusive, upper_inclusive
    ),
    "inclusive_between": lambda lower, upper: BetweenRule(lower, upper, True, True),
    "exclusive_between": lambda lower, upper: BetweenRule(lower, upper, False, False),
    "greater_than": _comparison(Comparison.GREATER_THAN),
    "greater_than_or_equal": _comparison(Comparison.GREATER_THAN_OR_EQUAL),
    "less_than": _comparison(Comparison.LESS_THAN),
    "less_than_or_equal": _comparison(Comparison.LESS_THAN_OR_EQUAL),
    "equal": lambda value: EqualRule(value),
    "not_equal": lambda value: NotEqualRule(value),
    "url": lambda require_https=False: UrlRule(require_https),
    "phone_number": PhoneNumberRule,
    "ip_address": lambda allow_ipv4=True, allow_ipv6=True: IpAddressRule(allow_ipv4, allow_ipv6),
    "uuid": lambda allow_nil=False: UuidRule(allow_nil),
    "future": _date(DateRuleType.FUTURE),
    "future_or_present": _date(DateRuleType.FUTURE_OR_PRESENT),
    "past": _date(DateRuleType.PAST),
    "past_or_present": _date(DateRuleType.PAST_OR_PRESENT),
    "after": _date(DateRuleType.AFTER),
    "after_or_equal": _date(DateRuleType.AFTER_OR_EQUAL),
    "before": _date(DateRuleType.BEFORE),
    "before_or_equal": _date(DateRuleType.BEFORE_OR_EQUAL),
    "min_count": _count(CountRuleType.MIN),
    "max_count": _count(CountRuleType.MAX),
    "exact_count": _count(CountRuleType.EXACT),
    "unique": UniqueRule,
    "precision_scale": lambda precision, scale: PrecisionScaleRule(precision, scale),
    "password": PasswordRule,
    "json": JsonRule,
    "file_extension": lambda allowed_extensions, case_sensitive=False: FileExtensionRule(allowed_extensions, case_sensitive),
    "duration": _duration,
    "color": _color,
}


class RuleConfigLoader:
    """
    Loads validators from YAML configuration files.

    Expected YAML format:
    ```yaml
    name: customer
    cascade_mode: continue
    rule_level_cascade_mode: stop_on_first_failure

    rules:
      customer_id:
        - type: not_empty
        - type: regex
          params:
            pattern: "^CUS[0-9]{6}$"

      age:
        - type: inclusive_between
          params: {lower: 18, upper: 120}
          severity: warning

      tags:
        - type: for_each
          items:
            - type: not_empty
            - type: max_length
              params: {max_length: 20}

    rule_sets:
      registration:
        password:
          - type: min_length
            params: {min_length: 8}
            message: "Password is too short"
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            FileNotFoundError: If the file does not exist
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def load_config(self) -> dict[str, Any]:
        """
        Load and parse the YAML file.

        Returns:
            The raw configuration mapping

        Raises:
            RuleConfigError: If YAML is invalid or missing the 'rules' section
        """
        try:
            with open(self.config_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise RuleConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(config, dict) or "rules" not in config:
            raise RuleConfigError("Configuration file must contain 'rules' section")

        return config

    def load_validator(self) -> Validator:
        """
        Build a validator from the configuration file.

        Returns:
            Validator named after the 'name' key, or the file stem

        Raises:
            RuleConfigError: If the configuration is invalid
        """
        with log_operation("Loading rule config", logger=logger, path=str(self.config_path)):
            config = self.load_config()
            config.setdefault("name", self.config_path.stem)
            return self.from_mapping(config)

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> Validator:
        """
        Build a validator from an already parsed configuration mapping.

        Args:
            config: Mapping with the same layout as the YAML file

        Returns:
            The configured validator

        Raises:
            RuleConfigError: If the configuration is invalid
        """
        try:
            with track_duration(rule_config_load_duration_seconds):
                validator = cls._build(config)
        except RuleConfigError:
            record_rule_config_load(success=False)
            raise
        except (ValueError, TypeError, UsageError) as e:
            record_rule_config_load(success=False)
            raise RuleConfigError(f"Invalid rule configuration: {e}") from e

        record_rule_config_load(success=True)
        logger.info(
            "Rule config loaded",
            extra={"validator": validator.name, "rule_sets": validator.rule_set_names},
        )
        return validator

    @classmethod
    def _build(cls, config: Mapping[str, Any]) -> Validator:
        if not isinstance(config, Mapping) or "rules" not in config:
            raise RuleConfigError("Configuration must contain 'rules' section")

        validator = Validator(
            name=config.get("name") or "config_validator",
            cascade_mode=CascadeMode(config.get("cascade_mode", CascadeMode.CONTINUE)),
            rule_level_cascade_mode=CascadeMode(config.get("rule_level_cascade_mode", CascadeMode.CONTINUE)),
        )

        cls._add_properties(validator, config["rules"] or {}, rule_set=None)

        rule_sets = config.get("rule_sets") or {}
        if not isinstance(rule_sets, Mapping):
            raise RuleConfigError("'rule_sets' must map rule set names to property rules")
        for rule_set, properties in rule_sets.items():
            cls._add_properties(validator, properties or {}, rule_set=str(rule_set))

        return validator

    @classmethod
    def _add_properties(cls, validator: Validator, properties: Any, rule_set: str | None) -> None:
        if not isinstance(properties, Mapping):
            raise RuleConfigError("Rules must map property names to rule lists")

        for property_name, rule_list in properties.items():
            if not isinstance(rule_list, list):
                raise RuleConfigError(f"Rules for property '{property_name}' must be a list")

            builder = validator.rule_for(str(property_name), rule_set=rule_set)
            for idx, rule_def in enumerate(rule_list):
                definition = cls._parse_definition(property_name, rule_def, idx)
                if not definition.enabled:
                    logger.debug(
                        "Skipping disabled rule",
                        extra={"property": property_name, "rule_type": definition.type},
                    )
                    continue
                builder.add_rule(cls.build_rule(definition))

    @staticmethod
    def _parse_definition(property_name: str, rule_def: Any, idx: int) -> RuleDefinition:
        if not isinstance(rule_def, Mapping):
            raise RuleConfigError(f"Rule {idx} for property '{property_name}' must be a mapping")
        try:
            return RuleDefinition.model_validate(dict(rule_def))
        except ValidationError as e:
            raise RuleConfigError(f"Invalid rule {idx} for property '{property_name}': {e}") from e

    @classmethod
    def build_rule(cls, definition: RuleDefinition) -> BaseRule:
        """
        Instantiate the rule described by ``definition``.

        Args:
            definition: Parsed rule definition

        Returns:
            Configured rule (severity, message, key and error code applied)

        Raises:
            RuleConfigError: If the parameters do not fit the rule type
        """
        if definition.type == "for_each":
            item_rules = [cls.build_rule(item) for item in definition.items or [] if item.enabled]
            if not item_rules:
                raise RuleConfigError("'for_each' rules require at least one enabled item rule")
            return CollectionRule(item_rules)

        factory = RULE_FACTORIES.get(definition.type)
        if factory is None:
            raise RuleConfigError(f"Unknown rule type: {definition.type}")
        try:
            rule = factory(**definition.params)
        except (TypeError, ValueError) as e:
            raise RuleConfigError(f"Failed to create '{definition.type}' rule: {e}") from e

        rule.severity = definition.severity
        rule.error_code = definition.error_code
        if definition.message:
            rule.with_message(definition.message)
        if definition.message_key:
            rule.with_message_key(definition.message_key)
        return rule
