"""
Validation rule implementations.

Provides rules for presence, length, patterns (regex, email, URL, phone,
IP address, UUID, color, JSON, file extension), passwords, credit cards,
ranges and comparisons, dates, durations, collection counts, decimal precision and custom
predicates.
"""

from .base_rule import DEFAULT_DISPLAY_NAME, BaseRule, is_absent
from .color_rule import ColorFormat, ColorRule
from .comparison_rule import Comparison, ComparisonRule, EqualRule, NotEqualRule
from .count_rule import CountRule, CountRuleType, UniqueRule
from .credit_card_rule import CreditCardRule, luhn_checksum_valid
from .date_rule import DateRule, DateRuleType
from .duration_rule import DurationRule
from .email_rule import EmailRule
from .enum_rule import IsInEnumRule
from .file_extension_rule import FileExtensionRule
from .ip_address_rule import IpAddressRule
from .json_rule import JsonRule, json_depth
from .length_rule import LengthRule
from .must_rule import MustRule
from .not_empty_rule import EmptyRule, NotEmptyRule, NotNullRule, is_empty
from .password_rule import PasswordRule
from .phone_number_rule import PhoneNumberRule
from .precision_scale_rule import PrecisionScaleRule
from .range_rule import BetweenRule
from .regex_rule import RegexRule
from .url_rule import UrlRule
from .uuid_rule import UuidRule

__all__ = [
    "BaseRule",
    "DEFAULT_DISPLAY_NAME",
    "is_absent",
    "is_empty",
    "NotNullRule",
    "NotEmptyRule",
    "EmptyRule",
    "LengthRule",
    "RegexRule",
    "EmailRule",
    "CreditCardRule",
    "luhn_checksum_valid",
    "BetweenRule",
    "Comparison",
    "ComparisonRule",
    "EqualRule",
    "NotEqualRule",
    "MustRule",
    "UrlRule",
    "PhoneNumberRule",
    "IpAddressRule",
    "UuidRule",
    "IsInEnumRule",
    "DateRule",
    "DateRuleType",
    "CountRule",
    "CountRuleType",
    "UniqueRule",
    "PrecisionScaleRule",
    "PasswordRule",
    "JsonRule",
    "json_depth",
    "FileExtensionRule",
    "DurationRule",
    "ColorRule",
    "ColorFormat",
]
