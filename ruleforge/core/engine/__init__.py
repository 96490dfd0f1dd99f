"""
Validation engine.

Property chains, the fluent rule builder, validators, the type registry and
declarative (YAML) validator loading.
"""

from .property_chain import PropertyRuleChain, attribute_accessor, resolve_property
from .registry import ValidatorRegistry
from .rule_builder import RuleBuilder
from .rule_config import RULE_FACTORIES, RuleConfigLoader
from .validator import ALL_RULE_SETS, DEFAULT_RULE_SET, Validator

__all__ = [
    "PropertyRuleChain",
    "attribute_accessor",
    "resolve_property",
    "RuleBuilder",
    "Validator",
    "DEFAULT_RULE_SET",
    "ALL_RULE_SETS",
    "ValidatorRegistry",
    "RuleConfigLoader",
    "RULE_FACTORIES",
]
