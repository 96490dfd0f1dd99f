"""
Rule combinators.

Wrapper rules that add behavior around other rules without changing the rule
contract: conditions, value transforms, AND/OR composites, per-item
collection validation and nested validators.
"""

from .child_validator_rule import ChildValidatorRule
from .collection_rule import CollectionRule
from .composite_rule import CompositeRule
from .conditional_rule import ConditionalRule
from .transform_rule import TransformRule, lowercase, trim_string

__all__ = [
    "ConditionalRule",
    "TransformRule",
    "CompositeRule",
    "CollectionRule",
    "ChildValidatorRule",
    "trim_string",
    "lowercase",
]
