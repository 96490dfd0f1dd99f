"""
ruleforge - declarative, composable object validation.

Declare rules per property, evaluate them synchronously or asynchronously
and get back an ordered list of failures instead of an exception.
"""

from .core.combinators import (
    ChildValidatorRule,
    CollectionRule,
    CompositeRule,
    ConditionalRule,
    TransformRule,
    lowercase,
    trim_string,
)
from .core.engine import PropertyRuleChain, RuleBuilder, RuleConfigLoader, Validator, ValidatorRegistry
from .core.errors import (
    InvalidPropertyExpressionError,
    RuleConfigError,
    RuleForgeError,
    UnknownRuleSetError,
    UnsupportedOperationError,
    UsageError,
    ValidationException,
    ValidatorNotRegisteredError,
)
from .core.localization import DefaultMessageFormatter, MessageFormatter
from .core.models import (
    ApplyConditionTo,
    CascadeMode,
    CompositeOperator,
    Severity,
    ValidationContext,
    ValidationFailure,
    ValidationOutcome,
)
from .core.rules import BaseRule

__version__ = "0.1.0"

__all__ = [
    "Validator",
    "RuleBuilder",
    "PropertyRuleChain",
    "ValidatorRegistry",
    "RuleConfigLoader",
    "BaseRule",
    "ConditionalRule",
    "TransformRule",
    "CompositeRule",
    "CollectionRule",
    "ChildValidatorRule",
    "trim_string",
    "lowercase",
    "ValidationOutcome",
    "ValidationFailure",
    "ValidationContext",
    "Severity",
    "CascadeMode",
    "ApplyConditionTo",
    "CompositeOperator",
    "MessageFormatter",
    "DefaultMessageFormatter",
    "RuleForgeError",
    "UsageError",
    "UnsupportedOperationError",
    "UnknownRuleSetError",
    "InvalidPropertyExpressionError",
    "ValidatorNotRegisteredError",
    "RuleConfigError",
    "ValidationException",
]
