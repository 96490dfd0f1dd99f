"""
Core data models for the validation engine.

Failures, outcomes and rule definitions use Pydantic for runtime validation.
"""

from .enums import ApplyConditionTo, CascadeMode, CompositeOperator, Severity
from .rule_definition import RuleDefinition
from .validation_context import ValidationContext
from .validation_failure import ValidationFailure, join_property_path
from .validation_outcome import ValidationOutcome

__all__ = [
    "Severity",
    "CascadeMode",
    "ApplyConditionTo",
    "CompositeOperator",
    "ValidationFailure",
    "ValidationOutcome",
    "ValidationContext",
    "RuleDefinition",
    "join_property_path",
]
