"""
Enumerations shared by rules, chains and validators.
"""

from enum import Enum


class Severity(str, Enum):
    """
    Severity attached to a validation failure.

    Severity never affects ``ValidationOutcome.is_valid``: an INFO failure is
    still a failure. Callers that only care about errors filter explicitly
    with ``ValidationOutcome.by_severity``.
    """

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class CascadeMode(str, Enum):
    """How evaluation proceeds after a failure."""

    CONTINUE = "continue"
    STOP_ON_FIRST_FAILURE = "stop_on_first_failure"


class ApplyConditionTo(str, Enum):
    """Scope of a when/unless condition declared on a rule builder."""

    ALL_RULES = "all_rules"
    CURRENT_RULE = "current_rule"


class CompositeOperator(str, Enum):
    """Boolean operator joining the sub-rules of a composite rule."""

    AND = "and"
    OR = "or"
