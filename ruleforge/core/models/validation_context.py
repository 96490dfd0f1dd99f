"""
Evaluation context handed to every rule.
"""

from typing import TYPE_CHECKING, Any

from .enums import CascadeMode

if TYPE_CHECKING:
    from ..localization.message_formatter import MessageFormatter


class ValidationContext:
    """
    Explicit per-call state for one evaluation.

    A context is created by the validator for each ``validate`` call and
    narrowed per property chain; it is never shared between calls, so the
    formatter travels with the call instead of living in global state.

    Attributes:
        instance: The parent object whose property is being evaluated
        formatter: Message formatter for keyed messages (optional)
        display_name: Name used for the {PropertyName} placeholder
        root_data: Free-form data shared by all rules during one call
        cascade_mode: Effective cascade of the chain being evaluated; nested
            rules that run several sub-rules (CollectionRule) inherit it
        validator_cascade_mode: Cascade of the validator running the call;
            STOP_ON_FIRST_FAILURE here overrides every nested setting
    """

    def __init__(
        self,
        instance: Any = None,
        formatter: "MessageFormatter | None" = None,
        display_name: str = "",
        root_data: dict[str, Any] | None = None,
        cascade_mode: CascadeMode | None = None,
        validator_cascade_mode: CascadeMode | None = None,
    ):
        self.instance = instance
        self.formatter = formatter
        self.display_name = display_name
        self.root_data = root_data if root_data is not None else {}
        self.cascade_mode = cascade_mode
        self.validator_cascade_mode = validator_cascade_mode

    @property
    def stop_forced(self) -> bool:
        """True when the validator stops every chain at its first failure."""
        return self.validator_cascade_mode is CascadeMode.STOP_ON_FIRST_FAILURE

    def for_property(self, display_name: str, cascade_mode: CascadeMode | None = None) -> "ValidationContext":
        """Return a context for one property of the same instance."""
        return ValidationContext(
            instance=self.instance,
            formatter=self.formatter,
            display_name=display_name,
            root_data=self.root_data,
            cascade_mode=cascade_mode or self.cascade_mode,
            validator_cascade_mode=self.validator_cascade_mode,
        )

    def __repr__(self) -> str:
        return f"ValidationContext(instance={type(self.instance).__name__}, display_name={self.display_name!r})"
