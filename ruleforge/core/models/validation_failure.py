"""
ValidationFailure model representing one unmet rule on one property path.
"""

from typing import Any

from pydantic import BaseModel, Field

from .enums import Severity


def join_property_path(prefix: str, path: str) -> str:
    """
    Join two property path segments.

    An empty side is dropped, an indexer segment (``[0]...``) is appended
    without a separator, anything else is dot-separated.

    Examples:
        >>> join_property_path("tags", "[0]")
        'tags[0]'
        >>> join_property_path("address", "street")
        'address.street'
        >>> join_property_path("", "street")
        'street'
    """
    if not prefix:
        return path
    if not path:
        return prefix
    if path.startswith("["):
        return f"{prefix}{path}"
    return f"{prefix}.{path}"


class ValidationFailure(BaseModel):
    """
    A single failed check.

    Attributes:
        property_path: Path of the failing property ("address.street", "tags[2]")
        message: Human-readable, already formatted message
        severity: Info, warning or error
        message_key: Catalog key the message was (or could be) resolved from
        error_code: Optional machine-readable code set with ``with_error_code``
        attempted_value: The value that failed the check
    """

    property_path: str = ""
    message: str
    severity: Severity = Severity.ERROR
    message_key: str | None = None
    error_code: str | None = None
    attempted_value: Any = Field(default=None, repr=False)

    def with_path(self, property_path: str) -> "ValidationFailure":
        """Return a copy of this failure relabeled onto ``property_path``."""
        return self.model_copy(update={"property_path": property_path})

    def with_path_prefix(self, prefix: str) -> "ValidationFailure":
        """Return a copy of this failure rooted under ``prefix``."""
        return self.with_path(join_property_path(prefix, self.property_path))

    def __str__(self) -> str:
        if self.property_path:
            return f"{self.property_path}: {self.message}"
        return self.message

    class Config:
        frozen = True
        arbitrary_types_allowed = True
        json_schema_extra = {
            "example": {
                "property_path": "address.street",
                "message": "street must not be empty",
                "severity": "error",
                "message_key": "NotEmpty",
                "error_code": None,
            }
        }
