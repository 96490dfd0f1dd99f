"""
FileExtensionRule - validates a file name against allowed extensions.
"""

from pathlib import PurePath
from typing import Any

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent


def normalize_extension(extension: str) -> str:
    extension = extension.strip()
    return extension if extension.startswith(".") else f".{extension}"


class FileExtensionRule(BaseRule):
    """
    Validates that a file name or path ends with one of the allowed extensions.

    Extensions may be given with or without the leading dot ("pdf" or
    ".pdf"). Only the last suffix counts, so "report.tar.gz" has ".gz".

    Parameters:
    - allowed_extensions: Accepted extensions
    - case_sensitive: Compare extensions exactly instead of ignoring case
    """

    default_message_key = "FileExtension"

    def __init__(
        self,
        allowed_extensions: list[str] | tuple[str, ...],
        case_sensitive: bool = False,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        if isinstance(allowed_extensions, str):
            allowed_extensions = [allowed_extensions]
        extensions = [normalize_extension(ext) for ext in allowed_extensions if ext and ext.strip()]
        if not extensions:
            raise ValueError("FileExtensionRule requires at least one allowed extension")

        super().__init__(error_message, severity=severity, error_code=error_code)
        self.allowed_extensions = extensions
        self.case_sensitive = case_sensitive

    def _matches(self, extension: str) -> bool:
        if self.case_sensitive:
            return extension in self.allowed_extensions
        return extension.casefold() in {ext.casefold() for ext in self.allowed_extensions}

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if is_absent(value):
            return ValidationOutcome.success()

        extension = PurePath(str(value)).suffix
        if not extension:
            return self.fail(value, context, variant_key="FileExtensionMissing")
        if not self._matches(extension):
            return self.fail(value, context, Extensions=", ".join(self.allowed_extensions))

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "file_extension"
