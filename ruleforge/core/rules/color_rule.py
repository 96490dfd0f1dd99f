"""
ColorRule - validates CSS-style color strings.
"""

import re
from enum import Flag
from typing import Any

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent


class ColorFormat(Flag):
    """Accepted color notations; combine with ``|``."""

    HEX = 1
    RGB = 2
    RGBA = 4
    ALL = 7


_CHANNEL = r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"

COLOR_PATTERNS: dict[ColorFormat, re.Pattern] = {
    # #rgb, #rrggbb, #rgba, #rrggbbaa
    ColorFormat.HEX: re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$|^#(?:[0-9a-fA-F]{4}){1,2}$"),
    ColorFormat.RGB: re.compile(rf"^rgb\(\s*(?:{_CHANNEL}\s*,\s*){{2}}{_CHANNEL}\s*\)$"),
    ColorFormat.RGBA: re.compile(rf"^rgba\(\s*(?:{_CHANNEL}\s*,\s*){{3}}(?:0|1|0?\.[0-9]+)\s*\)$"),
}


class ColorRule(BaseRule):
    """
    Validates that a string is a color in one of the accepted formats.

    Parameters:
    - formats: ColorFormat flags (HEX, RGB, RGBA or ALL)
    """

    default_message_key = "Color"

    def __init__(
        self,
        formats: ColorFormat = ColorFormat.ALL,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        formats = ColorFormat(formats)
        if not formats:
            raise ValueError("ColorRule requires at least one color format")
        super().__init__(error_message, severity=severity, error_code=error_code)
        self.formats = formats

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if is_absent(value):
            return ValidationOutcome.success()

        text = str(value).strip()
        for color_format, pattern in COLOR_PATTERNS.items():
            if color_format in self.formats and pattern.match(text):
                return ValidationOutcome.success()

        return self.fail(value, context)

    @property
    def rule_type(self) -> str:
        return "color"
