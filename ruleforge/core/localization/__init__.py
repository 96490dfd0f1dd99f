"""
Message formatting and built-in message catalogs.
"""

from .message_formatter import DefaultMessageFormatter, MessageFormatter, format_template
from .messages import DEFAULT_CATALOGS, ENGLISH_MESSAGES, TURKISH_MESSAGES

__all__ = [
    "MessageFormatter",
    "DefaultMessageFormatter",
    "format_template",
    "ENGLISH_MESSAGES",
    "TURKISH_MESSAGES",
    "DEFAULT_CATALOGS",
]
