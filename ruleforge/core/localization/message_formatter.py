"""
Message formatting capability.

The engine never localizes on its own: a rule that carries a message key asks
the formatter it was given for the text. Locale is a property of the
formatter instance, never process-global state.
"""

from abc import ABC, abstractmethod
from typing import Any

from .messages import DEFAULT_CATALOGS


def format_template(template: str, args: dict[str, Any]) -> str:
    """
    Substitute ``{Name}`` placeholders in ``template``.

    Unknown placeholders are left untouched and ``None`` renders as an empty
    string. Literal braces elsewhere (e.g., in regex patterns) are safe because
    only known names are replaced.
    """
    message = template
    for name, value in args.items():
        message = message.replace(f"{{{name}}}", "" if value is None else str(value))
    return message


class MessageFormatter(ABC):
    """Capability turning a message key plus arguments into text."""

    @abstractmethod
    def format_message(self, key: str, args: dict[str, Any]) -> str:
        """
        Produce the message for ``key``.

        Args:
            key: Catalog key (e.g., "NotEmpty")
            args: Placeholder values (PropertyName, PropertyValue, rule specifics)

        Returns:
            Formatted message
        """


class DefaultMessageFormatter(MessageFormatter):
    """
    Catalog-backed formatter bound to one locale.

    Lookup order: the exact locale ("tr-TR"), its parent ("tr"), the fallback
    locale, and finally the key itself.
    """

    def __init__(
        self,
        catalogs: dict[str, dict[str, str]] | None = None,
        locale: str = "en",
        fallback_locale: str = "en",
    ):
        source = catalogs if catalogs is not None else DEFAULT_CATALOGS
        self._catalogs: dict[str, dict[str, str]] = {name: dict(messages) for name, messages in source.items()}
        self.locale = locale
        self.fallback_locale = fallback_locale

    def add_messages(self, locale: str, messages: dict[str, str]) -> None:
        """
        Add or override messages for ``locale``.

        Raises:
            ValueError: If locale is empty
        """
        if not locale:
            raise ValueError("locale must be a non-empty string")
        self._catalogs.setdefault(locale, {}).update(messages)

    def with_locale(self, locale: str) -> "DefaultMessageFormatter":
        """Return a formatter with the same catalogs bound to another locale."""
        return DefaultMessageFormatter(self._catalogs, locale=locale, fallback_locale=self.fallback_locale)

    def get_template(self, key: str) -> str:
        if not key:
            raise ValueError("message key must be a non-empty string")

        for locale in self._candidate_locales():
            messages = self._catalogs.get(locale)
            if messages and key in messages:
                return messages[key]

        return key

    def format_message(self, key: str, args: dict[str, Any]) -> str:
        return format_template(self.get_template(key), args)

    def _candidate_locales(self) -> list[str]:
        candidates = [self.locale]
        parent = self.locale.replace("_", "-").split("-")[0]
        if parent and parent != self.locale:
            candidates.append(parent)
        if self.fallback_locale not in candidates:
            candidates.append(self.fallback_locale)
        return candidates
