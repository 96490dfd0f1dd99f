"""
IpAddressRule - validates IPv4 and/or IPv6 addresses.
"""

import ipaddress
from typing import Any

from ..models import Severity, ValidationContext, ValidationOutcome
from .base_rule import BaseRule, is_absent


class IpAddressRule(BaseRule):
    """
    Validates IP addresses with the standard library parser.

    Parameters:
    - allow_ipv4: Accept IPv4 addresses (default: True)
    - allow_ipv6: Accept IPv6 addresses (default: True)
    """

    default_message_key = "IpAddress"

    def __init__(
        self,
        allow_ipv4: bool = True,
        allow_ipv6: bool = True,
        error_message: str | None = None,
        *,
        severity: Severity = Severity.ERROR,
        error_code: str | None = None,
    ):
        if not allow_ipv4 and not allow_ipv6:
            raise ValueError("IpAddressRule requires at least one of allow_ipv4, allow_ipv6")

        super().__init__(error_message, severity=severity, error_code=error_code)
        self.allow_ipv4 = allow_ipv4
        self.allow_ipv6 = allow_ipv6

    def evaluate(self, value: Any, context: ValidationContext | None = None) -> ValidationOutcome:
        if is_absent(value):
            return ValidationOutcome.success()

        try:
            address = ipaddress.ip_address(str(value).strip())
        except ValueError:
            return self.fail(value, context)

        if address.version == 4 and not self.allow_ipv4:
            return self.fail(value, context, variant_key="IpAddressVersion", IpVersion=4)
        if address.version == 6 and not self.allow_ipv6:
            return self.fail(value, context, variant_key="IpAddressVersion", IpVersion=6)

        return ValidationOutcome.success()

    @property
    def rule_type(self) -> str:
        return "ip_address"
