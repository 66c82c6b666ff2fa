"""
Subdomain parsing strategies.

A subdomain parser maps a raw host (``api.example.com:8080``) to a logical
subdomain label or None. The routing configuration holds exactly one active
parser and swaps it by assignment.
"""

import ipaddress
import socket
from typing import Callable, Optional

SubdomainParser = Callable[[Optional[str]], Optional[str]]


def is_ip_address(host: str) -> bool:
    """
    True for IPv6 literals and for IPv4 in any inet_aton form.

    Shorthand and octal IPv4 forms such as ``1.2.3`` or ``010.0.0.1`` count
    as addresses, as browsers and resolvers treat them.
    """
    try:
        ipaddress.ip_address(host)
    except ValueError:
        pass
    else:
        return True

    try:
        socket.inet_aton(host)
    except OSError:
        return False
    return True


class ThreeSectionSubdomainParser:
    """
    Returns the left-most section of a fully qualified host name.

    None is returned for empty hosts, IP addresses, and hosts with only a
    second-level and top-level domain (``example.com``).
    """

    def execute(self, host: Optional[str]) -> Optional[str]:
        if not host:
            return None

        # The port does not take part in parsing.
        host = host.split(":", 1)[0]

        if is_ip_address(host):
            return None

        sections = host.split(".")
        if len(sections) < 3:
            return None
        return sections[0]

    __call__ = execute


class SubdomainParsers:
    """Ready-made subdomain parser strategies."""

    @staticmethod
    def three_section() -> SubdomainParser:
        """Left-most section of the FQDN."""
        return ThreeSectionSubdomainParser().execute
