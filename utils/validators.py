"""
utils/validators.py
Input validation for probe targets and configuration values.
"""

import ipaddress
from typing import Tuple

from utils.constants import PORT_MIN, PORT_MAX


def validate_host(host: str) -> Tuple[bool, str]:
    """
    Validate that host is a plausible hostname or literal IP.

    Only rejects what can never resolve (empty, whitespace, over-long);
    everything else is left to the resolver.

    Returns:
        (is_valid, error_message) tuple
    """
    if not host or not isinstance(host, str):
        return (False, "Host must be a non-empty string")

    if host != host.strip() or any(ch.isspace() for ch in host):
        return (False, f"Host {host!r} contains whitespace")

    if len(host) > 253 and not is_ip(host):
        return (False, "Host name is longer than 253 characters")

    return (True, "")


def validate_port(port: int) -> Tuple[bool, str]:
    """
    Validate that port number is in valid range [1-65535].

    Returns:
        (is_valid, error_message) tuple
    """
    if not isinstance(port, int) or isinstance(port, bool):
        return (False, "Port must be an integer")

    if port < PORT_MIN or port > PORT_MAX:
        return (False, f"Port {port} out of valid range [{PORT_MIN}-{PORT_MAX}]")

    return (True, "")


def validate_timeout_ms(timeout_ms: int) -> Tuple[bool, str]:
    if not isinstance(timeout_ms, int) or isinstance(timeout_ms, bool):
        return (False, "Timeout must be an integer number of milliseconds")
    if timeout_ms <= 0:
        return (False, f"Timeout must be positive, got {timeout_ms}")
    return (True, "")


def is_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
        return True
    except ValueError:
        return False
