"""
core/port_parser.py
Strict parser for the <port> command-line argument.

Accepts:
  "80"        → 80
  " 443 "     → 443
  "0080"      → 80

Rejects:
  "", "abc", "80.5", "-80", "+80", "0", "65536", "80,443", "1-1000", None
"""

from __future__ import annotations

import re

from utils.constants import PORT_MIN, PORT_MAX


# ─── Custom Exceptions ────────────────────────────────────────────────────────

class PortParseError(ValueError):
    """Raised when the port argument is invalid."""


# ─── Parser ───────────────────────────────────────────────────────────────────

class PortParser:
    """
    Parse a single decimal TCP port.

    All errors raise PortParseError with a human-readable message.
    Lists and ranges are rejected: one invocation probes one port.
    """

    _SINGLE_RE = re.compile(r"^\d+$")

    def parse(self, spec: str) -> int:
        """
        Parse port spec → int in [1, 65535].

        Raises PortParseError on any invalid input.
        """
        if not isinstance(spec, str):
            raise PortParseError(f"Expected string, got {type(spec).__name__}")

        spec = spec.strip()
        if not spec:
            raise PortParseError("Port is empty")

        if "," in spec or re.fullmatch(r"\d+-\d+", spec):
            raise PortParseError(
                f"Only a single port can be checked, got {spec!r}"
            )

        if not self._SINGLE_RE.match(spec):
            raise PortParseError(f"Invalid port token: {spec!r}")

        port = int(spec)
        if not (PORT_MIN <= port <= PORT_MAX):
            raise PortParseError(
                f"Port {port} out of valid range [{PORT_MIN}-{PORT_MAX}]"
            )
        return port


# ─── Module-level convenience ────────────────────────────────────────────────

_default_parser = PortParser()


def parse_port(spec: str) -> int:
    """Convenience wrapper: parse_port('443') → 443"""
    return _default_parser.parse(spec)
