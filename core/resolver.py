"""
core/resolver.py
Hostname → IP adapter over the event loop's getaddrinfo.

The only capability consumed from the environment's resolver. No retries,
no timeout beyond what the system resolver applies on its own.

Layering: imports only utils.
"""

from __future__ import annotations

import asyncio
import socket
from dataclasses import dataclass

from utils.logger import get_logger

log = get_logger("check_connection.resolver")


@dataclass(frozen=True)
class ResolvedEndpoint:
    original_host: str
    ip:            str


class ResolutionError(Exception):
    """Hostname could not be resolved (NXDOMAIN, no network, bad name)."""

    def __init__(self, host: str, cause: BaseException | str):
        self.host = host
        self.cause = cause
        super().__init__(f"Error resolving hostname '{host}': {cause}")


class Resolver:
    """Async resolver returning the first address the system prefers."""

    async def resolve(self, host: str) -> ResolvedEndpoint:
        """
        Resolve host (name or literal IP) to a ResolvedEndpoint.

        Raises ResolutionError on failure.
        """
        loop = asyncio.get_running_loop()
        try:
            infos = await loop.getaddrinfo(host, None, type=socket.SOCK_STREAM)
        except socket.gaierror as exc:
            raise ResolutionError(host, exc.strerror or exc) from exc
        except UnicodeError as exc:
            # IDNA encoding rejects malformed labels (empty, too long, ...)
            raise ResolutionError(host, f"malformed host name ({exc})") from exc
        except OSError as exc:
            raise ResolutionError(host, exc) from exc

        if not infos:
            raise ResolutionError(host, "no addresses returned")

        ip = infos[0][4][0]
        log.debug(f"{host} → {ip} ({len(infos)} address records)")
        return ResolvedEndpoint(original_host=host, ip=ip)


# ─── Module-level convenience ────────────────────────────────────────────────

_resolver = Resolver()


async def resolve(host: str) -> ResolvedEndpoint:
    """Module-level convenience function."""
    return await _resolver.resolve(host)
