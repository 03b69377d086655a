"""
core/asn_lookup.py
IP → Autonomous System lookup against Team Cymru's whois service.

Wire protocol (TCP/43, plaintext):
  client → "-v <ip>\\n"
  server → header row + one pipe-delimited data row, then closes.

    AS      | IP               | BGP Prefix          | CC | Registry | Allocated  | AS Name
    15169   | 8.8.8.8          | 8.8.8.0/24          | US | arin     | 2023-12-28 | GOOGLE - Google LLC, US

There is no length framing: end-of-stream is the only completion signal, so
the read is bounded only by the server, or by the optional ceiling.

Layering: imports only utils.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

from utils.constants import (
    ASN_FIELD_COUNT, CYMRU_VERBOSE_FLAG, CYMRU_WHOIS_HOST, CYMRU_WHOIS_PORT,
)
from utils.logger import get_logger

log = get_logger("check_connection.asn")


@dataclass(frozen=True)
class AsnRecord:
    asn:            str
    reported_ip:    str
    prefix:         str
    country_code:   str
    registry:       str
    allocated_date: str
    as_name:        str


class AsnLookupError(Exception):
    """Transport-level failure talking to the whois service."""

    def __init__(self, cause: BaseException | str):
        self.cause = cause
        super().__init__(str(cause) or type(cause).__name__)


# ─── Parsing ──────────────────────────────────────────────────────────────────

def parse_whois_response(text: str) -> Optional[AsnRecord]:
    """
    Parse a verbose Cymru reply. Returns None when there is no usable row.

    Only the first data row (second non-empty line) is consulted; trailing
    columns past the seventh are ignored. Never raises on odd input.
    """
    lines = [line.strip() for line in text.split("\n")]
    lines = [line for line in lines if line]
    if len(lines) < 2:
        return None

    columns = [c.strip() for c in lines[1].split("|")]
    if len(columns) < ASN_FIELD_COUNT:
        return None

    asn, reported_ip, prefix, cc, registry, allocated, as_name = columns[:ASN_FIELD_COUNT]
    return AsnRecord(
        asn=asn,
        reported_ip=reported_ip,
        prefix=prefix,
        country_code=cc,
        registry=registry,
        allocated_date=allocated,
        as_name=as_name,
    )


# ─── Client ───────────────────────────────────────────────────────────────────

class AsnLookupClient:
    """
    One whois session per lookup(); no pooling, no caching, no retries.

    host/port exist for tests only; the service address is fixed.
    """

    def __init__(
        self,
        ceiling_s: Optional[float] = None,
        host: str = CYMRU_WHOIS_HOST,
        port: int = CYMRU_WHOIS_PORT,
    ):
        self._ceiling_s = ceiling_s
        self._host = host
        self._port = port

    async def lookup(self, ip: str) -> Optional[AsnRecord]:
        """
        Query the service for ip (IPv4 or IPv6, passed through verbatim).

        Raises AsnLookupError on connect / mid-stream failures or when the
        optional ceiling elapses.
        """
        try:
            # timeout=None waits for as long as the server keeps the session
            raw = await asyncio.wait_for(self._exchange(ip), timeout=self._ceiling_s)
        except asyncio.TimeoutError as exc:
            raise AsnLookupError(
                f"No complete reply from {self._host}:{self._port} "
                f"within {self._ceiling_s}s"
            ) from exc

        text = raw.decode("utf-8", errors="replace")
        record = parse_whois_response(text)
        if record is None:
            log.debug(f"No parseable ASN row for {ip} ({len(raw)} bytes received)")
        return record

    async def _exchange(self, ip: str) -> bytes:
        # Every OSError (TimeoutError included) leaves as AsnLookupError;
        # a TimeoutError seen by lookup() is always the ceiling.
        try:
            reader, writer = await asyncio.open_connection(self._host, self._port)
        except OSError as exc:
            raise AsnLookupError(exc) from exc
        try:
            writer.write(f"{CYMRU_VERBOSE_FLAG} {ip}\n".encode())
            await writer.drain()
            # read() with no size accumulates until the peer closes
            return await reader.read()
        except OSError as exc:
            raise AsnLookupError(exc) from exc
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError:
                pass


# ─── Module-level convenience ────────────────────────────────────────────────

async def lookup_asn(ip: str, ceiling_s: Optional[float] = None) -> Optional[AsnRecord]:
    """Module-level convenience function."""
    return await AsnLookupClient(ceiling_s=ceiling_s).lookup(ip)
