"""
core/orchestrator.py
Sequencing for one check-connection run.

  Start → Resolving → ProbingAndMaybeLookup → Reporting → Done
            │
            └─ resolution failure → Failed (exit 1, nothing else runs)

Probe and ASN lookup start together once the endpoint is known and are
awaited with asyncio.gather; each converts its own failures into data, so
neither can suppress the other. The exit code depends on the probe alone.

Layering: imports only core leaves and utils. Does NOT import reporting.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from core.asn_lookup import AsnLookupClient, AsnLookupError, AsnRecord
from core.prober import PortProber, ProbeOutcome
from core.resolver import ResolutionError, ResolvedEndpoint, Resolver
from utils.constants import DEFAULT_TIMEOUT_MS, EXIT_FAILURE, EXIT_OK
from utils.logger import get_logger
from utils.validators import validate_port, validate_timeout_ms

log = get_logger("check_connection.orchestrator")


# ─── Data Classes ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ProbeTarget:
    host:       str
    port:       int
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self):
        ok, err = validate_port(self.port)
        if not ok:
            raise ValueError(err)
        ok, err = validate_timeout_ms(self.timeout_ms)
        if not ok:
            raise ValueError(err)


@dataclass(frozen=True)
class CheckReport:
    """Everything one run produced, as plain data for the reporters."""
    target:           ProbeTarget
    endpoint:         Optional[ResolvedEndpoint] = None
    resolution_error: Optional[str] = None
    outcome:          Optional[ProbeOutcome] = None
    asn_requested:    bool = False
    asn:              Optional[AsnRecord] = None
    asn_error:        Optional[str] = None

    @property
    def exit_code(self) -> int:
        if self.outcome is not None and self.outcome.is_open:
            return EXIT_OK
        return EXIT_FAILURE


# ─── Orchestrator ─────────────────────────────────────────────────────────────

class CheckOrchestrator:
    """
    Runs the state machine exactly once per call to run().

    Collaborators are injectable; defaults talk to the real network.
    """

    def __init__(
        self,
        resolver: Optional[Resolver] = None,
        prober: Optional[PortProber] = None,
        asn_client: Optional[AsnLookupClient] = None,
        progress_cb: Optional[Callable[[str], None]] = None,
    ):
        self._resolver = resolver or Resolver()
        self._prober = prober or PortProber()
        self._asn = asn_client or AsnLookupClient()
        self._cb = progress_cb or (lambda msg: log.debug(msg))

    async def run(self, target: ProbeTarget, want_asn: bool = False) -> CheckReport:
        # ── Resolving ─────────────────────────────────────────────────────────
        self._cb(f"[*] Resolving {target.host}")
        try:
            endpoint = await self._resolver.resolve(target.host)
        except ResolutionError as exc:
            self._cb(f"[-] Resolution failed: {exc.cause}")
            return CheckReport(
                target=target,
                resolution_error=str(exc),
                asn_requested=want_asn,
            )

        # ── ProbingAndMaybeLookup ─────────────────────────────────────────────
        self._cb(
            f"[*] {target.host} → {endpoint.ip}; probing port {target.port}"
            + (" + ASN lookup" if want_asn else "")
        )
        probe = self._prober.probe(endpoint.ip, target.port, target.timeout_ms)
        if want_asn:
            outcome, (record, asn_error) = await asyncio.gather(
                probe, self._lookup(endpoint.ip)
            )
        else:
            outcome = await probe
            record, asn_error = None, None

        # ── Reporting ─────────────────────────────────────────────────────────
        summary = f"[✓] Probe {outcome.status.name}"
        if want_asn:
            summary += ", ASN record found" if record else ", no ASN record"
        self._cb(summary)
        return CheckReport(
            target=target,
            endpoint=endpoint,
            outcome=outcome,
            asn_requested=want_asn,
            asn=record,
            asn_error=asn_error,
        )

    async def _lookup(self, ip: str) -> Tuple[Optional[AsnRecord], Optional[str]]:
        """Contain transport failures: (record, None) or (None, message)."""
        try:
            return await self._asn.lookup(ip), None
        except AsnLookupError as exc:
            self._cb(f"[-] ASN lookup failed: {exc}")
            return None, str(exc)
        except Exception as exc:
            # injected clients may raise anything; it must not escape gather()
            log.debug(f"ASN client raised {type(exc).__name__}: {exc}")
            self._cb(f"[-] ASN lookup failed: {exc}")
            return None, str(exc) or type(exc).__name__


# ─── Module-level convenience ────────────────────────────────────────────────

async def check(
    host: str,
    port: int,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    want_asn: bool = False,
    asn_timeout_s: Optional[float] = None,
) -> CheckReport:
    """check("example.com", 443, want_asn=True) → CheckReport"""
    orchestrator = CheckOrchestrator(asn_client=AsnLookupClient(ceiling_s=asn_timeout_s))
    return await orchestrator.run(ProbeTarget(host, port, timeout_ms), want_asn=want_asn)
