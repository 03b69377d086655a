"""
check-connection Core: Public API

from core import check, CheckOrchestrator, ProbeTarget
"""
from core.port_parser  import PortParser, parse_port, PortParseError
from core.resolver     import Resolver, ResolvedEndpoint, ResolutionError, resolve
from core.prober       import PortProber, ProbeOutcome, probe
from core.asn_lookup   import (AsnLookupClient, AsnLookupError, AsnRecord,
                               lookup_asn, parse_whois_response)
from core.orchestrator import CheckOrchestrator, CheckReport, ProbeTarget, check

__all__ = [
    "PortParser", "parse_port", "PortParseError",
    "Resolver", "ResolvedEndpoint", "ResolutionError", "resolve",
    "PortProber", "ProbeOutcome", "probe",
    "AsnLookupClient", "AsnLookupError", "AsnRecord", "lookup_asn",
    "parse_whois_response",
    "CheckOrchestrator", "CheckReport", "ProbeTarget", "check",
]
