#!/usr/bin/env python3
"""
check-connection: is a TCP port reachable, and who owns the address?
main.py: CLI entry point

Usage:
  python3 main.py example.com 443
  python3 main.py --asn 8.8.8.8 53
  python3 main.py --asn --timeout 2000 --format json example.com 22

Exit status: 0 if the port is open, 1 otherwise (including usage and
resolution errors). The ASN lookup never changes the exit status.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence

# Try uvloop for a faster event loop on Linux/macOS
try:
    import uvloop
except ImportError:
    uvloop = None

from core.asn_lookup import AsnLookupClient
from core.orchestrator import CheckOrchestrator, ProbeTarget
from core.port_parser import PortParseError, parse_port
from reporting.console import write_report
from utils.config import ConfigError, load_config
from utils.constants import DEFAULT_CONFIG_FILE, EXIT_FAILURE, OUTPUT_FORMATS
from utils.logger import get_logger, set_level
from utils.validators import validate_host

__version__ = "1.0.0"

log = get_logger("check_connection")


# ─── CLI ─────────────────────────────────────────────────────────────────────

class _ArgumentParser(argparse.ArgumentParser):
    """argparse exits with 2 on bad usage; this tool's contract is 1."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def build_cli() -> argparse.ArgumentParser:
    ap = _ArgumentParser(
        prog="check-connection",
        usage="%(prog)s [--asn] [options] <host> <port>",
        description="Check whether a TCP port is reachable and, optionally, "
                    "which Autonomous System owns the resolved address.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s example.com 443
  %(prog)s --asn 8.8.8.8 53
  %(prog)s --asn --timeout 2000 --format json example.com 22
""",
    )
    ap.add_argument("host", nargs="?", help="Hostname or literal IP address")
    ap.add_argument("port", nargs="?", help="TCP port (1-65535)")
    ap.add_argument("--asn",         action="store_true",
                    help="Also look up the owning AS via whois.cymru.com")
    ap.add_argument("--timeout",     metavar="MS", type=int, default=None,
                    help="Connect timeout in milliseconds (default: 5000)")
    ap.add_argument("--asn-timeout", metavar="SECONDS", type=float, default=None,
                    help="Give up on the ASN reply after this long (default: wait)")
    ap.add_argument("--format",      choices=OUTPUT_FORMATS, default=None,
                    help="Output format (default: text)")
    ap.add_argument("--config",      default=DEFAULT_CONFIG_FILE, metavar="FILE",
                    help=f"YAML config file (default: {DEFAULT_CONFIG_FILE})")
    ap.add_argument("--verbose", "-v", action="store_true",
                    help="Log every step to stderr")
    ap.add_argument("--version",     action="version",
                    version=f"%(prog)s {__version__}")
    return ap


def _run(coro):
    if uvloop is not None:
        return uvloop.run(coro)
    return asyncio.run(coro)


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_cli()
    args = ap.parse_args(argv)

    if not args.host or not args.port:
        ap.print_usage(sys.stderr)
        return EXIT_FAILURE

    try:
        cfg = load_config(args.config).override(
            timeout_ms=args.timeout,
            asn_timeout_s=args.asn_timeout,
            format=args.format,
            log_level="DEBUG" if args.verbose else None,
        )
        ok, err = validate_host(args.host)
        if not ok:
            raise ValueError(err)
        target = ProbeTarget(args.host, parse_port(args.port), cfg.timeout_ms)
    except (ConfigError, PortParseError, ValueError) as exc:
        ap.print_usage(sys.stderr)
        print(f"{ap.prog}: error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    set_level(cfg.log_level)
    log.debug(f"Target   : {target.host}:{target.port}")
    log.debug(f"Timeout  : {target.timeout_ms}ms")
    log.debug(f"ASN      : {'yes' if args.asn else 'no'}")

    orchestrator = CheckOrchestrator(
        asn_client=AsnLookupClient(ceiling_s=cfg.asn_timeout_s),
    )
    try:
        report = _run(orchestrator.run(target, want_asn=args.asn))
    except KeyboardInterrupt:
        print("\n  [!] Interrupted by user", file=sys.stderr)
        return EXIT_FAILURE

    write_report(report, cfg.format)
    return report.exit_code


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
