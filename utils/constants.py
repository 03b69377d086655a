"""
check-connection Constants & Enums
"""

from enum import IntEnum


# ─── Probe States ─────────────────────────────────────────────────────────────
class ProbeStatus(IntEnum):
    OPEN      = 0
    CLOSED    = 1    # peer reset/aborted during the handshake
    TIMED_OUT = 2    # no answer before the probe timer fired
    ERROR     = 3    # refused, unreachable, network down, ...


# ─── Exit Codes ───────────────────────────────────────────────────────────────
EXIT_OK      = 0
EXIT_FAILURE = 1

# ─── Probe Defaults ───────────────────────────────────────────────────────────
DEFAULT_TIMEOUT_MS = 5000

# ─── Port Limits ──────────────────────────────────────────────────────────────
PORT_MIN = 1
PORT_MAX = 65535

# ─── Team Cymru IP-to-ASN whois service (protocol constants) ──────────────────
CYMRU_WHOIS_HOST = "whois.cymru.com"
CYMRU_WHOIS_PORT = 43
CYMRU_VERBOSE_FLAG = "-v"

# Column order of a verbose reply row:
#   AS | IP | BGP Prefix | CC | Registry | Allocated | AS Name
ASN_FIELD_COUNT = 7

# ─── Configuration ────────────────────────────────────────────────────────────
DEFAULT_CONFIG_FILE = "check-connection.yaml"
OUTPUT_FORMATS = ("text", "json")

# ─── Layering Contract (hard import rules - enforced by tests) ───────────────
# core      → may import: utils
# reporting → may import: core (data types only), utils
# utils     → stdlib + third-party only
# NEVER: core imports reporting or main
