"""
reporting/jsonout.py
JSON rendering of a CheckReport (one document per run).
"""

from __future__ import annotations

import json
from dataclasses import asdict

from core.orchestrator import CheckReport


def report_to_dict(report: CheckReport) -> dict:
    outcome = report.outcome
    return {
        "host":             report.target.host,
        "port":             report.target.port,
        "timeout_ms":       report.target.timeout_ms,
        "ip":               report.endpoint.ip if report.endpoint else None,
        "resolution_error": report.resolution_error,
        "status":           outcome.status.name.lower() if outcome else None,
        "open":             bool(outcome and outcome.is_open),
        "reason":           outcome.reason if outcome else None,
        "asn_requested":    report.asn_requested,
        "asn":              asdict(report.asn) if report.asn else None,
        "asn_error":        report.asn_error,
        "exit_code":        report.exit_code,
    }


def to_json(report: CheckReport) -> str:
    """Serialize a check report to JSON."""
    return json.dumps(report_to_dict(report), indent=2, default=str)
