"""
reporting/console.py
Human-readable rendering of a CheckReport.

Pure: render_text() maps plain data to lines for stdout and stderr;
write_report() is the only function that touches streams.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import List, TextIO

from core.asn_lookup import AsnRecord
from core.orchestrator import CheckReport
from reporting.jsonout import to_json

NO_ASN_INFO = "No ASN information could be retrieved for this IP."


@dataclass
class Rendered:
    out: List[str] = field(default_factory=list)
    err: List[str] = field(default_factory=list)


def _asn_lines(record: AsnRecord) -> List[str]:
    return [
        f"ASN:          {record.asn}",
        f"AS Name:      {record.as_name}",
        f"BGP Prefix:   {record.prefix}",
        f"Country Code: {record.country_code}",
        f"Registry:     {record.registry}",
        f"Allocated:    {record.allocated_date}",
    ]


def render_text(report: CheckReport) -> Rendered:
    """Render report to stdout/stderr lines."""
    rendered = Rendered()
    if report.resolution_error is not None:
        rendered.err.append(report.resolution_error)
        return rendered

    target, outcome = report.target, report.outcome
    head = f"[{target.host}] resolved to [{report.endpoint.ip}] - Port {target.port}"
    if outcome.is_open:
        rendered.out.append(f"{head} is open")
    else:
        rendered.out.append(f"{head} is NOT open")
        rendered.out.append(f"Reason: {outcome.reason}")

    if not report.asn_requested:
        return rendered
    if report.asn_error is not None:
        rendered.err.append(f"Error fetching ASN info: {report.asn_error}")
    elif report.asn is None:
        rendered.out.append(NO_ASN_INFO)
    else:
        rendered.out.extend(_asn_lines(report.asn))
    return rendered


def write_report(
    report: CheckReport,
    fmt: str = "text",
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> None:
    """Write report in fmt ('text' | 'json') to the given streams."""
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err

    if fmt == "json":
        rendered = Rendered(out=[to_json(report)])
        # diagnostics still belong on stderr
        rendered.err = render_text(report).err
    elif fmt == "text":
        rendered = render_text(report)
    else:
        raise ValueError(f"Unknown format: {fmt}")

    for line in rendered.out:
        print(line, file=out)
    for line in rendered.err:
        print(line, file=err)
