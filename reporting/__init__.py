"""check-connection Reporting: Public API

Renders a CheckReport as console text or JSON.

Usage:
    from reporting import write_report
    write_report(report, fmt="text")
"""
from reporting.console import NO_ASN_INFO, Rendered, render_text, write_report
from reporting.jsonout import report_to_dict, to_json

__all__ = [
    "NO_ASN_INFO", "Rendered", "render_text", "write_report",
    "report_to_dict", "to_json",
]
