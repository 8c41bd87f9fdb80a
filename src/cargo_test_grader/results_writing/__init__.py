"""Results writing domain exports."""

from .report_writer import render_report, report_to_payload, write_report

__all__ = [
    "render_report",
    "report_to_payload",
    "write_report",
]
