"""Report aggregation and rendering."""

from metacheck.report.builders import Report, RuleReport, ViolationRecord, build_report
from metacheck.report.render import render, render_json, render_text, write_report

__all__ = [
    "Report",
    "RuleReport",
    "ViolationRecord",
    "build_report",
    "render",
    "render_json",
    "render_text",
    "write_report",
]
