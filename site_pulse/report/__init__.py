# File: site_pulse/report/__init__.py
"""site_pulse.report: writers for the JSON report and the text summary."""

from site_pulse.report.json_report import render_json
from site_pulse.report.summary_report import render_summary

__all__ = ["render_json", "render_summary"]
