# File: site_pulse/report/summary_report.py
"""site_pulse.report.summary_report: plain-text run summary rendered with Jinja2."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader

from site_pulse.aggregator import AggregateReport

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "summary.txt.j2"

# RFC 1123, e.g. "Mon, 02 Jan 2006 15:04:05 UTC"
_RFC1123 = "%a, %d %b %Y %H:%M:%S %Z"


def render_summary(
    report: AggregateReport,
    output_path: Union[Path, str],
    template_dir: Union[Path, str, None] = None,
    now: Optional[datetime] = None,
) -> Path:
    """Renders the summary from the template and saves it at *output_path*.

    Args:
        report: the AggregateReport.
        output_path: path of the text file.
        template_dir: directory holding ``summary.txt.j2``; the packaged one by default.
        now: timestamp written into the header; the current local time by default.

    Returns:
        Path of the saved file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir or DEFAULT_TEMPLATE_DIR)),
        autoescape=False,
        keep_trailing_newline=True,
    )
    template = env.get_template(TEMPLATE_NAME)

    stamp = (now or datetime.now()).astimezone()
    context: dict[str, Any] = {
        "time": stamp.strftime(_RFC1123),
        "total_count": report.total_count,
        "results": report.results,
        "failed": report.failed,
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
