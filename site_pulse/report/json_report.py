# site_pulse/report/json_report.py

"""
JSON report for SitePulse.

Serialises an AggregateReport to a file.
"""
import json
from pathlib import Path

from site_pulse.aggregator import AggregateReport


def render_json(report: AggregateReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Saves *report* as JSON at *output_path*.

    :param report: AggregateReport with the run's results
    :param output_path: path of the JSON file
    :param pretty: indent with two spaces
    :return: Path of the saved file

    Example:
    ```python
    from site_pulse.report.json_report import render_json
    report_path = render_json(report, 'results.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
