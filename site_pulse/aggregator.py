# File: site_pulse/aggregator.py
"""site_pulse.aggregator: single-writer accumulation of scrape results into a report."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, TypedDict

from site_pulse.crawler.models import ScrapeResult
from site_pulse.logger import logger

__all__ = ["SiteInfo", "AggregateReport", "Aggregator"]


class SiteInfo(TypedDict):
    """Fields kept for one successfully fetched page."""

    title: str
    h1: str
    all_sub_headers: List[str]
    description: str


@dataclass(slots=True)
class AggregateReport:
    """Results of one run, keyed by normalised URL.

    Only :class:`Aggregator` mutates a report; it is never shared between tasks.
    """

    results: Dict[str, SiteInfo] = field(default_factory=dict)
    failed: List[str] = field(default_factory=list)
    processed: int = 0

    @property
    def total_count(self) -> int:
        return len(self.results)

    def to_dict(self) -> Dict[str, Any]:
        return {"results": self.results, "total_count": self.total_count}

    def json(self, *, pretty: bool = False) -> str:
        """Returns the JSON form of the report (results and total count)."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


class Aggregator:
    """Consumes results one at a time and folds them into an :class:`AggregateReport`."""

    def __init__(self, report: AggregateReport | None = None, attempts: int = 3) -> None:
        self.report = report if report is not None else AggregateReport()
        self.attempts = attempts

    def process(self, result: ScrapeResult) -> None:
        self.report.processed += 1
        if result.is_active:
            # a repeated URL overwrites its entry, so total_count stays len(results)
            self.report.results[result.url] = SiteInfo(
                title=result.page_title,
                h1=result.h1,
                all_sub_headers=list(result.all_headers),
                description=result.description,
            )
            logger.info("Processed result for [%s] | H1: %s", result.url, result.h1)
        else:
            self.report.failed.append(result.url)
            logger.warning("Failure: %s was unreachable after %d attempts", result.url, self.attempts)
