# File: site_pulse/engine.py
"""site_pulse.engine: pipeline driver wiring jobs, worker pool and aggregation together."""

from __future__ import annotations

import asyncio
from typing import Optional, Sequence

from aiohttp import ClientSession

from site_pulse.aggregator import AggregateReport, Aggregator
from site_pulse.config import ScraperConfig, load_config
from site_pulse.crawler.context import ScrapeContext
from site_pulse.crawler.fetcher import Fetcher, SleepFunc, create_session
from site_pulse.crawler.pool import WorkerPool
from site_pulse.logger import logger

__all__ = ["Engine", "run_pipeline"]


async def run_pipeline(
    urls: Sequence[str],
    config: ScraperConfig,
    *,
    ctx: Optional[ScrapeContext] = None,
    session: Optional[ClientSession] = None,
    sleep: Optional[SleepFunc] = None,
) -> AggregateReport:
    """
    Fetch every URL concurrently and fold the results into a report.

    Returns once every job has produced exactly one result. An injected
    *session* is used as is and left open; otherwise one is created and
    closed here.
    """
    ctx = ctx or ScrapeContext()
    if config.scan_timeout is not None:
        ctx.cancel_after(config.scan_timeout)

    report = AggregateReport()
    aggregator = Aggregator(report, attempts=config.retry_attempts)

    own_session = session is None
    http = create_session(config) if own_session else session
    try:
        pool = WorkerPool(Fetcher(http, config, sleep=sleep), concurrency=config.concurrency)
        pool.submit(list(urls))
        async for result in pool.run(ctx):
            aggregator.process(result)
    finally:
        if own_session:
            await http.close()

    logger.info(
        "Finished: %d of %d URLs reachable, %d failed",
        report.total_count,
        report.processed,
        len(report.failed),
    )
    return report


class Engine:
    """Facade for the CLI and tests: load the config, run the pipeline, return the report."""

    @staticmethod
    def load_config(path: Optional[str]) -> ScraperConfig:
        """Loads the config from YAML/JSON or falls back to the defaults."""
        return load_config(path)

    def __init__(self, config: ScraperConfig) -> None:
        self.config = config

    def start_scan(self, urls: Optional[Sequence[str]] = None) -> AggregateReport:
        """Runs the pipeline synchronously over *urls* (default: the configured list)."""
        targets = list(urls) if urls is not None else list(self.config.urls)
        logger.info("Starting scrape of %d URLs with %d workers", len(targets), self.config.concurrency)
        try:
            return asyncio.run(run_pipeline(targets, self.config))
        except Exception as exc:
            logger.error("Scraping failed: %s", exc)
            raise
