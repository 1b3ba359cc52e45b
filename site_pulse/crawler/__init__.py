"""Concurrent fetch pipeline: context, fetcher, worker pool and result model."""

from site_pulse.crawler.context import ContextCancelled, ScrapeContext
from site_pulse.crawler.fetcher import Fetcher, create_session
from site_pulse.crawler.models import ScrapeResult
from site_pulse.crawler.pool import JobQueueClosed, PoolAlreadyRun, WorkerPool

__all__ = [
    "ContextCancelled",
    "Fetcher",
    "JobQueueClosed",
    "PoolAlreadyRun",
    "ScrapeContext",
    "ScrapeResult",
    "WorkerPool",
    "create_session",
]
