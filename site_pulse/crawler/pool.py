# site_pulse/crawler/pool.py
"""
Bounded worker pool: N workers drain a closed job queue into an output queue.

Shutdown order: every worker finishes, then the supervisor closes the output
queue, then the consumer's iteration ends.
"""
from __future__ import annotations

import asyncio
from typing import AsyncIterator, List, Optional, Protocol, Sequence

from site_pulse.crawler.context import ScrapeContext
from site_pulse.crawler.models import ScrapeResult
from site_pulse.logger import logger

__all__ = ("JobQueueClosed", "PoolAlreadyRun", "WorkerPool")

DEFAULT_CONCURRENCY = 20

_CLOSED = object()


class JobQueueClosed(RuntimeError):
    """Jobs were submitted after the job queue had been closed."""


class PoolAlreadyRun(RuntimeError):
    """run() was called a second time on the same pool."""


class SupportsFetch(Protocol):
    async def fetch(self, ctx: ScrapeContext, url: str) -> ScrapeResult: ...


class WorkerPool:
    """Runs ``concurrency`` workers over a pre-filled, closed job queue.

    A pool is single use: one :meth:`submit`, then one :meth:`run`.
    """

    def __init__(self, fetcher: SupportsFetch, concurrency: int = DEFAULT_CONCURRENCY) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.fetcher = fetcher
        self.concurrency = concurrency
        self._jobs: Optional[asyncio.Queue[str]] = None
        self._total = 0
        self._started = False

    @property
    def closed(self) -> bool:
        return self._jobs is not None

    def submit(self, urls: Sequence[str]) -> None:
        """Enqueue every URL, then close the job queue."""
        if self.closed:
            raise JobQueueClosed("job queue is closed")
        jobs: asyncio.Queue[str] = asyncio.Queue(maxsize=max(1, len(urls)))
        for url in urls:
            jobs.put_nowait(url)
        self._jobs = jobs
        self._total = len(urls)
        logger.debug("Submitted %d jobs", self._total)

    async def run(self, ctx: ScrapeContext) -> AsyncIterator[ScrapeResult]:
        """Yield results as workers produce them, in completion order.

        Running without a prior :meth:`submit` closes the pool with no jobs.
        A second call raises :class:`PoolAlreadyRun`.
        """
        if self._started:
            raise PoolAlreadyRun("worker pool has already run")
        self._started = True
        if self._jobs is None:
            self.submit([])
        # one slot per job plus the close marker, so put_nowait never fails
        output: asyncio.Queue = asyncio.Queue(maxsize=self._total + 1)
        workers = [
            asyncio.create_task(self._worker(ctx, output), name=f"worker-{i}")
            for i in range(self.concurrency)
        ]
        supervisor = asyncio.create_task(self._supervise(workers, output), name="supervisor")

        try:
            while True:
                item = await output.get()
                if item is _CLOSED:
                    break
                yield item
        finally:
            if not supervisor.done():
                for w in workers:
                    w.cancel()
                supervisor.cancel()
                await asyncio.gather(*workers, supervisor, return_exceptions=True)

        # re-raises a worker crash, if any
        await supervisor

    async def collect(self, ctx: ScrapeContext) -> List[ScrapeResult]:
        return [result async for result in self.run(ctx)]

    async def _worker(self, ctx: ScrapeContext, output: asyncio.Queue) -> None:
        assert self._jobs is not None
        while True:
            try:
                url = self._jobs.get_nowait()
            except asyncio.QueueEmpty:
                return
            try:
                output.put_nowait(await self.fetcher.fetch(ctx, url))
            finally:
                self._jobs.task_done()

    async def _supervise(self, workers: List[asyncio.Task], output: asyncio.Queue) -> None:
        outcomes = await asyncio.gather(*workers, return_exceptions=True)
        output.put_nowait(_CLOSED)
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                logger.error("Worker crashed: %r", outcome)
                raise outcome
