# File: tests/test_pool.py
from __future__ import annotations

import asyncio
from contextlib import aclosing

import pytest

from site_pulse.crawler.context import ScrapeContext
from site_pulse.crawler.models import ScrapeResult
from site_pulse.crawler.pool import DEFAULT_CONCURRENCY, JobQueueClosed, PoolAlreadyRun, WorkerPool
from site_pulse.parser.html_parser import ExtractedPage


class FakeFetcher:
    """Succeeds for every URL after *delay*, tracking how many fetches overlap."""

    def __init__(self, delay: float = 0.01, fail: set[str] | None = None, crash: str | None = None):
        self.delay = delay
        self.fail = fail or set()
        self.crash = crash
        self.in_flight = 0
        self.peak = 0
        self.calls: list[str] = []

    async def fetch(self, ctx: ScrapeContext, url: str) -> ScrapeResult:
        self.calls.append(url)
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            if url == self.crash:
                raise RuntimeError("boom")
            await asyncio.sleep(self.delay)
            if url in self.fail:
                return ScrapeResult.failure(url)
            return ScrapeResult.success(url, 200, ExtractedPage(h1=url))
        finally:
            self.in_flight -= 1


def test_default_concurrency():
    assert WorkerPool(FakeFetcher()).concurrency == DEFAULT_CONCURRENCY == 20


def test_invalid_concurrency():
    with pytest.raises(ValueError):
        WorkerPool(FakeFetcher(), concurrency=0)


def test_submit_closes_job_queue():
    pool = WorkerPool(FakeFetcher())
    pool.submit(["a"])
    assert pool.closed
    with pytest.raises(JobQueueClosed):
        pool.submit(["b"])


@pytest.mark.asyncio()
async def test_one_result_per_job_bounded_concurrency():
    fetcher = FakeFetcher(delay=0.01)
    urls = [f"https://site{i}.test" for i in range(100)]
    pool = WorkerPool(fetcher, concurrency=20)
    pool.submit(urls)

    results = await asyncio.wait_for(pool.collect(ScrapeContext()), timeout=10)

    assert len(results) == 100
    assert sorted(r.url for r in results) == sorted(urls)
    assert sorted(fetcher.calls) == sorted(urls)
    assert fetcher.peak == 20


@pytest.mark.asyncio()
async def test_more_workers_than_jobs():
    pool = WorkerPool(FakeFetcher(), concurrency=50)
    pool.submit(["a", "b"])
    results = await asyncio.wait_for(pool.collect(ScrapeContext()), timeout=5)
    assert {r.url for r in results} == {"a", "b"}


@pytest.mark.asyncio()
async def test_empty_job_list_terminates():
    pool = WorkerPool(FakeFetcher())
    pool.submit([])
    assert await asyncio.wait_for(pool.collect(ScrapeContext()), timeout=5) == []


@pytest.mark.asyncio()
async def test_run_without_submit_yields_nothing():
    pool = WorkerPool(FakeFetcher())
    assert await asyncio.wait_for(pool.collect(ScrapeContext()), timeout=5) == []
    with pytest.raises(JobQueueClosed):
        pool.submit(["late"])


@pytest.mark.asyncio()
async def test_failures_are_results_not_errors():
    fetcher = FakeFetcher(fail={"b"})
    pool = WorkerPool(fetcher, concurrency=2)
    pool.submit(["a", "b", "c"])
    results = {r.url: r for r in await pool.collect(ScrapeContext())}
    assert set(results) == {"a", "b", "c"}
    assert not results["b"].is_active
    assert results["a"].is_active and results["c"].is_active


@pytest.mark.asyncio()
async def test_worker_crash_surfaces_after_close():
    fetcher = FakeFetcher(crash="bad")
    pool = WorkerPool(fetcher, concurrency=2)
    pool.submit(["a", "bad", "c", "d"])
    seen = []
    with pytest.raises(RuntimeError, match="boom"):
        async for result in pool.run(ScrapeContext()):
            seen.append(result.url)
    assert "bad" not in seen


@pytest.mark.asyncio()
async def test_early_exit_cancels_workers():
    fetcher = FakeFetcher(delay=10)
    pool = WorkerPool(fetcher, concurrency=4)
    pool.submit([f"u{i}" for i in range(10)])

    gen = pool.run(ScrapeContext())

    async def first():
        return await anext(gen)

    async with aclosing(gen):
        consumer = asyncio.create_task(first())
        await asyncio.sleep(0.05)
        assert fetcher.in_flight == 4
        consumer.cancel()
        await asyncio.gather(consumer, return_exceptions=True)

    assert fetcher.in_flight == 0


@pytest.mark.asyncio()
async def test_pool_runs_only_once():
    fetcher = FakeFetcher()
    pool = WorkerPool(fetcher, concurrency=2)
    pool.submit(["a", "b"])
    assert len(await pool.collect(ScrapeContext())) == 2

    with pytest.raises(PoolAlreadyRun):
        await pool.collect(ScrapeContext())
    assert sorted(fetcher.calls) == ["a", "b"]
