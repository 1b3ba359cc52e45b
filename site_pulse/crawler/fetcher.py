# site_pulse/crawler/fetcher.py
"""
Fetcher module: one URL in, one ScrapeResult out, with retry/backoff and timeout.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, Tuple

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_pulse.config import ScraperConfig
from site_pulse.crawler.context import ContextCancelled, ScrapeContext
from site_pulse.crawler.models import ScrapeResult
from site_pulse.logger import logger
from site_pulse.parser.html_parser import extract
from site_pulse.utils import normalize_url

__all__ = ("Fetcher", "create_session")

SleepFunc = Callable[[float], Awaitable[None]]

# ValueError covers URLs that yarl/aiohttp refuse to build a request for
_TRANSIENT_ERRORS = (ClientError, asyncio.TimeoutError, ValueError)


def create_session(config: ScraperConfig) -> ClientSession:
    """Build the HTTP client shared by all workers."""
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers={"User-Agent": config.user_agent},
        raise_for_status=False,
    )


class Fetcher:
    """Fetches a page with retries and backoff; failures end up in the result."""

    def __init__(
        self,
        session: ClientSession,
        config: ScraperConfig,
        sleep: Optional[SleepFunc] = None,
    ) -> None:
        self.session = session
        self.config = config
        self._sleep: SleepFunc = sleep or asyncio.sleep
        self._timeout = ClientTimeout(total=config.timeout)

    async def fetch(self, ctx: ScrapeContext, url: str) -> ScrapeResult:
        """
        Fetch *url* and extract its fields.

        Never raises for network trouble: after the last failed attempt, or as
        soon as *ctx* is cancelled, an inactive result is returned.
        """
        full_url = normalize_url(url)
        attempts = self.config.retry_attempts

        for attempt in range(attempts):
            try:
                status, body = await ctx.guard(self._get(full_url))
            except ContextCancelled:
                logger.debug("Cancelled while fetching %s", full_url)
                break
            except _TRANSIENT_ERRORS as exc:
                logger.debug("Attempt %d/%d for %s failed: %r", attempt + 1, attempts, full_url, exc)
            else:
                if status == 200:
                    return ScrapeResult.success(full_url, status, extract(body))
                logger.debug("Attempt %d/%d for %s got HTTP %d", attempt + 1, attempts, full_url, status)

            if attempt == attempts - 1 or ctx.cancelled:
                break
            backoff = self.config.backoff_base ** attempt
            logger.debug("Retrying %s after %.2f s", full_url, backoff)
            try:
                await ctx.guard(self._sleep(backoff))
            except ContextCancelled:
                break

        return ScrapeResult.failure(full_url)

    async def _get(self, url: str) -> Tuple[int, bytes]:
        async with self.session.get(
            url,
            timeout=self._timeout,
            headers={"User-Agent": self.config.user_agent},
        ) as resp:
            if resp.status != 200:
                return resp.status, b""
            return resp.status, await resp.read()
