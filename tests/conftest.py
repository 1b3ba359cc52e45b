# File: tests/conftest.py
from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import List

import pytest
import pytest_asyncio
from aiohttp import web

from site_pulse.config import ScraperConfig
from site_pulse.logger import LOGGER_NAME, init_logging

#: markup served by the "example page" handlers
EXAMPLE_HTML = (
    "<html><head><title>T</title>"
    '<meta name="description" content="D"></head>'
    "<body><h1>H</h1><h2>S</h2></body></html>"
)


class RecordingSleep:
    """Stand-in for asyncio.sleep that records delays and returns at once."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Re-attach the console handler to the current stdout after every test."""
    yield
    init_logging()


@pytest.fixture()
def pulse_log(caplog):
    """caplog wired to the non-propagating project logger."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    yield caplog
    lg.removeHandler(caplog.handler)


@pytest.fixture()
def basic_config() -> ScraperConfig:
    """
    Return a ScraperConfig tuned for local test servers.
    """
    return ScraperConfig(
        concurrency=5,
        timeout=2.0,
        user_agent="TestAgent/1.0",
    )


@pytest.fixture()
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> AsyncIterator[Callable[[web.Application], Awaitable[str]]]:
    """Start aiohttp apps on free ports, return their base URLs, clean up afterwards."""
    runners: List[web.AppRunner] = []

    async def _start(app: web.Application) -> str:
        port = unused_tcp_port_factory()
        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        return f"http://127.0.0.1:{port}"

    try:
        yield _start
    finally:
        for runner in runners:
            await runner.cleanup()
