# site_pulse/crawler/context.py
"""
Pipeline-wide cancellation signal shared by every worker.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Optional, TypeVar

__all__ = ("ContextCancelled", "ScrapeContext")

T = TypeVar("T")


class ContextCancelled(Exception):
    """Raised by :meth:`ScrapeContext.guard` when the context fires first."""


class ScrapeContext:
    """A single cancellation signal with an optional deadline.

    Network requests and backoff sleeps are wrapped in :meth:`guard`, so
    cancelling the context interrupts them instead of waiting them out.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._deadline: Optional[asyncio.TimerHandle] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None

    def cancel_after(self, delay: float) -> None:
        """Arms a deadline on the running loop; a later call replaces it."""
        if self._deadline is not None:
            self._deadline.cancel()
        self._deadline = asyncio.get_running_loop().call_later(delay, self.cancel)

    async def wait(self) -> None:
        await self._event.wait()

    async def guard(self, aw: Awaitable[T]) -> T:
        """Await *aw* unless the context is cancelled first."""
        if self.cancelled:
            if asyncio.iscoroutine(aw):
                aw.close()
            raise ContextCancelled()

        task = asyncio.ensure_future(aw)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            # the inner task must finish before the cancellation propagates
            await asyncio.shield(asyncio.gather(task, return_exceptions=True))
            raise
        finally:
            waiter.cancel()

        if task.done():
            return task.result()

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise ContextCancelled()
