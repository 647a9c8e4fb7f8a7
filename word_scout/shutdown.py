"""
Cooperative shutdown: one notifier, many receivers.

Closing the :class:`ShutdownNotifier` is the only way to request a stop;
every :class:`Shutdown` receiver observes it at its next suspension point.
"""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, TypeVar

from word_scout.errors import EarlyTermination

T = TypeVar("T")


class ShutdownNotifier:
    """Source side of the shutdown signal; lives for one crawl run."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def subscribe(self) -> Shutdown:
        return Shutdown(self._event)

    def close(self) -> None:
        """Broadcast shutdown to every receiver; safe to call more than once."""
        self._event.set()

    @property
    def closed(self) -> bool:
        return self._event.is_set()

    def __enter__(self) -> ShutdownNotifier:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


class Shutdown:
    """Receiver side of the shutdown signal."""

    def __init__(self, event: asyncio.Event) -> None:
        self._event = event

    def is_shutdown(self) -> bool:
        return self._event.is_set()

    async def recv(self) -> None:
        """Wait until shutdown is broadcast."""
        await self._event.wait()

    async def race(self, aw: Awaitable[T]) -> T:
        """Run *aw* against the shutdown signal.

        Returns the result of *aw* if it finishes first; otherwise cancels it
        and raises :class:`EarlyTermination`.
        """
        work = asyncio.ensure_future(aw)
        stop = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({work, stop}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for fut in (work, stop):
                if not fut.done():
                    fut.cancel()
            await asyncio.gather(work, stop, return_exceptions=True)
        if work.done() and not work.cancelled():
            return work.result()
        raise EarlyTermination()


__all__ = ("ShutdownNotifier", "Shutdown")
