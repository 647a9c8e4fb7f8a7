"""
Token bucket bounding how many visits may start per second.
"""
from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from word_scout.errors import RateLimitError


class TokenBucket:
    """Token bucket refilled to full capacity once per *interval*.

    Capacity is ``max(1, rate)`` and the bucket starts half full to damp
    the burst right after start-up.
    """

    def __init__(
        self,
        rate: int,
        interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval <= 0:
            raise RateLimitError(f"refill interval must be > 0, got {interval}")
        self.capacity: int = max(1, int(rate))
        self.interval = float(interval)
        self._clock = clock
        self._lock = threading.Lock()
        self._tokens = self.capacity // 2
        self._next_refill = clock() + self.interval

    @property
    def available(self) -> int:
        with self._lock:
            self._refill(self._clock())
            return self._tokens

    def try_consume(self) -> Optional[float]:
        """Take one token.

        Returns None when a token was taken, otherwise the number of
        seconds until the next refill.
        """
        with self._lock:
            now = self._clock()
            self._refill(now)
            if self._tokens > 0:
                self._tokens -= 1
                return None
            return max(0.0, self._next_refill - now)

    def _refill(self, now: float) -> None:
        if now < self._next_refill:
            return
        self._tokens = self.capacity
        missed = int((now - self._next_refill) // self.interval)
        self._next_refill += (missed + 1) * self.interval


__all__ = ("TokenBucket",)
