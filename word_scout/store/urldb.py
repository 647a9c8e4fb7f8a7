"""
Concurrency-safe URL bookkeeping: every URL discovered during a crawl and its status.
"""
from __future__ import annotations

import threading
from enum import Enum
from typing import Dict, Iterator, List, Optional


class UrlStatus(str, Enum):
    """Lifecycle of a discovered URL."""

    #: visited successfully
    VISITED = "visited"
    #: selected for the round currently in flight
    STAGED = "staged"
    #: discovered, not yet processed
    UNVISITED = "unvisited"
    #: rejected by the site policy; will never be visited
    SKIPPED = "skipped"
    #: an error occurred while visiting
    ERRORED = "errored"

    def staged(self) -> UrlStatus:
        """Status after a staging pass: only unvisited URLs move onto the stage."""
        match self:
            case UrlStatus.UNVISITED:
                return UrlStatus.STAGED
            case UrlStatus.VISITED | UrlStatus.STAGED | UrlStatus.SKIPPED | UrlStatus.ERRORED:
                return self


class UrlDb:
    """Map of URL → :class:`UrlStatus` guarded by a single lock.

    The lock is held for one map operation at a time and never across I/O;
    readers always receive copies, so callers may mutate the store while
    iterating over a previous result.  Share the instance between tasks;
    statuses are overwritten, never removed.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._urls: Dict[str, UrlStatus] = {}

    # ------------------------------------------------------------------ #
    # transitions
    # ------------------------------------------------------------------ #
    def mark(self, url: str, status: UrlStatus) -> None:
        """Insert *url* with *status*, overwriting whatever was recorded before."""
        with self._lock:
            self._urls[url] = status

    def cond_mark(self, url: str, status: UrlStatus) -> None:
        """Insert *url* with *status* only if the URL is not known yet."""
        with self._lock:
            self._urls.setdefault(url, status)

    def mark_visited(self, url: str) -> None:
        self.mark(url, UrlStatus.VISITED)

    def mark_staged(self, url: str) -> None:
        self.mark(url, UrlStatus.STAGED)

    def mark_unvisited(self, url: str) -> None:
        self.mark(url, UrlStatus.UNVISITED)

    def mark_skipped(self, url: str) -> None:
        self.mark(url, UrlStatus.SKIPPED)

    def mark_errored(self, url: str) -> None:
        self.mark(url, UrlStatus.ERRORED)

    def cond_mark_visited(self, url: str) -> None:
        self.cond_mark(url, UrlStatus.VISITED)

    def cond_mark_staged(self, url: str) -> None:
        self.cond_mark(url, UrlStatus.STAGED)

    def cond_mark_unvisited(self, url: str) -> None:
        self.cond_mark(url, UrlStatus.UNVISITED)

    def cond_mark_skipped(self, url: str) -> None:
        self.cond_mark(url, UrlStatus.SKIPPED)

    def cond_mark_errored(self, url: str) -> None:
        self.cond_mark(url, UrlStatus.ERRORED)

    def stage_unvisited_urls(self) -> int:
        """Move every unvisited URL onto the stage; returns how many were moved."""
        moved = 0
        with self._lock:
            for url, status in self._urls.items():
                new_status = status.staged()
                if new_status is not status:
                    self._urls[url] = new_status
                    moved += 1
        return moved

    # ------------------------------------------------------------------ #
    # queries
    # ------------------------------------------------------------------ #
    def status(self, url: str) -> Optional[UrlStatus]:
        with self._lock:
            return self._urls.get(url)

    def urls(self, status: UrlStatus) -> List[str]:
        """Snapshot of the URLs currently in *status*."""
        with self._lock:
            return [url for url, st in self._urls.items() if st is status]

    def count(self, status: UrlStatus) -> int:
        with self._lock:
            return sum(1 for st in self._urls.values() if st is status)

    def counts(self) -> Dict[UrlStatus, int]:
        """Number of URLs per status (every status is present)."""
        totals = {st: 0 for st in UrlStatus}
        with self._lock:
            for st in self._urls.values():
                totals[st] += 1
        return totals

    def visited_urls(self) -> List[str]:
        return self.urls(UrlStatus.VISITED)

    def staged_urls(self) -> List[str]:
        return self.urls(UrlStatus.STAGED)

    def unvisited_urls(self) -> List[str]:
        return self.urls(UrlStatus.UNVISITED)

    def skipped_urls(self) -> List[str]:
        return self.urls(UrlStatus.SKIPPED)

    def errored_urls(self) -> List[str]:
        return self.urls(UrlStatus.ERRORED)

    def num_visited_urls(self) -> int:
        return self.count(UrlStatus.VISITED)

    def num_staged_urls(self) -> int:
        return self.count(UrlStatus.STAGED)

    def num_unvisited_urls(self) -> int:
        return self.count(UrlStatus.UNVISITED)

    def num_skipped_urls(self) -> int:
        return self.count(UrlStatus.SKIPPED)

    def num_errored_urls(self) -> int:
        return self.count(UrlStatus.ERRORED)

    def snapshot(self) -> Dict[str, UrlStatus]:
        with self._lock:
            return dict(self._urls)

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._urls

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())
