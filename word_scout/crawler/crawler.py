# === FILE: word_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from typing import List, Optional

from aiohttp import ClientSession, ClientTimeout

from word_scout.crawler.models import CrawlOptions
from word_scout.crawler.ratelimit import TokenBucket
from word_scout.crawler.spider import Spider
from word_scout.errors import EarlyTermination, HeaderFormatError
from word_scout.extract import Extractor
from word_scout.logger import logger
from word_scout.shutdown import Shutdown
from word_scout.store import UrlDb

__all__ = ("Crawler",)


class Crawler:
    """Асинхронный краулер: обход по уровням глубины с rate-limit, лимитом параллельности и мягкой остановкой.

    Each round stages every unvisited URL, dispatches one spider task per
    staged URL and waits for all of them before the next round starts.
    """

    def __init__(
        self,
        opts: CrawlOptions,
        urldb: UrlDb,
        extractor: Extractor,
        shutdown: Shutdown,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.opts = opts
        self.urldb = urldb
        self.extractor = extractor
        self.shutdown = shutdown
        self.session = session
        self._owns_session = session is None
        self.cur_depth = 0
        self.limiter = TokenBucket(opts.requests_per_second)
        self.urldb.cond_mark_unvisited(opts.url)

    async def __aenter__(self) -> Crawler:
        if self.session is None:
            self.session = self._build_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def _build_session(self) -> ClientSession:
        user_agent = self.opts.user_agent
        if not user_agent or any(ch in user_agent for ch in "\r\n\0"):
            raise HeaderFormatError("User-Agent", user_agent)
        timeout = ClientTimeout(total=self.opts.timeout, connect=self.opts.connect_timeout)
        return ClientSession(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            raise_for_status=False,
        )

    def set_depth(self, depth: int) -> None:
        """Force the current crawl depth (used when resuming)."""
        self.cur_depth = depth

    async def crawl(self) -> int:
        """Crawl round by round until the depth limit, exhaustion or shutdown; returns the depth reached."""
        if self.session is None:
            raise RuntimeError("Session not initialized")
        start = time.monotonic()
        semaphore = asyncio.Semaphore(self.opts.limit_concurrent)

        while self.cur_depth < self.opts.depth:
            if self.urldb.num_staged_urls() < 1:
                self.urldb.stage_unvisited_urls()
            staged = self.urldb.staged_urls()
            if not staged:
                logger.info("candidate urls exhausted...")
                break

            logger.info("crawling at depth %d (%d urls)", self.cur_depth, len(staged))
            tasks: List[asyncio.Task] = []
            for url in staged:
                if await self._observe_limit():
                    break
                tasks.append(asyncio.create_task(self._visit(url, semaphore)))

            results = await asyncio.gather(*tasks, return_exceptions=True)
            for url, result in zip(staged, results):
                if isinstance(result, BaseException):
                    logger.error("visit of %s failed: %r", url, result)

            # shutdown may have arrived before the round completed
            if self.shutdown.is_shutdown():
                logger.info("shutdown early...")
                break
            self.cur_depth += 1

        duration = time.monotonic() - start
        logger.info(
            "Завершено: глубина %d, посещено %d url за %.2f с",
            self.cur_depth, self.urldb.num_visited_urls(), duration,
        )
        return self.cur_depth

    async def _visit(self, url: str, semaphore: asyncio.Semaphore) -> None:
        async with semaphore:
            spider = self._build_spider()
            doc = await spider.crawl_url(url)
            if doc is not None:
                self.extractor.clone().words_from_doc(doc)

    async def _observe_limit(self) -> bool:
        """Wait for the rate limiter and the pacing delay; returns whether shutdown was observed."""

        async def _pace() -> None:
            wait = self.limiter.try_consume()
            if wait is not None:
                await asyncio.sleep(wait)
            # fixed per-visit pacing on top of the bucket
            await asyncio.sleep(1 / max(1, self.opts.requests_per_second))

        try:
            await self.shutdown.race(_pace())
        except EarlyTermination:
            return True
        return self.shutdown.is_shutdown()

    def _build_spider(self) -> Spider:
        assert self.session is not None
        return Spider(self.session, self.opts, self.urldb, self.shutdown)
