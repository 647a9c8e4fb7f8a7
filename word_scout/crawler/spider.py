"""
Spider: visits a single URL, records the outcome and discovers new URLs.
"""
from __future__ import annotations

import asyncio
import stat
from pathlib import Path
from typing import Iterator, Optional

import aiofiles
import aiofiles.os
from aiohttp import ClientError, ClientSession
from bs4 import BeautifulSoup
from bs4.element import Tag

from word_scout.crawler.models import CrawlMode, CrawlOptions
from word_scout.errors import EarlyTermination, FetchError, UrlParseError
from word_scout.logger import logger
from word_scout.shutdown import Shutdown
from word_scout.store import UrlDb
from word_scout.utils import num_between, parse_url, path_from_url, url_from_href, url_from_path

#: bounds (ms) of the random pause taken before every visit
JITTER_MS = (20, 120)


def extract_links(page_url: str, document: bytes, include_js: bool, include_css: bool) -> Iterator[str]:
    """Yield absolute URLs referenced by ``href`` attributes of *document*.

    Anchors are always followed; ``<link rel="stylesheet">`` only with
    *include_css* and ``<link as="script">`` only with *include_js*.
    """
    soup = BeautifulSoup(document, "html.parser")
    for tag in soup.find_all(href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if not isinstance(href, str):
            continue
        url = url_from_href(page_url, href)
        if url is None:
            continue
        if tag.name == "a":
            yield url
        elif tag.name == "link":
            rel = tag.get("rel") or []
            if isinstance(rel, str):
                rel = rel.split()
            if include_css and "stylesheet" in rel:
                yield url
            if include_js and tag.get("as") == "script":
                yield url


class Spider:
    """Visits one URL at a time on behalf of the crawler.

    Every spider shares the URL store, HTTP session and shutdown signal of
    the crawler that built it.
    """

    def __init__(
        self,
        session: ClientSession,
        opts: CrawlOptions,
        urldb: UrlDb,
        shutdown: Shutdown,
    ) -> None:
        self.session = session
        self.opts = opts
        self.urldb = urldb
        self.shutdown = shutdown

    async def crawl_url(self, url: str) -> Optional[bytes]:
        """Visit *url* and return the document bytes to extract words from, if any.

        Nothing is recorded when shutdown arrives before or during the visit.
        """
        try:
            await self.shutdown.race(asyncio.sleep(num_between(*JITTER_MS) / 1000))
        except EarlyTermination:
            return None
        if self.shutdown.is_shutdown():
            return None

        try:
            parse_url(url)
        except UrlParseError as exc:
            logger.debug("not a url: %s", exc)
            self.urldb.mark_errored(url)
            return None

        if self.opts.mode is CrawlMode.LOCAL:
            return await self._crawl_local(url)
        return await self._crawl_web(url)

    # ------------------------------------------------------------------ #
    # web
    # ------------------------------------------------------------------ #
    async def _crawl_web(self, url: str) -> Optional[bytes]:
        if not self.opts.site_policy.matches(self.opts.url, url):
            logger.debug("site policy '%s' violated for url: '%s', skipping...", self.opts.site_policy, url)
            self.urldb.mark_skipped(url)
            return None

        logger.debug("visiting %s", url)
        try:
            doc = await self.shutdown.race(self._fetch(url))
        except EarlyTermination:
            logger.debug("terminated while fetching: %s", url)
            return None
        except FetchError as exc:
            self.urldb.mark_errored(url)
            logger.warning("error fetching page %s: %s", url, exc.original)
            return None

        self.urldb.mark_visited(url)
        for link in extract_links(url, doc, self.opts.include_js, self.opts.include_css):
            self.urldb.cond_mark_unvisited(link)
        return doc

    async def _fetch(self, url: str) -> bytes:
        try:
            async with self.session.get(url) as resp:
                # error statuses are recorded as errored; their bodies are never extracted
                if resp.status == 429:
                    logger.debug("wait and retry on 429 not implemented, skipping...")
                elif resp.status >= 400:
                    logger.debug("unexpected status code: %s", resp.status)
                resp.raise_for_status()
                return await resp.read()
        except (ClientError, asyncio.TimeoutError) as exc:
            raise FetchError(url, exc) from exc

    # ------------------------------------------------------------------ #
    # local
    # ------------------------------------------------------------------ #
    async def _crawl_local(self, url: str) -> Optional[bytes]:
        path = path_from_url(url)
        logger.debug("visiting %s", path)
        try:
            meta = await aiofiles.os.stat(path)
        except OSError as exc:
            self.urldb.mark_errored(url)
            logger.warning("error getting path metadata %s: %s", path, exc)
            return None

        if stat.S_ISREG(meta.st_mode):
            return await self._handle_local_file(url, path)
        if stat.S_ISDIR(meta.st_mode):
            await self._handle_local_dir(url, path)
            return None
        logger.debug("not a regular file or directory, skipping: %s", path)
        self.urldb.mark_skipped(url)
        return None

    async def _handle_local_file(self, url: str, path: Path) -> Optional[bytes]:
        try:
            async with aiofiles.open(path, "rb") as f:
                data = await f.read()
        except OSError as exc:
            self.urldb.mark_errored(url)
            logger.warning("error reading file %s: %s", path, exc)
            return None
        self.urldb.mark_visited(url)
        return data

    async def _handle_local_dir(self, url: str, path: Path) -> None:
        try:
            names = await aiofiles.os.listdir(path)
        except OSError as exc:
            self.urldb.mark_errored(url)
            logger.warning("error reading directory %s: %s", path, exc)
            return

        enqueued = 0
        for name in sorted(names):
            child = path / name
            try:
                child_url = url_from_path(child)
            except OSError as exc:
                logger.warning("error parsing path as url: %s: %s", child, exc)
                continue
            self.urldb.cond_mark_unvisited(child_url)
            # marked once per child entry
            self.urldb.mark_visited(url)
            enqueued += 1
        if not enqueued:
            self.urldb.mark_visited(url)


__all__ = ("Spider", "extract_links", "JITTER_MS")
