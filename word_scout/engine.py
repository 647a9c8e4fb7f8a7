# File: word_scout/engine.py
"""word_scout.engine: orchestration layer: сборка хранилищ, запуск краулера и запись результатов."""

from __future__ import annotations

import asyncio
import contextlib
import signal
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from aiohttp import ClientSession

from word_scout.config import CrawlerConfig
from word_scout.crawler import Crawler, CrawlOptions
from word_scout.extract import ExtractOptions, Extractor
from word_scout.logger import logger
from word_scout.report import load_dictionary, write_dictionary, write_state
from word_scout.shutdown import ShutdownNotifier
from word_scout.state import CrawlState
from word_scout.store import UrlDb, WordDb

__all__ = ["CrawlReport", "Engine", "start_crawl"]


@dataclass(slots=True)
class CrawlReport:
    """Итог одного запуска: достигнутая глубина и заполненные хранилища."""

    config: CrawlerConfig
    depth_reached: int
    urldb: UrlDb
    words: WordDb

    def to_state(self) -> CrawlState:
        assert self.config.url is not None
        return CrawlState.capture(self.config, self.config.url, self.depth_reached, self.urldb)


class Engine:
    """Фасад для CLI и тестов: подготовка хранилищ, запуск обхода и сохранение результатов."""

    def __init__(self, config: CrawlerConfig, state: Optional[CrawlState] = None) -> None:
        """*state* это снимок предыдущего запуска (resume); его списки будут опустошены."""
        self.config = config
        self.state = state

    async def run(
        self,
        notifier: Optional[ShutdownNotifier] = None,
        session: Optional[ClientSession] = None,
    ) -> CrawlReport:
        """Запускает обход и возвращает CrawlReport (частичный, если был shutdown)."""
        notifier = notifier or ShutdownNotifier()
        urldb = UrlDb()
        resumed_depth = 0
        if self.state is not None:
            resumed_depth = self.state.depth_reached
            self.state.fill_urldb(urldb)

        words = WordDb()
        if self.config.append:
            load_dictionary(self.config.output, words)

        opts = CrawlOptions.from_config(self.config)
        extractor = Extractor(ExtractOptions.from_config(self.config), words)
        logger.info("Старт обхода: %s (mode=%s, policy=%s)", opts.url, opts.mode.value, opts.site_policy)

        async with Crawler(opts, urldb, extractor, notifier.subscribe(), session=session) as crawler:
            if self.state is not None:
                crawler.set_depth(resumed_depth)
            depth = await crawler.crawl()
        return CrawlReport(config=self.config, depth_reached=depth, urldb=urldb, words=words)

    @staticmethod
    def log_summary(report: CrawlReport) -> None:
        """Выводит количество URL по статусам и число уникальных слов."""
        for status, total in report.urldb.counts().items():
            logger.info("%s urls: %d", status.value, total)
        logger.info("depth reached: %d", report.depth_reached)
        logger.info("unique words: %d", len(report.words))

    @staticmethod
    def save(report: CrawlReport) -> Path:
        """Пишет словарь и, если включено, файл состояния; возвращает путь словаря."""
        cfg = report.config
        logger.info("writing dictionary to file: %s", cfg.output)
        saved = write_dictionary(report.words.sorted_words(), cfg.output)
        if cfg.output_state:
            logger.info("writing state to file: %s", cfg.state_file)
            write_state(report.to_state(), cfg.state_file)
        return saved


@contextlib.contextmanager
def _shutdown_on_signals(notifier: ShutdownNotifier) -> Iterator[None]:
    loop = asyncio.get_running_loop()
    installed = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        # add_signal_handler is unavailable on Windows event loops
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, notifier.close)
            installed.append(sig)
    try:
        yield
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


async def start_crawl(config: CrawlerConfig, state: Optional[CrawlState] = None) -> CrawlReport:
    """
    Запускает обход с остановкой по SIGINT/SIGTERM и возвращает CrawlReport.

    Parameters
    ----------
    config : CrawlerConfig
        Итоговая конфигурация (url уже определён).
    state : CrawlState, optional
        Снимок для продолжения обхода.
    """
    with ShutdownNotifier() as notifier, _shutdown_on_signals(notifier):
        return await Engine(config, state).run(notifier)
