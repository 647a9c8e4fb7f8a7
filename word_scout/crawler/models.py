"""
Data models for the WordScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from word_scout import __version__
from word_scout.crawler.site import SitePolicy

if TYPE_CHECKING:
    from word_scout.config import CrawlerConfig

DEFAULT_USER_AGENT = f"word_scout/{__version__}"


class CrawlMode(str, Enum):
    """Web pages are fetched over HTTP; local targets are read from the filesystem."""

    WEB = "web"
    LOCAL = "local"

    @classmethod
    def for_url(cls, url: str) -> CrawlMode:
        return cls.LOCAL if urlsplit(url).scheme == "file" else cls.WEB


@dataclass(frozen=True, slots=True)
class CrawlOptions:
    """Immutable per-run crawl settings shared by the crawler and every spider."""

    url: str
    depth: int = 1
    include_js: bool = False
    include_css: bool = False
    site_policy: SitePolicy = SitePolicy.SAME
    requests_per_second: int = 5
    limit_concurrent: int = 5
    user_agent: str = DEFAULT_USER_AGENT
    connect_timeout: float = 5.0
    timeout: float = 10.0

    @property
    def mode(self) -> CrawlMode:
        return CrawlMode.for_url(self.url)

    @classmethod
    def from_config(cls, config: CrawlerConfig) -> CrawlOptions:
        if config.url is None:
            raise ValueError("crawl target URL is not set")
        return cls(
            url=config.url,
            depth=config.depth,
            include_js=config.include_js,
            include_css=config.include_css,
            site_policy=config.site_policy,
            requests_per_second=config.requests_per_second,
            limit_concurrent=config.limit_concurrent,
            user_agent=config.user_agent,
        )
