"""
Resumable crawl state: snapshot of the URL store partitions, the depth
reached and every tunable used to produce them.

The file format is JSON with camelCase keys::

    {"startingUrl": "...", "depthReached": 2, "visited": [...], "staged": [...],
     "unvisited": [...], "skipped": [...], "errored": [...], "sitePolicy": "same",
     "filters": ["none"], "depth": 3, "includeJs": false, "includeCss": false,
     "minWordLength": 3, "maxWordLength": 9223372036854775807,
     "requestsPerSecond": 5, "limitConcurrent": 5}
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from word_scout.config import CrawlerConfig
from word_scout.crawler.site import SitePolicy
from word_scout.errors import StateFileError
from word_scout.extract.filters import FilterMode
from word_scout.store import UrlDb


class CrawlState(BaseModel):
    """Snapshot written at the end of a run and consumed once by ``--resume``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    starting_url: str
    depth_reached: int = Field(0, ge=0)
    visited: List[str] = Field(default_factory=list)
    staged: List[str] = Field(default_factory=list)
    unvisited: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)
    errored: List[str] = Field(default_factory=list)
    site_policy: SitePolicy = SitePolicy.SAME
    filters: List[FilterMode] = Field(default_factory=list)
    depth: int = Field(1, ge=0)
    include_js: bool = False
    include_css: bool = False
    min_word_length: int = Field(3, ge=0)
    max_word_length: int = Field(sys.maxsize, ge=0)
    requests_per_second: int = Field(5, ge=0)
    limit_concurrent: int = Field(5, ge=1)

    # ------------------------------------------------------------------ #
    # construction
    # ------------------------------------------------------------------ #
    @classmethod
    def new(cls, url: str) -> CrawlState:
        return cls(starting_url=url)

    @classmethod
    def capture(cls, config: CrawlerConfig, url: str, depth_reached: int, urldb: UrlDb) -> CrawlState:
        """Snapshot *urldb* together with the options of the run that filled it."""
        return cls(
            starting_url=url,
            depth_reached=depth_reached,
            visited=sorted(urldb.visited_urls()),
            staged=sorted(urldb.staged_urls()),
            unvisited=sorted(urldb.unvisited_urls()),
            skipped=sorted(urldb.skipped_urls()),
            errored=sorted(urldb.errored_urls()),
            site_policy=config.site_policy,
            filters=list(config.filters),
            depth=config.depth,
            include_js=config.include_js,
            include_css=config.include_css,
            min_word_length=config.min_word_length,
            max_word_length=config.max_word_length,
            requests_per_second=config.requests_per_second,
            limit_concurrent=config.limit_concurrent,
        )

    # ------------------------------------------------------------------ #
    # file I/O
    # ------------------------------------------------------------------ #
    @classmethod
    def from_file(cls, path: Union[str, Path]) -> CrawlState:
        p = Path(path)
        try:
            contents = p.read_text(encoding="utf-8")
        except OSError as exc:
            raise StateFileError(str(p), f"cannot read: {exc}") from exc
        try:
            return cls.model_validate_json(contents)
        except ValidationError as exc:
            raise StateFileError(str(p), f"invalid state: {exc}") from exc

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)

    def save(self, path: Union[str, Path]) -> Path:
        p = Path(path)
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(self.to_json(), encoding="utf-8")
        except OSError as exc:
            raise StateFileError(str(p), f"cannot write: {exc}") from exc
        return p

    # ------------------------------------------------------------------ #
    # restore
    # ------------------------------------------------------------------ #
    def _partitions(self, urldb: UrlDb) -> Tuple[Tuple[List[str], Callable[[str], None]], ...]:
        return (
            (self.visited, urldb.mark_visited),
            (self.staged, urldb.mark_staged),
            (self.unvisited, urldb.mark_unvisited),
            (self.skipped, urldb.mark_skipped),
            (self.errored, urldb.mark_errored),
        )

    def fill_urldb(self, urldb: UrlDb) -> None:
        """Move every URL of the snapshot into *urldb*; the snapshot lists are left empty."""
        for urls, mark in self._partitions(urldb):
            for url in urls:
                mark(url)
            urls.clear()


def merge_options(persisted: CrawlState, current: CrawlerConfig, strict: bool) -> CrawlerConfig:
    """Effective options for a resumed run.

    The starting URL always comes from *persisted*. Plain resume keeps the
    tunables of *current*; strict resume replaces them with the persisted ones.
    """
    update: dict = {"url": persisted.starting_url}
    if strict:
        update.update(
            site_policy=persisted.site_policy,
            filters=list(persisted.filters),
            depth=persisted.depth,
            include_js=persisted.include_js,
            include_css=persisted.include_css,
            min_word_length=persisted.min_word_length,
            max_word_length=persisted.max_word_length,
            requests_per_second=persisted.requests_per_second,
            limit_concurrent=persisted.limit_concurrent,
        )
    return current.model_copy(update=update)


__all__ = ["CrawlState", "merge_options"]
