"""
Word extraction from fetched or read documents.
"""
from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, List, Tuple

import filetype
from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString

from word_scout.extract.filters import FilterMode, apply_filters
from word_scout.logger import logger
from word_scout.store import WordDb

if TYPE_CHECKING:
    from word_scout.config import CrawlerConfig

_WORD_RE = re.compile(r"\w+(?:['’]\w+)*")

_HTML_PREFIXES: Tuple[bytes, ...] = (
    b"<!doctype html", b"<html", b"<head", b"<body", b"<script", b"<iframe", b"<h1",
    b"<div", b"<font", b"<table", b"<a", b"<style", b"<title", b"<b", b"<br", b"<p", b"<!--",
)


def sniff_mime(doc: bytes) -> str:
    """Best-effort type detection: HTML by its leading tag, binary formats by magic number."""
    head = doc[:512].lstrip(b"\xef\xbb\xbf").lstrip().lower()
    for prefix in _HTML_PREFIXES:
        if head.startswith(prefix):
            rest = head[len(prefix):len(prefix) + 1]
            if prefix == b"<!--" or rest in (b"", b" ", b">", b"\t", b"\n", b"\r"):
                return "text/html"
    kind = filetype.guess(doc) if doc else None
    if kind is not None:
        return kind.mime
    if b"\0" in doc[:1024]:
        return "application/octet-stream"
    return "text/plain"


def unicode_words(text: str) -> Iterator[str]:
    for match in _WORD_RE.finditer(text):
        yield match.group(0)


@dataclass(frozen=True, slots=True)
class ExtractOptions:
    """Options used when building wordlists."""

    min_word_length: int = 3
    max_word_length: int = sys.maxsize
    include_js: bool = False
    include_css: bool = False
    filters: Tuple[FilterMode, ...] = field(default_factory=tuple)

    @classmethod
    def from_config(cls, config: CrawlerConfig) -> ExtractOptions:
        return cls(
            min_word_length=config.min_word_length,
            max_word_length=config.max_word_length,
            include_js=config.include_js,
            include_css=config.include_css,
            filters=tuple(config.filters),
        )


class Extractor:
    """Extracts words from raw documents into a shared :class:`WordDb`."""

    def __init__(self, opts: ExtractOptions, words: WordDb) -> None:
        self.opts = opts
        self.words = words

    def clone(self) -> Extractor:
        """A new handle over the same options and word store."""
        return Extractor(self.opts, self.words)

    def words_from_doc(self, doc: bytes) -> None:
        mime = sniff_mime(doc)
        if mime == "text/html":
            self.words_from_html(doc)
        elif mime == "text/plain":
            self.words_from_text(doc)
        else:
            logger.debug("unsupported mime type: %s", mime)

    def words_from_html(self, doc: bytes) -> None:
        soup = BeautifulSoup(doc, "html.parser")
        chunks: List[str] = []
        for node in soup.find_all(string=True):
            if not isinstance(node, NavigableString) or isinstance(node, PreformattedString):
                continue
            parent = node.parent.name.lower() if node.parent is not None and node.parent.name else ""
            if parent == "script" and not self.opts.include_js:
                continue
            if parent == "style" and not self.opts.include_css:
                continue
            chunks.append(str(node))
        self.filter_text(" ".join(chunks))

    def words_from_text(self, doc: bytes) -> None:
        self.filter_text(doc.decode("utf-8", errors="replace"))

    def filter_text(self, text: str) -> None:
        """Lower-case, filter and length-check every word of *text*, then store the survivors."""
        kept: List[str] = []
        for word in unicode_words(text):
            final = apply_filters(word.lower(), self.opts.filters)
            if final and self.opts.min_word_length <= len(final) <= self.opts.max_word_length:
                kept.append(final)
        self.words.update(kept)


__all__ = ("Extractor", "ExtractOptions", "sniff_mime", "unicode_words")
