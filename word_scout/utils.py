# File: word_scout/utils.py
"""word_scout.utils: helpers for URL/path conversion and value checks shared by the CLI and crawler."""

from __future__ import annotations

import errno
import random
from pathlib import Path
from typing import Sequence, Union
from urllib.parse import urljoin, urlsplit, urlunsplit
from urllib.request import url2pathname

from word_scout.errors import BlankStringError, UrlParseError
from word_scout.logger import logger

__all__: Sequence[str] = (
    "normalize_url",
    "parse_url",
    "url_from_href",
    "url_from_path",
    "path_from_url",
    "str_not_whitespace",
    "num_between",
)


def normalize_url(url: str) -> str:
    """Adds the root path to bare ``scheme://host`` URLs so both spellings map to one key."""
    parts = urlsplit(url)
    if parts.netloc and not parts.path:
        return urlunsplit((parts.scheme, parts.netloc, "/", parts.query, parts.fragment))
    return url


def parse_url(url: str) -> str:
    """Validates *url* as an absolute URL and returns it normalized.

    Raises :class:`UrlParseError` when there is no scheme or the authority is malformed.
    """
    try:
        parts = urlsplit(url.strip())
        # port access validates the authority part
        parts.port
    except ValueError as exc:
        raise UrlParseError(url, str(exc)) from exc
    if not parts.scheme:
        raise UrlParseError(url, "relative URL without a base")
    return normalize_url(parts.geturl())


def url_from_href(page_url: str, href: str) -> str | None:
    """Resolves an ``href`` found on *page_url*; empty values and bare anchors give ``None``."""
    raw = href.strip()
    if not raw or raw.startswith("#"):
        return None
    try:
        joined = urljoin(page_url, raw)
        return parse_url(joined)
    except UrlParseError as exc:
        logger.debug("skipping href %r on %s: %s", href, page_url, exc)
        return None


def url_from_path(path: Union[str, Path]) -> str:
    """Converts a filesystem path to a ``file://`` URL; directories end with a slash.

    The path must exist (it is canonicalized), otherwise :class:`OSError` is raised;
    symlink loops raise ``OSError`` with ``ELOOP`` on every Python version.
    """
    try:
        resolved = Path(path).expanduser().resolve(strict=True)
    except RuntimeError as exc:
        raise OSError(errno.ELOOP, str(exc), str(path)) from exc
    uri = resolved.as_uri()
    if resolved.is_dir() and not uri.endswith("/"):
        uri += "/"
    return uri


def path_from_url(url: str) -> Path:
    """Inverse of :func:`url_from_path`."""
    return Path(url2pathname(urlsplit(url).path))


def str_not_whitespace(value: str) -> str:
    """Rejects blank values and values padded with whitespace."""
    if not value or value.strip() != value:
        raise BlankStringError(value)
    return value


def num_between(lower: int, upper: int) -> int:
    """Returns a pseudo-random integer in ``[lower, upper]``; bounds may come in either order."""
    lo, hi = sorted((lower, upper))
    return random.randint(lo, hi)
