"""
Site policies deciding which discovered URLs may be visited.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional
from urllib.parse import urlsplit

import tldextract

# bundled public suffix snapshot only, no network lookups
_EXTRACT = tldextract.TLDExtract(suffix_list_urls=())


def host_of(url: str) -> Optional[str]:
    """Lower-cased host of *url*, or None for URLs without one (mailto:, javascript:, ...)."""
    try:
        return urlsplit(url).hostname or None
    except ValueError:
        return None


def registrable_domain(host: str) -> Optional[str]:
    """Smallest publicly registrable domain of *host* (``a.b.example.co.uk`` → ``example.co.uk``)."""
    ext = _EXTRACT(host)
    if not ext.domain or not ext.suffix:
        return None
    return f"{ext.domain}.{ext.suffix}"


class SitePolicy(str, Enum):
    """Relationship a target host must have with the crawl origin host."""

    SAME = "same"
    SUBDOMAIN = "subdomain"
    SIBLING = "sibling"
    ALL = "all"

    def __str__(self) -> str:
        return self.value

    def matches(self, source_url: str, target_url: str) -> bool:
        """Return True if *target_url* may be visited when crawling from *source_url*."""
        target = host_of(target_url)
        if target is None:
            return False
        source = host_of(source_url)
        match self:
            case SitePolicy.SAME:
                return source is not None and target == source
            case SitePolicy.SUBDOMAIN:
                return source is not None and (target == source or target.endswith(f".{source}"))
            case SitePolicy.SIBLING:
                if source is None:
                    return False
                source_domain = registrable_domain(source)
                target_domain = registrable_domain(target)
                if source_domain is None or target_domain is None:
                    # hosts without a public suffix (localhost, IPs) only match themselves
                    return target == source
                return target_domain == source_domain
            case SitePolicy.ALL:
                return True


__all__ = ("SitePolicy", "host_of", "registrable_domain")
