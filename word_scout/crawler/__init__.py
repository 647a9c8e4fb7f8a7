"""word_scout.crawler: depth-staged crawl orchestration, spiders, site policies and rate limiting."""

from word_scout.crawler.crawler import Crawler
from word_scout.crawler.models import CrawlMode, CrawlOptions
from word_scout.crawler.ratelimit import TokenBucket
from word_scout.crawler.site import SitePolicy
from word_scout.crawler.spider import Spider

__all__ = ["Crawler", "CrawlMode", "CrawlOptions", "SitePolicy", "Spider", "TokenBucket"]
