"""word_scout.store: shared, lock-guarded stores for URLs and words."""

from word_scout.store.urldb import UrlDb, UrlStatus
from word_scout.store.worddb import WordDb

__all__ = ["UrlDb", "UrlStatus", "WordDb"]
