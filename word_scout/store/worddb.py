"""
Shared store of unique words harvested during a crawl.
"""
from __future__ import annotations

import threading
from typing import Iterable, Iterator, List, Set


class WordDb:
    """Set of unique words guarded by a single lock; share one instance between extractors."""

    def __init__(self, words: Iterable[str] = ()) -> None:
        self._lock = threading.Lock()
        self._words: Set[str] = set(words)

    def insert(self, word: str) -> None:
        with self._lock:
            self._words.add(word)

    def update(self, words: Iterable[str]) -> None:
        batch = list(words)
        with self._lock:
            self._words.update(batch)

    def sorted_words(self) -> List[str]:
        with self._lock:
            snapshot = list(self._words)
        return sorted(snapshot)

    def __len__(self) -> int:
        with self._lock:
            return len(self._words)

    def __contains__(self, word: object) -> bool:
        with self._lock:
            return word in self._words

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            snapshot = list(self._words)
        return iter(snapshot)
