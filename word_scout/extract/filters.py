"""
Word filters applied, in order, to every lower-cased word before it is stored.

A filter "ignores" a word by returning an empty string.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, List

from decancer_py import parse as decancer_parse
from unidecode import unidecode

from word_scout.logger import logger


class FilterMode(str, Enum):
    #: normalize lookalike unicode (confusables, fancy letters) via decancer
    DECANCER = "decancer"
    #: transliterate unicode to its closest ASCII spelling
    DEUNICODE = "deunicode"
    #: ignore words that consist of all numbers
    ALL_NUMBERS = "all-numbers"
    #: ignore words that contain any number
    ANY_NUMBERS = "any-numbers"
    #: ignore words that contain no numbers
    NO_NUMBERS = "no-numbers"
    #: keep only words that exclusively contain numbers
    ONLY_NUMBERS = "only-numbers"
    #: ignore words that consist of all ascii characters
    ALL_ASCII = "all-ascii"
    #: ignore words that contain any ascii character
    ANY_ASCII = "any-ascii"
    #: ignore words that contain no ascii characters
    NO_ASCII = "no-ascii"
    #: keep only words that exclusively contain ascii characters
    ONLY_ASCII = "only-ascii"
    #: leave the word as-is
    NONE = "none"

    def __str__(self) -> str:
        return self.value

    def apply(self, word: str) -> str:
        match self:
            case FilterMode.DECANCER:
                return _decancer(word)
            case FilterMode.DEUNICODE:
                return unidecode(word)
            case FilterMode.ALL_NUMBERS:
                return "" if all(ch.isnumeric() for ch in word) else word
            case FilterMode.ANY_NUMBERS:
                return "" if any(ch.isnumeric() for ch in word) else word
            case FilterMode.NO_NUMBERS:
                return word if any(ch.isnumeric() for ch in word) else ""
            case FilterMode.ONLY_NUMBERS:
                return word if all(ch.isnumeric() for ch in word) else ""
            case FilterMode.ALL_ASCII:
                return "" if word.isascii() else word
            case FilterMode.ANY_ASCII:
                return "" if any(ch.isascii() for ch in word) else word
            case FilterMode.NO_ASCII:
                return word if any(ch.isascii() for ch in word) else ""
            case FilterMode.ONLY_ASCII:
                return word if word.isascii() else ""
            case FilterMode.NONE:
                return word


def _decancer(word: str) -> str:
    try:
        return str(decancer_parse(word))
    except (ValueError, RuntimeError) as exc:
        # a word decancer cannot cure is dropped
        logger.debug("decancer failed for %r: %s", word, exc)
        return ""


def apply_filters(word: str, filters: Iterable[FilterMode]) -> str:
    for f in filters:
        word = f.apply(word)
    return word


def parse_filters(value: str | Iterable[str]) -> List[FilterMode]:
    """Parse ``"a,b"`` or ``["a", "b"]`` into filter modes; raises ValueError on unknown names."""
    names = value.split(",") if isinstance(value, str) else list(value)
    return [FilterMode(name.strip()) for name in names if name.strip()]


__all__ = ("FilterMode", "apply_filters", "parse_filters")
