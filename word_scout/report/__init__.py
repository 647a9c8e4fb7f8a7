# File: word_scout/report/__init__.py
"""word_scout.report: запись словаря и файла состояния, используемые CLI и тестами."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from word_scout.report.dictionary import load_dictionary, write_dictionary
from word_scout.state import CrawlState


def write_state(state: CrawlState, path: Union[str, Path]) -> Path:
    """Сохраняет состояние обхода в JSON по указанному пути."""
    return state.save(path)


__all__ = ["write_dictionary", "load_dictionary", "write_state"]
