# word_scout/report/dictionary.py

"""
Запись и чтение словаря WordScout: одно слово на строку, UTF-8.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union

from word_scout.logger import logger
from word_scout.store import WordDb


def write_dictionary(words: Iterable[str], output_path: Union[str, Path]) -> Path:
    """
    Сохраняет слова в файл словаря, перезаписывая его.

    :param words: слова (порядок сохраняется)
    :param output_path: путь к файлу словаря
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as f:
        for word in words:
            f.write(f"{word}\n")
    return output


def load_dictionary(path: Union[str, Path], db: WordDb) -> int:
    """Заполняет db словами из существующего словаря; отсутствующий файл не считается ошибкой."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("failed opening dictionary %s: %s", p, exc)
        logger.warning("...continuing without previous words")
        return 0
    words = [line for line in text.splitlines() if line]
    db.update(words)
    logger.debug("Loaded %d words from dictionary %s", len(words), p)
    return len(words)
