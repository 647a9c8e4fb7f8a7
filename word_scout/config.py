# === FILE: word_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации WordScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
import sys
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from word_scout.crawler.models import DEFAULT_USER_AGENT
from word_scout.crawler.site import SitePolicy
from word_scout.extract.filters import FilterMode, parse_filters
from word_scout.utils import str_not_whitespace


class CrawlerConfig(BaseModel):
    """Конфигурация одного запуска краулера."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    url: Optional[str] = Field(None, description="URL, с которого начинается обход.")
    depth: int = Field(1, ge=0, description="Максимальная глубина обхода ссылок.")
    min_word_length: int = Field(3, ge=0, description="Минимальная длина сохраняемого слова.")
    max_word_length: int = Field(sys.maxsize, ge=0, description="Максимальная длина сохраняемого слова.")
    include_js: bool = Field(False, description="Учитывать JavaScript (<script>, <link as=script>).")
    include_css: bool = Field(False, description="Учитывать CSS (<style>, <link rel=stylesheet>).")
    filters: List[FilterMode] = Field(default_factory=lambda: [FilterMode.NONE], description="Цепочка фильтров слов.")
    site_policy: SitePolicy = Field(SitePolicy.SAME, description="Политика посещения найденных URL.")
    requests_per_second: int = Field(5, ge=0, description="Лимит запросов в секунду.")
    limit_concurrent: int = Field(5, ge=1, description="Лимит одновременных запросов.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    output: str = Field("wdict.txt", description="Файл словаря (перезаписывается).")
    append: bool = Field(False, description="Дописывать слова к существующему словарю.")
    output_state: bool = Field(False, description="Сохранять состояние обхода в файл.")
    state_file: str = Field("state-wdict.json", description="Файл состояния (JSON).")

    @field_validator("filters", mode="before")
    def _split_filters(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_filters(v)
        return v

    @field_validator("output", "state_file")
    def _not_blank(cls, v: str) -> str:
        return str_not_whitespace(v)


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Без пути использует configs/default.yaml, если он есть, иначе значения по умолчанию.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return CrawlerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "load_config"]
