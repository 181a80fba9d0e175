# === FILE: site_indexer/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера SiteIndexer.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_USER_AGENT = "BusinessSearchCrawler/1.0 (+https://example.com)"


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска краулера."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_file: Path = Field(Path("data/url_seeds.txt"), description="Файл со списком URL (по одному на строку).")
    db_path: Path = Field(Path("data/documents.db"), description="Путь к базе SQLite с документами.")
    max_depth: int = Field(1, ge=0, description="Максимальная глубина обхода ссылок (семя = 0).")
    max_links_per_page: int = Field(25, ge=0, description="Сколько ссылок страницы обходить на следующем уровне.")
    timeout: float = Field(20.0, gt=0, description="Таймаут на один запрос (секунд).")
    max_redirects: int = Field(5, ge=0, description="Максимальное число редиректов на запрос.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    concurrency: int = Field(1, ge=1, description="Число одновременных загрузок ссылок одной страницы.")
    snippet_length: int = Field(240, ge=1, description="Длина сниппета в символах Unicode.")
    run_timeout: Optional[float] = Field(None, gt=0, description="Дедлайн всего обхода (секунд).")

    @field_validator("seed_file", "db_path", mode="before")
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, (str, Path)):
            return Path(v).expanduser()
        return v

    @field_validator("user_agent", mode="before")
    def _strip_user_agent(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


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
    Без пути берётся configs/default.yaml, а если его нет, значения по умолчанию.
    При отсутствии явно указанного файла бросает FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
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

    # ValidationError пробрасывается как есть: CLI показывает его пользователю
    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "DEFAULT_USER_AGENT", "load_config"]
