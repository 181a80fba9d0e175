# File: site_indexer/utils.py
"""site_indexer.utils: Хранение списка семян: плоский текстовый файл, один URL на строку."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Union

from site_indexer.logger import logger

__all__: Sequence[str] = (
    "ensure_seed_file",
    "get_seed_list_contents",
    "save_seed_list",
    "read_seeds",
    "parse_seed_list",
)

PathT = Union[str, Path]


def ensure_seed_file(path: PathT) -> Path:
    """Создаёт каталог и пустой файл семян, если их ещё нет; возвращает Path."""
    p = Path(path).expanduser()
    p.parent.mkdir(parents=True, exist_ok=True)
    if not p.exists():
        p.write_text("", encoding="utf-8")
        logger.debug("Created empty seed list %s", p)
    return p


def get_seed_list_contents(path: PathT) -> str:
    """Возвращает содержимое файла семян как есть."""
    return ensure_seed_file(path).read_text(encoding="utf-8")


def save_seed_list(path: PathT, raw_list: str) -> Path:
    """Перезаписывает список семян целиком (с обрезкой пробелов по краям)."""
    p = ensure_seed_file(path)
    p.write_text(raw_list.strip(), encoding="utf-8")
    logger.debug("Saved %d seeds to %s", len(parse_seed_list(raw_list)), p)
    return p


def parse_seed_list(raw_list: str) -> List[str]:
    """Обрезает строки и отбрасывает пустые; порядок строк сохраняется."""
    return [line.strip() for line in raw_list.splitlines() if line.strip()]


def read_seeds(path: PathT) -> List[str]:
    """Читает файл семян и возвращает непустые URL в порядке файла."""
    seeds = parse_seed_list(get_seed_list_contents(path))
    logger.debug("Loaded %d seeds from %s", len(seeds), path)
    return seeds
