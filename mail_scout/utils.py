# File: mail_scout/utils.py
"""mail_scout.utils: Утилиты для чтения списка стартовых URL и удаления дубликатов."""

from __future__ import annotations

from pathlib import Path
from typing import Collection, List, Sequence, Union

from mail_scout.crawler.urls import ensure_scheme
from mail_scout.logger import logger

__all__: Sequence[str] = (
    "read_seed_file",
    "remove_duplicates",
)


def read_seed_file(path: Union[str, Path]) -> List[str]:
    """
    Читает файл со списком URL (по одному на строку), пропускает пустые
    строки и добавляет https:// там, где схема не указана.
    Ошибка чтения (OSError) пробрасывается: запуск без списка невозможен.
    """
    p = Path(path).expanduser()
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Cannot read URL list %s: %s", p, exc)
        raise
    urls = [ensure_scheme(line.strip()) for line in text.splitlines() if line.strip()]
    logger.debug("Loaded %d URLs from %s", len(urls), p)
    return urls


def remove_duplicates(items: Collection[str]) -> List[str]:
    """Удаляет дубликаты, сохраняя порядок."""
    unique = list(dict.fromkeys(items))
    removed = len(items) - len(unique)
    if removed:
        logger.debug("Removed %d duplicates", removed)
    return unique
