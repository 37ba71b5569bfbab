# === FILE: mail_scout/config.py ===
"""
Модуль для загрузки и валидации параметров обхода MailScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from mail_scout.crawler.urls import ensure_scheme

__all__ = ["CrawlOptions", "load_config", "DEFAULT_USER_AGENT"]

DEFAULT_USER_AGENT = "MailScoutBot/0.1"


class CrawlOptions(BaseModel):
    """Параметры одного запуска: создаются один раз, не изменяются."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    url: Optional[str] = Field(None, description="Стартовый URL для рекурсивного обхода.")
    url_file: Optional[Path] = Field(None, description="Файл со списком URL (пакетный режим).")
    depth: int = Field(-1, ge=-1, description="-1 без ограничений, 0 только стартовый URL, n уровней вперёд.")
    timeout: int = Field(10000, gt=0, description="Таймаут на один запрос (мс).")
    sleep: int = Field(0, ge=0, description="Пауза перед каждым запросом (мс).")
    limit_urls: int = Field(1000, ge=1, description="Лимит по числу URL.")
    limit_emails: int = Field(1000, ge=1, description="Лимит по числу адресов.")
    ignore_queries: bool = Field(True, description="Отбрасывать query-параметры ссылок.")
    out: Optional[Path] = Field(Path("emails.txt"), description="Файл для адресов, пишется по мере обхода.")
    max_workers: int = Field(50, ge=1, description="Число воркеров пакетного режима.")
    parallel: bool = Field(True, description="Параллельный обход.")
    concurrency: int = Field(50, ge=1, description="Лимит одновременных загрузок в параллельном рекурсивном режиме.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")

    @field_validator("url", mode="before")
    def _default_scheme(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return ensure_scheme(v) if v else None
        return v

    @field_validator("out", mode="before")
    def _empty_out_disables_file(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def _check_seed_source(self) -> CrawlOptions:
        if (self.url is None) == (self.url_file is None):
            raise ValueError("exactly one of 'url' or 'url_file' must be set")
        return self

    @property
    def crawl_from_file(self) -> bool:
        return self.url_file is not None

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000

    @property
    def sleep_seconds(self) -> float:
        return self.sleep / 1000


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


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlOptions:
    """
    Читает YAML или JSON (если задан path), накладывает overrides и
    возвращает проверенный объект CrawlOptions.
    Значения overrides, равные None, пропускаются.
    """
    data: dict[str, Any] = {}
    if path is not None:
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

    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return CrawlOptions(**data)
    except ValidationError:
        raise
