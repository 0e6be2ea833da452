"""
Модуль для загрузки и валидации конфигурации SiteMarkdown.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from site_markdown.validation import BLOCKED_DOMAINS, BLOCKED_EXTENSIONS

__all__ = ("AppConfig", "load_config", "DEFAULT_CONFIG_PATH")


class AppConfig(BaseModel):
    """Конфигурация одного запуска: бэкенд рендеринга, обход, HTTP-сервер."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    backend: Literal["browser", "http"] = Field(
        "browser", description="Бэкенд рендеринга: headless-браузер или простой HTTP."
    )
    headless: bool = Field(True, description="Запускать локальный браузер без окна.")
    browser_endpoint: Optional[str] = Field(
        None, description="CDP-endpoint удалённого браузера (вместо локального запуска)."
    )
    navigation_timeout_ms: int = Field(30000, gt=0, description="Таймаут одной навигации (мс).")
    max_pages: int = Field(10, ge=0, description="Лимит успешно посещённых страниц при обходе.")
    user_agent: str = Field("SiteMarkdownBot/1.0", min_length=1, description="Заголовок User-Agent.")
    cache_ttl: int = Field(150, ge=0, description="Время жизни кэша HTTP-обработчика (секунд).")
    host: str = Field("127.0.0.1", min_length=1, description="Адрес HTTP-сервера.")
    port: int = Field(8787, ge=0, le=65535, description="Порт HTTP-сервера.")
    blocked_domains: tuple[str, ...] = Field(
        BLOCKED_DOMAINS, description="Домены, запросы к которым блокируются."
    )
    blocked_extensions: tuple[str, ...] = Field(
        BLOCKED_EXTENSIONS, description="Расширения медиа-файлов, которые не загружаются."
    )

    @field_validator("browser_endpoint", mode="before")
    def _empty_endpoint_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("blocked_extensions", mode="after")
    def _dot_prefixed(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(ext if ext.startswith(".") else f".{ext}" for ext in v)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


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


def load_config(path: Union[str, Path, None]) -> AppConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект AppConfig.

    Без явного пути используется configs/default.yaml, а если его нет,
    значения по умолчанию. Явно указанный, но отсутствующий файл даёт FileNotFoundError.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.is_file():
            return AppConfig()
        path_obj = DEFAULT_CONFIG_PATH
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

    return AppConfig(**data)
