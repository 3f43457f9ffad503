# === FILE: site_mirror/config.py ===
"""
Модуль для загрузки и валидации конфигурации зеркалирования SiteMirror.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

DEFAULT_DIR = Path("./data")


class MirrorConfig(BaseModel):
    """Конфигурация одного запуска зеркалирования."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    url: HttpUrl = Field(..., description="Начальный URL; задаёт хост и область обхода.")
    dir: Path = Field(DEFAULT_DIR, description="Корневая папка зеркала.")
    timeout: Optional[float] = Field(None, gt=0, description="Таймаут на один запрос (секунд); None — без таймаута.")
    connection_limit: int = Field(0, ge=0, description="Лимит одновременных соединений; 0 — без ограничения.")

    @field_validator("url", mode="before")
    def _check_scheme(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v.startswith("http"):
                raise ValueError("URL должен начинаться с http, например https://github.com")
        return v

    @property
    def seed(self) -> str:
        """Начальный URL строкой, без завершающего слеша."""
        return str(self.url).rstrip("/")

    @property
    def start_url(self) -> str:
        """Начальный URL как задан (слеш сохраняется: от него считаются относительные ссылки)."""
        return str(self.url)


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


def read_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Читает YAML или JSON без валидации схемы."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path]) -> MirrorConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект MirrorConfig.
    При отсутствии файла бросает FileNotFoundError.
    """
    return MirrorConfig(**read_config_file(path))


def build_config(path: Union[str, Path, None] = None, **overrides: Any) -> MirrorConfig:
    """
    Собирает конфигурацию из файла (если задан) и переопределений CLI.
    Значения None в overrides игнорируются.
    """
    data: dict[str, Any] = read_config_file(path) if path is not None else {}
    data.update({k: v for k, v in overrides.items() if v is not None})
    return MirrorConfig(**data)


__all__ = ["MirrorConfig", "DEFAULT_DIR", "load_config", "build_config", "read_config_file"]
