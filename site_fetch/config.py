"""
Загрузка и валидация конфигурации SiteFetch.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl

OutputFormat = Literal["json", "text"]


class FetchConfig(BaseModel):
    """Конфигурация для одного запуска обхода сайта."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: HttpUrl = Field(..., description="Стартовый URL обхода.")
    concurrency: int = Field(3, ge=1, description="Число одновременно выполняемых загрузок.")
    timeout: Optional[float] = Field(
        None, gt=0, description="Таймаут на один запрос (секунд); None — без ограничения."
    )
    output: Optional[Path] = Field(None, description="Файл для сохранения результата.")
    format: Optional[OutputFormat] = Field(None, description="Формат вывода: json или text.")

    def resolved_format(self) -> OutputFormat:
        """Явный формат, иначе json для файлов *.json, иначе text."""
        if self.format is not None:
            return self.format
        if self.output is not None and self.output.suffix.lower() == ".json":
            return "json"
        return "text"


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
    """Читает YAML или JSON файл и возвращает «сырой» mapping без валидации."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> FetchConfig:
    """
    Собирает FetchConfig из файла (если указан) и явных переопределений.

    Переопределения со значением None игнорируются, остальные имеют
    приоритет над значениями из файла. Ошибки схемы пробрасываются как
    pydantic.ValidationError.
    """
    data: dict[str, Any] = read_config_file(path) if path is not None else {}
    data.update({key: value for key, value in overrides.items() if value is not None})
    return FetchConfig(**data)


__all__ = ["FetchConfig", "OutputFormat", "load_config", "read_config_file"]
