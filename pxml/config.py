"""
Конфигурация парсера.

Единственная опция - flatten: вернуть вложенное дерево (по умолчанию)
или плоскую последовательность узлов в прямом порядке обхода.
Конфигурацию можно задать словарём или YAML-файлом.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


@dataclass(frozen=True)
class ParserConfig:
    """Настройки поведения парсера."""
    flatten: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParserConfig":
        """
        Создание экземпляра из словаря (из YAML).

        Raises:
            ConfigError: При неизвестных ключах или неверных типах значений
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown parser option(s): {', '.join(map(str, unknown))}")

        flatten = data.get("flatten", False)
        if not isinstance(flatten, bool):
            raise ConfigError(f"flatten: expected bool, got {type(flatten).__name__}")

        return cls(flatten=flatten)

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь для YAML."""
        return {"flatten": self.flatten}


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_config(path: Path) -> ParserConfig:
    """
    Загружает конфигурацию парсера из YAML-файла.

    Отсутствующий файл даёт конфигурацию по умолчанию.

    Args:
        path: Путь к YAML-файлу

    Returns:
        Конфигурация парсера
    """
    raw = _read_yaml_map(Path(path))
    config = ParserConfig.from_dict(raw)
    logger.debug(f"Loaded parser config from {path}: {config}")
    return config


__all__ = ["ParserConfig", "load_config"]
