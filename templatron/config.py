from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError

DEFAULT_CFG_FILE = "templatron.yaml"

# --------------------------------------------------------------------------- #
# ДЕФОЛТЫ
# --------------------------------------------------------------------------- #
_DEFAULT_CFG: Dict[str, Any] = {
    "templates_dir": ".",
    "default_suffix": "",
    "max_include_depth": 16,
    "trim_blank_runs": True,
    "log_level": "WARNING",
}

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# --------------------------------------------------------------------------- #
# YAML loader
# --------------------------------------------------------------------------- #
_yaml = YAML(typ="safe")


@dataclass(frozen=True)
class EngineConfig:
    """
    Настройки движка шаблонов.

    Attributes:
        templates_dir: Корень для загрузки шаблонов (относительно файла конфигурации)
        default_suffix: Суффикс, подставляемый к именам шаблонов без расширения
        max_include_depth: Предельная глубина вложенности {#include}
        trim_blank_runs: Отбрасывать пробельные отступы между структурными тегами
        log_level: Уровень логирования CLI
    """
    templates_dir: Path = Path(".")
    default_suffix: str = ""
    max_include_depth: int = 16
    trim_blank_runs: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, raw: Dict[str, Any], base_dir: Path | None = None) -> "EngineConfig":
        """Создаёт конфигурацию из словаря, проверяя типы значений."""
        unknown = set(raw) - set(_DEFAULT_CFG)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        cfg = _merge_defaults(raw)

        templates_dir = cfg["templates_dir"]
        if not isinstance(templates_dir, str):
            raise ConfigError("templates_dir: expected string")
        path = Path(templates_dir)
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path

        if not isinstance(cfg["default_suffix"], str):
            raise ConfigError("default_suffix: expected string")

        depth = cfg["max_include_depth"]
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
            raise ConfigError("max_include_depth: expected positive integer")

        if not isinstance(cfg["trim_blank_runs"], bool):
            raise ConfigError("trim_blank_runs: expected boolean")

        level = str(cfg["log_level"]).upper()
        if level not in _LOG_LEVELS:
            raise ConfigError(f"log_level: expected one of {', '.join(sorted(_LOG_LEVELS))}")

        return cls(
            templates_dir=path,
            default_suffix=cfg["default_suffix"],
            max_include_depth=depth,
            trim_blank_runs=cfg["trim_blank_runs"],
            log_level=level,
        )

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


# --------------------------------------------------------------------------- #
# HELPERS
# --------------------------------------------------------------------------- #
def _merge_defaults(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Накладываем значения пользователя поверх дефолтов."""
    cfg = _DEFAULT_CFG.copy()
    cfg.update(raw)
    return cfg


def read_yaml_map(path: Path) -> Dict[str, Any]:
    """
    Читает YAML (или JSON) файл и возвращает словарь.

    Raises:
        ConfigError: Если файл не разбирается или верхний уровень не отображение
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    try:
        raw = _yaml.load(text) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


# --------------------------------------------------------------------------- #
# PUBLIC API
# --------------------------------------------------------------------------- #
def load_config(path: Path) -> EngineConfig:
    """
    Загрузить templatron.yaml.

    • Если файла нет — вернуть дефолты (templates_dir относительно каталога файла).
    • Неизвестные ключи и неверные типы — ConfigError.
    """
    if not path.exists():
        return EngineConfig.from_dict({}, base_dir=path.parent)
    return EngineConfig.from_dict(read_yaml_map(path), base_dir=path.parent)


__all__ = ["EngineConfig", "load_config", "read_yaml_map", "DEFAULT_CFG_FILE"]
