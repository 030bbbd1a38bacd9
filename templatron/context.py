"""
Контекст данных шаблона и разрешение путей в нём.

Контекст — это отображение строковых ключей на произвольные значения.
Итерация создаёт производный контекст (ChainMap поверх исходного),
не изменяя исходное отображение.
"""

from __future__ import annotations

import re
from collections import ChainMap
from collections.abc import Mapping, Sequence
from typing import Any


class _Missing:
    """Маркер отсутствующего значения (в отличие от явного None)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

_NUMBER_RE = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")

_LITERALS = {
    "true": True,
    "false": False,
}


def resolve_path(context: Mapping[str, Any], path: str) -> Any:
    """
    Разрешает путь вида `user.address.city` в контексте данных.

    Литералы разрешаются в себя: `42` → 42, `-1.5` → -1.5,
    `true`/`false` → True/False.

    Returns:
        Найденное значение или MISSING, если любой промежуточный сегмент
        отсутствует, равен None или не является контейнером
    """
    path = path.strip()
    if _NUMBER_RE.fullmatch(path):
        return float(path) if "." in path else int(path)
    if path in _LITERALS:
        return _LITERALS[path]
    if not path:
        return MISSING

    current: Any = context
    for segment in path.split("."):
        current = _step(current, segment)
        if current is MISSING:
            return MISSING
    return current


def _step(container: Any, segment: str) -> Any:
    """Один шаг разрешения пути."""
    if isinstance(container, Mapping):
        return container.get(segment, MISSING)
    if _is_sequence(container) and _is_index(segment):
        index = int(segment)
        return container[index] if index < len(container) else MISSING
    return MISSING


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _is_index(segment: str) -> bool:
    """Индекс списка: только ASCII-цифры (`²` и прочие Unicode-цифры не индекс)."""
    return segment.isascii() and segment.isdecimal()


def is_iterable_collection(value: Any) -> bool:
    """Проверяет, что значение можно перебирать в {#each} (список или кортеж)."""
    return isinstance(value, (list, tuple))


def derive_context(context: Mapping[str, Any], bindings: Mapping[str, Any]) -> Mapping[str, Any]:
    """
    Создаёт производный контекст с дополнительными привязками.

    Исходный контекст не изменяется; привязки перекрывают одноимённые ключи.
    """
    return ChainMap(dict(bindings), context)


__all__ = [
    "MISSING",
    "resolve_path",
    "derive_context",
    "is_iterable_collection",
]
