"""
Модели данных для системы условий.

Грамматика условий намеренно ограничена: путь в контексте данных,
опционально с одним ведущим отрицанием. Условие, не укладывающееся
в грамматику, представляется узлом InvalidCondition и при вычислении
считается ложным.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Union


class ConditionType(Enum):
    """Типы условий в системе."""
    PATH = "path"
    NOT = "not"
    INVALID = "invalid"


@dataclass(frozen=True)
class Condition(ABC):
    """Базовый абстрактный класс для всех условий."""

    @abstractmethod
    def get_type(self) -> ConditionType:
        """Возвращает тип условия."""
        pass

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        pass


@dataclass(frozen=True)
class PathCondition(Condition):
    """
    Условие-путь: user.is_admin

    Истинно, если значение по пути истинно (см. is_truthy).
    """
    path: str

    def get_type(self) -> ConditionType:
        return ConditionType.PATH

    def _to_string(self) -> str:
        return self.path


@dataclass(frozen=True)
class NotCondition(Condition):
    """
    Отрицание пути: !user.is_admin
    """
    condition: PathCondition

    def get_type(self) -> ConditionType:
        return ConditionType.NOT

    def _to_string(self) -> str:
        return f"!{self.condition}"


@dataclass(frozen=True)
class InvalidCondition(Condition):
    """
    Условие вне поддерживаемой грамматики.

    Сохраняет исходный текст и причину для диагностики.
    """
    text: str
    reason: str

    def get_type(self) -> ConditionType:
        return ConditionType.INVALID

    def _to_string(self) -> str:
        return self.text


AnyCondition = Union[PathCondition, NotCondition, InvalidCondition]

__all__ = [
    "Condition",
    "ConditionType",
    "PathCondition",
    "NotCondition",
    "InvalidCondition",
    "AnyCondition",
]
