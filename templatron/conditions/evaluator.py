"""
Вычислитель условных выражений.

Разрешает путь условия в контексте данных и приводит результат к булеву
значению по правилам is_truthy.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, cast

from .model import Condition, ConditionType, InvalidCondition, NotCondition, PathCondition
from ..context import MISSING, resolve_path

logger = logging.getLogger(__name__)


def is_truthy(value: Any) -> bool:
    """
    Приводит значение из контекста к булеву.

    Ложны: отсутствующее значение, None, False, 0, пустая строка
    и пустые контейнеры. Всё остальное истинно.
    """
    if value is MISSING:
        return False
    return bool(value)


class ConditionEvaluator:
    """
    Вычислитель условных выражений.

    Принимает AST условия и контекст данных, возвращает булево значение.
    """

    def __init__(self, context: Mapping[str, Any]):
        self.context = context

    def evaluate(self, condition: Condition) -> bool:
        """
        Вычисляет значение условия.

        Некорректное условие не является фатальной ошибкой: оно
        логируется и считается ложным.
        """
        condition_type = condition.get_type()

        if condition_type == ConditionType.PATH:
            return self._evaluate_path(cast(PathCondition, condition))
        elif condition_type == ConditionType.NOT:
            return not self._evaluate_path(cast(NotCondition, condition).condition)
        elif condition_type == ConditionType.INVALID:
            invalid = cast(InvalidCondition, condition)
            logger.warning(f"Invalid condition '{invalid.text}' treated as false: {invalid.reason}")
            return False

        logger.warning(f"Unknown condition type: {condition_type}")
        return False

    def _evaluate_path(self, condition: PathCondition) -> bool:
        return is_truthy(resolve_path(self.context, condition.path))


def evaluate_condition_string(condition_str: str, context: Mapping[str, Any]) -> bool:
    """
    Удобная функция для вычисления условия из строки.
    """
    from .parser import ConditionParser

    condition = ConditionParser().parse_lenient(condition_str)
    return ConditionEvaluator(context).evaluate(condition)
