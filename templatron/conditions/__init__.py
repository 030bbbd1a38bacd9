"""
Система условий для блоков {#if}.

Условие — это путь в контексте данных с необязательным ведущим `!`.
"""

from .evaluator import ConditionEvaluator, evaluate_condition_string, is_truthy
from .model import (
    Condition,
    ConditionType,
    InvalidCondition,
    NotCondition,
    PathCondition,
)
from .parser import ConditionParseError, ConditionParser

__all__ = [
    "Condition",
    "ConditionType",
    "PathCondition",
    "NotCondition",
    "InvalidCondition",
    "ConditionParser",
    "ConditionParseError",
    "ConditionEvaluator",
    "evaluate_condition_string",
    "is_truthy",
]
