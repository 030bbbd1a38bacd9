"""
Лексические типы.

Определяет типы токенов шаблона и сам токен с позиционной информацией.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Tuple


class TokenType(enum.Enum):
    """Типы токенов в шаблоне."""

    # Текстовый контент
    TEXT = "TEXT"

    # Теги значений
    VARIABLE = "VARIABLE"    # { path }
    JSON = "JSON"            # {@json path}
    HTML = "HTML"            # {@html path}

    # Структурные теги
    IF = "IF"                # {#if condition}
    EACH = "EACH"            # {#each collection as alias, index}
    INCLUDE = "INCLUDE"      # {#include "path"}
    ELSE = "ELSE"            # {:else}
    END = "END"              # {/if} | {/each}

    EOF = "EOF"


# Теги, которые сами ничего не выводят и только задают структуру
STRUCTURAL_TYPES = frozenset({
    TokenType.IF,
    TokenType.EACH,
    TokenType.INCLUDE,
    TokenType.ELSE,
    TokenType.END,
})


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.

    Attributes:
        type: Тип токена
        value: Исходный текст токена (для TEXT — сам текст)
        position: Позиция в исходном тексте
        line: Номер строки (начиная с 1)
        column: Номер колонки (начиная с 1)
        args: Разобранные аргументы тега (путь, условие, алиасы)
    """
    type: TokenType
    value: str
    position: int
    line: int
    column: int
    args: Tuple[str, ...] = ()

    @property
    def is_structural(self) -> bool:
        return self.type in STRUCTURAL_TYPES

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


__all__ = ["TokenType", "Token", "STRUCTURAL_TYPES"]
