"""
Парсер условных выражений.

Грамматика:
condition → "!"? PATH

Всё, что сложнее (двойное отрицание, операторы сравнения, логические связки),
сознательно не поддерживается.
"""

from __future__ import annotations

from typing import List

from .lexer import ConditionLexer, Token
from .model import Condition, InvalidCondition, NotCondition, PathCondition


class ConditionParseError(Exception):
    """Ошибка парсинга условного выражения."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Parse error at position {position}: {message}")


class ConditionParser:
    """
    Парсер условий вида `path` и `!path`.
    """

    def __init__(self):
        self.lexer = ConditionLexer()
        self._tokens: List[Token] = []
        self._position = 0

    def parse(self, condition_str: str) -> Condition:
        """
        Парсит строку условия в AST.

        Raises:
            ConditionParseError: Если условие не укладывается в грамматику
        """
        self._tokens = self.lexer.tokenize(condition_str)
        self._position = 0

        if self._current_token().type == 'EOF':
            raise ConditionParseError("Empty condition", 0)

        negated = self._match_symbol("!")
        if negated and self._current_token().type == 'SYMBOL':
            raise ConditionParseError(
                "Only a single leading '!' is supported",
                self._current_token().position,
            )

        path_token = self._consume_path()
        condition = PathCondition(path=path_token.value)

        if self._current_token().type != 'EOF':
            current = self._current_token()
            raise ConditionParseError(f"Unexpected token '{current.value}'", current.position)

        return NotCondition(condition=condition) if negated else condition

    def parse_lenient(self, condition_str: str) -> Condition:
        """
        Парсит условие, превращая ошибку парсинга в InvalidCondition.

        Используется компилятором шаблонов: некорректное условие
        не должно ронять компиляцию.
        """
        try:
            return self.parse(condition_str)
        except ConditionParseError as e:
            return InvalidCondition(text=condition_str, reason=str(e))

    # Вспомогательные методы для работы с токенами

    def _current_token(self) -> Token:
        if self._position >= len(self._tokens):
            return self._tokens[-1]
        return self._tokens[self._position]

    def _match_symbol(self, symbol: str) -> bool:
        current = self._current_token()
        if current.type == 'SYMBOL' and current.value == symbol:
            self._position += 1
            return True
        return False

    def _consume_path(self) -> Token:
        current = self._current_token()
        if current.type == 'PATH':
            self._position += 1
            return current
        if current.type == 'EOF':
            raise ConditionParseError("Expected path", current.position)
        raise ConditionParseError(f"Unexpected token '{current.value}'", current.position)
