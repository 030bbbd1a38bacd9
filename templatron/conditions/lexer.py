"""
Лексер для разбора условных выражений.

Выделяет из строки условия:
- Символ отрицания (!)
- Пути (user.name, items.0, 42, -1.5, true)
- Пробелы (игнорируются)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List


@dataclass
class Token:
    """
    Токен для парсинга условий.

    Attributes:
        type: Тип токена (SYMBOL, PATH, UNKNOWN, EOF)
        value: Значение токена
        position: Позиция в исходной строке
    """
    type: str
    value: str
    position: int

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', pos={self.position})"


class ConditionLexer:
    """
    Лексер для разбиения строки условия на токены.
    """

    # Спецификация токенов: (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r'\s+', 'WHITESPACE', True),
        (r'!', 'SYMBOL', False),
        (r'-?[A-Za-z0-9_.]+', 'PATH', False),
        # Любой другой символ: неподдерживаемый оператор
        (r'.', 'UNKNOWN', False),
    ]

    def __init__(self):
        self._compiled_patterns = [
            (re.compile(pattern), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str) -> List[Token]:
        """
        Разбивает строку на токены.

        Неизвестные символы не приводят к ошибке лексера: они становятся
        UNKNOWN-токенами, и парсер сообщает о них с позицией.

        Returns:
            Список токенов, включая EOF в конце
        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if match:
                    if not ignore:
                        tokens.append(Token(type=token_type, value=match.group(0), position=position))
                    position = match.end()
                    break

        tokens.append(Token(type='EOF', value='', position=position))
        return tokens
