"""
Лексический анализатор для движка шаблонизации.

Один проход слева направо по исходному тексту: единое регулярное выражение
находит распознаваемые теги, всё между ними становится TEXT-токенами.
Нераспознанные фигурные скобки (CSS, JS, {#unknown}) остаются текстом.
"""

from __future__ import annotations

import re
from typing import List, Optional

from .tokens import Token, TokenType

# Путь в контексте данных: user.name, items.0, 42, true
_PATH = r"[A-Za-z0-9_.]+"

_TAG_RE = re.compile(
    r"""
      \{\s*(?P<variable>""" + _PATH + r""")\s*\}
    | \{@(?P<raw_kind>json|html)\s+(?P<raw_path>""" + _PATH + r""")\s*\}
    | \{\#if\s+(?P<condition>[^{}]*?)\s*\}
    | \{\#each\s+(?P<collection>""" + _PATH + r""")
          (?:\s+as\s+(?P<alias>\w+)(?:\s*,\s*(?P<index>\w+))?)?\s*\}
    | \{\#include\s+(?P<include>"[^"{}]*"|'[^'{}]*'|[\w./-]+)\s*\}
    | \{:(?P<else>else)\s*\}
    | \{/(?P<end>if|each)\s*\}
    """,
    re.VERBOSE,
)


class TemplateLexer:
    """
    Лексический анализатор шаблонов.

    Разбивает исходный текст на чередующиеся TEXT-токены и токены тегов,
    отслеживая номера строк и колонок для диагностики.
    """

    def __init__(self, text: str):
        self.text = text
        self.line = 1
        self.column = 1
        self._last = 0

    def tokenize(self) -> List[Token]:
        """
        Токенизирует весь исходный текст и возвращает список токенов.

        Последним всегда идёт EOF.
        """
        tokens: List[Token] = []

        for match in _TAG_RE.finditer(self.text):
            start = match.start()
            if start > self._last:
                tokens.append(self._text_token(self._last, start))
            tokens.append(self._tag_token(match))

        if self._last < len(self.text):
            tokens.append(self._text_token(self._last, len(self.text)))

        tokens.append(Token(TokenType.EOF, "", len(self.text), self.line, self.column))
        return tokens

    def _text_token(self, start: int, end: int) -> Token:
        value = self.text[start:end]
        token = Token(TokenType.TEXT, value, start, self.line, self.column)
        self._advance(value, end)
        return token

    def _tag_token(self, match: re.Match) -> Token:
        groups = match.groupdict()
        token_type, args = self._classify(groups)
        value = match.group(0)
        token = Token(token_type, value, match.start(), self.line, self.column, args)
        self._advance(value, match.end())
        return token

    @staticmethod
    def _classify(groups: dict) -> tuple[TokenType, tuple[str, ...]]:
        """Определяет тип тега по сработавшей группе регулярного выражения."""
        if groups["variable"] is not None:
            return TokenType.VARIABLE, (groups["variable"],)
        if groups["raw_kind"] is not None:
            kind = TokenType.HTML if groups["raw_kind"] == "html" else TokenType.JSON
            return kind, (groups["raw_path"],)
        if groups["condition"] is not None:
            return TokenType.IF, (groups["condition"],)
        if groups["collection"] is not None:
            return TokenType.EACH, (
                groups["collection"],
                groups["alias"] or "item",
                groups["index"] or "",
            )
        if groups["include"] is not None:
            return TokenType.INCLUDE, (_unquote(groups["include"]),)
        if groups["else"] is not None:
            return TokenType.ELSE, ()
        return TokenType.END, (groups["end"],)

    def _advance(self, consumed: str, new_position: int) -> None:
        """Сдвигает позицию, обновляя номера строк и колонок."""
        newlines = consumed.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(consumed) - consumed.rfind("\n")
        else:
            self.column += len(consumed)
        self._last = new_position


def _unquote(raw: str) -> str:
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in "\"'":
        return raw[1:-1]
    return raw


def tokenize_template(text: str) -> List[Token]:
    """
    Удобная функция для токенизации шаблона.

    Args:
        text: Исходный текст шаблона

    Returns:
        Список токенов, завершающийся EOF
    """
    return TemplateLexer(text).tokenize()


__all__ = ["TemplateLexer", "tokenize_template"]
