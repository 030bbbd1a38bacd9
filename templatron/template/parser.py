"""
Парсер шаблонов для движка шаблонизации.

Строит AST из последовательности токенов с помощью явного стека открытых
блоков. Непарные и неуместные структурные теги — фатальная ошибка
компиляции: содержимое никогда не отбрасывается молча.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .lexer import tokenize_template
from .nodes import (
    EachNode,
    HtmlNode,
    IfNode,
    IncludeNode,
    JsonNode,
    TemplateAST,
    TemplateNode,
    TextNode,
    VariableNode,
)
from .tokens import Token, TokenType
from ..conditions.parser import ConditionParser
from ..errors import TemplateSyntaxError

logger = logging.getLogger(__name__)


@dataclass
class _OpenBlock:
    """
    Открытый, но ещё не закрытый блок {#if} или {#each}.

    Узлы AST неизменяемы, поэтому дети копятся здесь и замораживаются
    в кортежи при закрытии блока.
    """
    token: Token
    kind: str
    children: List[TemplateNode] = field(default_factory=list)
    else_children: Optional[List[TemplateNode]] = None

    @property
    def target(self) -> List[TemplateNode]:
        """Последовательность, в которую сейчас добавляются узлы."""
        return self.else_children if self.else_children is not None else self.children

    def close(self, condition_parser: ConditionParser) -> TemplateNode:
        args = self.token.args
        if self.kind == "if":
            return IfNode(
                condition=args[0],
                test=condition_parser.parse_lenient(args[0]),
                children=tuple(self.children),
                else_children=tuple(self.else_children) if self.else_children is not None else None,
            )
        collection, item_alias, index_alias = args
        return EachNode(
            collection=collection,
            item_alias=item_alias,
            index_alias=index_alias,
            children=tuple(self.children),
        )


class TemplateParser:
    """
    Парсер для шаблонов.

    Обрабатывает последовательность токенов и строит AST, корректно
    обрабатывая вложенные и висячие конструкции.

    Пробельные фрагменты без перевода строки, зажатые между двумя
    структурными тегами ({#if}, {#each}, {:else}, {/...}, {#include}),
    отбрасываются (если включён trim_blank_runs). Текст до первого тега,
    после последнего тега и рядом с тегами значений сохраняется точно.
    """

    def __init__(self, tokens: List[Token], *, trim_blank_runs: bool = True, template_name: str = ""):
        self.tokens = tokens
        self.trim_blank_runs = trim_blank_runs
        self.template_name = template_name
        self.condition_parser = ConditionParser()

    def parse(self) -> TemplateAST:
        """
        Парсит всю последовательность токенов в AST.

        Raises:
            TemplateSyntaxError: При непарных или неуместных структурных тегах
        """
        root: List[TemplateNode] = []
        stack: List[_OpenBlock] = []

        for index, token in enumerate(self.tokens):
            target = stack[-1].target if stack else root

            if token.type == TokenType.EOF:
                break
            elif token.type == TokenType.TEXT:
                if not self._is_blank_run(index):
                    target.append(TextNode(value=token.value))
            elif token.type == TokenType.VARIABLE:
                target.append(VariableNode(value=token.args[0]))
            elif token.type == TokenType.JSON:
                target.append(JsonNode(value=token.args[0]))
            elif token.type == TokenType.HTML:
                target.append(HtmlNode(value=token.args[0]))
            elif token.type == TokenType.INCLUDE:
                target.append(IncludeNode(value=token.args[0]))
            elif token.type == TokenType.IF:
                stack.append(_OpenBlock(token=token, kind="if"))
            elif token.type == TokenType.EACH:
                stack.append(_OpenBlock(token=token, kind="each"))
            elif token.type == TokenType.ELSE:
                self._open_else(stack, token)
            elif token.type == TokenType.END:
                closed = self._close_block(stack, token)
                (stack[-1].target if stack else root).append(closed)

        if stack:
            kinds = ", ".join(block.kind for block in stack)
            raise self._error(f"Unclosed blocks remaining: {kinds}", stack[0].token)

        logger.debug(f"Compiled template '{self.template_name}' -> {len(root)} root nodes")
        return tuple(root)

    def _open_else(self, stack: List[_OpenBlock], token: Token) -> None:
        """Переключает ближайший открытый {#if} на ветку else."""
        if not stack or stack[-1].kind != "if":
            raise self._error("'{:else}' found without a preceding '{#if}' block", token)
        block = stack[-1]
        if block.else_children is not None:
            raise self._error(
                f"Duplicate '{{:else}}' in '{block.token.value}' block "
                f"(opened at {block.token.line}:{block.token.column})",
                token,
            )
        block.else_children = []

    def _close_block(self, stack: List[_OpenBlock], token: Token) -> TemplateNode:
        """Закрывает верхний блок стека, проверяя соответствие типа."""
        kind = token.args[0]
        if not stack:
            raise self._error(f"'{{/{kind}}}' found without a matching '{{#{kind}}}' block", token)
        block = stack[-1]
        if block.kind != kind:
            raise self._error(
                f"'{{/{kind}}}' does not match the open '{{#{block.kind}}}' block "
                f"(opened at {block.token.line}:{block.token.column})",
                token,
            )
        stack.pop()
        return block.close(self.condition_parser)

    def _is_blank_run(self, index: int) -> bool:
        """Проверяет, что текстовый токен — отступ между двумя структурными тегами."""
        if not self.trim_blank_runs:
            return False
        value = self.tokens[index].value
        if value.strip() or "\n" in value:
            return False
        if index == 0:
            return False
        return self.tokens[index - 1].is_structural and self.tokens[index + 1].is_structural

    def _error(self, message: str, token: Token) -> TemplateSyntaxError:
        return TemplateSyntaxError(message, token.line, token.column, self.template_name)


def compile_template(text: str, *, template_name: str = "", trim_blank_runs: bool = True) -> TemplateAST:
    """
    Компилирует текст шаблона в неизменяемый AST.

    Args:
        text: Исходный текст шаблона
        template_name: Имя шаблона для диагностики
        trim_blank_runs: Отбрасывать ли пробельные отступы между структурными тегами

    Raises:
        TemplateSyntaxError: При ошибке структуры шаблона
    """
    tokens = tokenize_template(text)
    parser = TemplateParser(tokens, trim_blank_runs=trim_blank_runs, template_name=template_name)
    return parser.parse()


__all__ = ["TemplateParser", "compile_template"]
