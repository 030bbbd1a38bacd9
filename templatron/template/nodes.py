"""
AST-узлы шаблона.

Неизменяемая иерархия узлов: дочерние последовательности хранятся в кортежах,
поэтому скомпилированное дерево можно кэшировать и переиспользовать
между рендерами с разными контекстами данных.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..conditions.model import Condition


@dataclass(frozen=True)
class TemplateNode:
    """Базовый класс для всех узлов AST шаблона."""
    pass


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """
    Обычный текстовый контент в шаблоне.

    Выводится в результат как есть.
    """
    value: str


@dataclass(frozen=True)
class VariableNode(TemplateNode):
    """Переменная { path }: значение экранируется для HTML/JS."""
    value: str


@dataclass(frozen=True)
class JsonNode(TemplateNode):
    """Переменная {@json path}: значение сериализуется в JSON."""
    value: str


@dataclass(frozen=True)
class HtmlNode(TemplateNode):
    """
    Переменная {@html path}: значение выводится БЕЗ экранирования.

    Автор шаблона отвечает за то, чтобы источник значения был доверенным
    или уже санитизированным.
    """
    value: str


@dataclass(frozen=True)
class IfNode(TemplateNode):
    """
    Условный блок {#if condition} ... {:else} ... {/if}.

    Attributes:
        condition: Исходный текст условия
        test: Разобранное условие
        children: Ветка then
        else_children: Ветка else или None, если {:else} не было
    """
    condition: str
    test: Condition
    children: Tuple[TemplateNode, ...] = ()
    else_children: Optional[Tuple[TemplateNode, ...]] = None


@dataclass(frozen=True)
class EachNode(TemplateNode):
    """
    Блок итерации {#each collection as item_alias, index_alias} ... {/each}.

    Attributes:
        collection: Путь к списку в контексте данных
        item_alias: Имя, под которым доступен текущий элемент
        index_alias: Имя для индекса элемента (пустая строка — не привязывается)
        children: Тело цикла
    """
    collection: str
    item_alias: str = "item"
    index_alias: str = ""
    children: Tuple[TemplateNode, ...] = ()


@dataclass(frozen=True)
class IncludeNode(TemplateNode):
    """Включение другого шаблона {#include "path"}; резолвится во время рендера."""
    value: str


# Алиас для последовательности узлов (AST)
TemplateAST = Tuple[TemplateNode, ...]


__all__ = [
    "TemplateNode",
    "TextNode",
    "VariableNode",
    "JsonNode",
    "HtmlNode",
    "IfNode",
    "EachNode",
    "IncludeNode",
    "TemplateAST",
]
