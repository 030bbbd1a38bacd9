"""
Компилятор шаблонов Templatron.

Лексер → парсер → неизменяемое AST.
"""

from __future__ import annotations

from .lexer import TemplateLexer, tokenize_template
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
from .parser import TemplateParser, compile_template
from .tokens import Token, TokenType

__all__ = [
    "TemplateLexer",
    "tokenize_template",
    "TemplateParser",
    "compile_template",
    "Token",
    "TokenType",
    "TemplateNode",
    "TemplateAST",
    "TextNode",
    "VariableNode",
    "JsonNode",
    "HtmlNode",
    "IfNode",
    "EachNode",
    "IncludeNode",
]
