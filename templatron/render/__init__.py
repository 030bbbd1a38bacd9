"""
Рендеринг скомпилированных шаблонов: обход AST, экранирование, включения.
"""

from __future__ import annotations

from .escaping import escape_html_js, stringify, to_json
from .renderer import DEFAULT_MAX_INCLUDE_DEPTH, Renderer

__all__ = [
    "Renderer",
    "DEFAULT_MAX_INCLUDE_DEPTH",
    "escape_html_js",
    "stringify",
    "to_json",
]
