"""
Templatron — серверный шаблонизатор.

Синтаксис тегов:
    { path }                         переменная (экранируется)
    {@json path} / {@html path}      JSON / сырой HTML
    {#if cond}...{:else}...{/if}     условие (`path` или `!path`)
    {#each list as item, i}...{/each} итерация
    {#include "path"}                включение шаблона
"""

from __future__ import annotations

from .cache import TemplateCache
from .config import EngineConfig, load_config
from .engine import CompiledTemplate, Templatron, compile, render
from .errors import (
    ConfigError,
    IncludeError,
    TemplateLoadError,
    TemplateNotFoundError,
    TemplateSyntaxError,
    TemplatronError,
)
from .layout import render_with_layouts, render_with_layouts_async
from .loader import AsyncFileSystemLoader, DictLoader, FileSystemLoader, FunctionLoader, TemplateLoader
from .render import Renderer, escape_html_js
from .version import tool_version

__version__ = tool_version()

__all__ = [
    "Templatron",
    "CompiledTemplate",
    "compile",
    "render",
    "Renderer",
    "escape_html_js",
    "TemplateCache",
    "TemplateLoader",
    "FileSystemLoader",
    "AsyncFileSystemLoader",
    "DictLoader",
    "FunctionLoader",
    "EngineConfig",
    "load_config",
    "render_with_layouts",
    "render_with_layouts_async",
    "TemplatronError",
    "TemplateSyntaxError",
    "TemplateNotFoundError",
    "TemplateLoadError",
    "IncludeError",
    "ConfigError",
]
