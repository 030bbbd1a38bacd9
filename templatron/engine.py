"""
Публичный API движка шаблонов.

Объединяет компилятор, рендерер, загрузчик и кэш в один фасад.
Компиляция — чистая функция текста, рендер — чистая функция
(AST, данные); всё состояние (кэш) принадлежит вызывающей стороне.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .cache import TemplateCache
from .config import EngineConfig
from .errors import TemplatronError
from .loader import FileSystemLoader, TemplateLoader
from .render.renderer import Renderer
from .template.nodes import TemplateAST
from .template.parser import compile_template

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledTemplate:
    """Скомпилированный шаблон: неизменяемое AST и имя для диагностики."""
    nodes: TemplateAST
    name: str = ""

    def __len__(self) -> int:
        return len(self.nodes)


TemplateLike = Union[CompiledTemplate, TemplateAST]


class Templatron:
    """
    Движок шаблонов.

    Пример:
        engine = Templatron(FileSystemLoader("views"), cache=TemplateCache())
        html = engine.render_template("index.html", {"user": {"name": "Ann"}})
    """

    def __init__(
        self,
        loader: Optional[TemplateLoader] = None,
        *,
        cache: Optional[TemplateCache] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.config = config or EngineConfig()
        self.loader = loader
        self.cache = cache
        self.renderer = Renderer(
            loader,
            cache,
            max_include_depth=self.config.max_include_depth,
            trim_blank_runs=self.config.trim_blank_runs,
        )

    @classmethod
    def from_config(cls, config: EngineConfig, *, cache: Optional[TemplateCache] = None) -> "Templatron":
        """Создаёт движок с файловым загрузчиком из конфигурации."""
        loader = FileSystemLoader(config.templates_dir, default_suffix=config.default_suffix)
        return cls(loader, cache=cache, config=config)

    # ======= Компиляция =======

    def compile(self, text: str, name: str = "") -> CompiledTemplate:
        """
        Компилирует текст шаблона.

        Raises:
            TemplateSyntaxError: При непарных или неуместных блоках
        """
        return CompiledTemplate(nodes=self._compile_nodes(text, name), name=name)

    def get_template(self, name: str) -> CompiledTemplate:
        """
        Загружает и компилирует шаблон по имени (через кэш, если он задан).

        Raises:
            TemplatronError: Нет загрузчика или загрузчик асинхронный
            TemplateNotFoundError: Шаблон не найден
            TemplateSyntaxError: Ошибка структуры шаблона
        """
        source = self._require_loader(name).load(name)
        if inspect.isawaitable(source):
            if inspect.iscoroutine(source):
                source.close()
            raise TemplatronError(f"Loader returned an awaitable for '{name}'; use get_template_async")
        return self._compile_cached(name, source)

    async def get_template_async(self, name: str) -> CompiledTemplate:
        source = self._require_loader(name).load(name)
        if inspect.isawaitable(source):
            source = await source
        return self._compile_cached(name, source)

    # ======= Рендер =======

    def render(self, template: TemplateLike, data: Optional[Mapping[str, Any]] = None) -> str:
        """Рендерит скомпилированный шаблон против контекста данных."""
        nodes, name = _unpack(template)
        return self.renderer.render(nodes, data or {}, template_name=name)

    async def render_async(self, template: TemplateLike, data: Optional[Mapping[str, Any]] = None) -> str:
        """Рендерит шаблон, поддерживая асинхронный загрузчик для {#include}."""
        nodes, name = _unpack(template)
        return await self.renderer.render_async(nodes, data or {}, template_name=name)

    def render_string(self, text: str, data: Optional[Mapping[str, Any]] = None, name: str = "") -> str:
        """Компилирует и рендерит шаблон из строки."""
        return self.render(self.compile(text, name), data)

    def render_template(self, name: str, data: Optional[Mapping[str, Any]] = None) -> str:
        """Загружает, компилирует и рендерит шаблон по имени."""
        return self.render(self.get_template(name), data)

    async def render_template_async(self, name: str, data: Optional[Mapping[str, Any]] = None) -> str:
        template = await self.get_template_async(name)
        return await self.render_async(template, data)

    # ======= Внутренние методы =======

    def _compile_nodes(self, text: str, name: str) -> TemplateAST:
        return compile_template(text, template_name=name, trim_blank_runs=self.config.trim_blank_runs)

    def _compile_cached(self, name: str, source: str) -> CompiledTemplate:
        if self.cache is None:
            return self.compile(source, name)
        nodes = self.cache.get_or_compile(name, source, lambda text: self._compile_nodes(text, name))
        return CompiledTemplate(nodes=nodes, name=name)

    def _require_loader(self, name: str) -> TemplateLoader:
        if self.loader is None:
            raise TemplatronError(f"No template loader configured to load '{name}'")
        return self.loader


def _unpack(template: TemplateLike) -> tuple[TemplateAST, str]:
    if isinstance(template, CompiledTemplate):
        return template.nodes, template.name
    return tuple(template), ""


# --------------------------------------------------------------------------- #
# Функциональный API
# --------------------------------------------------------------------------- #
_default_engine = Templatron()


def compile(text: str) -> CompiledTemplate:  # noqa: A001
    """Компилирует шаблон с настройками по умолчанию."""
    return _default_engine.compile(text)


def render(template: TemplateLike, data: Optional[Mapping[str, Any]] = None) -> str:
    """Рендерит шаблон без загрузчика (включения превращаются в маркер ошибки)."""
    return _default_engine.render(template, data)


__all__ = ["Templatron", "CompiledTemplate", "compile", "render"]
