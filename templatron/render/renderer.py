"""
Рендерер скомпилированных шаблонов.

Рекурсивно обходит AST в исходном порядке узлов. Ошибки разрешения
(отсутствующие значения, не-список в {#each}, неудачный {#include})
восстанавливаются локально и логируются: рендер всегда возвращает строку.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Iterator, Mapping, Optional, Sequence, Tuple

from .escaping import escape_html_js, stringify, to_json
from ..cache import TemplateCache
from ..conditions.evaluator import ConditionEvaluator
from ..context import MISSING, derive_context, is_iterable_collection, resolve_path
from ..errors import IncludeError
from ..loader import TemplateLoader
from ..template.nodes import (
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
from ..template.parser import compile_template

logger = logging.getLogger(__name__)

DEFAULT_MAX_INCLUDE_DEPTH = 16

IncludeChain = Tuple[str, ...]


class Renderer:
    """
    Вычислитель AST шаблона против контекста данных.

    Экземпляр не хранит состояния между вызовами: один и тот же Renderer
    и одно и то же AST можно использовать из нескольких рендеров одновременно.
    """

    def __init__(
        self,
        loader: Optional[TemplateLoader] = None,
        cache: Optional[TemplateCache] = None,
        *,
        max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH,
        trim_blank_runs: bool = True,
    ):
        """
        Args:
            loader: Загрузчик для {#include}; без него включения рендерятся как маркер ошибки
            cache: Кэш AST включаемых шаблонов (принадлежит вызывающей стороне)
            max_include_depth: Предельная глубина вложенности {#include}
            trim_blank_runs: Правило пробелов для компиляции включаемых шаблонов
        """
        self.loader = loader
        self.cache = cache
        self.max_include_depth = max_include_depth
        self.trim_blank_runs = trim_blank_runs

    # ======= Публичный API =======

    def render(self, ast: TemplateAST, data: Mapping[str, Any], *, template_name: str = "") -> str:
        """
        Рендерит AST синхронно.

        Загрузчик (если используется {#include}) должен возвращать строки.
        """
        return self._render_nodes(ast, data, self._initial_chain(template_name))

    async def render_async(self, ast: TemplateAST, data: Mapping[str, Any], *, template_name: str = "") -> str:
        """
        Рендерит AST, дожидаясь асинхронного загрузчика при обработке {#include}.
        """
        return await self._render_nodes_async(ast, data, self._initial_chain(template_name))

    # ======= Обход дерева =======

    def _render_nodes(self, nodes: Sequence[TemplateNode], context: Mapping[str, Any], chain: IncludeChain) -> str:
        parts = []
        for node in nodes:
            if isinstance(node, IfNode):
                branch = self._select_branch(node, context)
                if branch:
                    parts.append(self._render_nodes(branch, context, chain))
            elif isinstance(node, EachNode):
                for item_context in self._iterate(node, context):
                    parts.append(self._render_nodes(node.children, item_context, chain))
            elif isinstance(node, IncludeNode):
                parts.append(self._render_include(node, context, chain))
            else:
                parts.append(self._render_leaf(node, context))
        return "".join(parts)

    async def _render_nodes_async(
        self, nodes: Sequence[TemplateNode], context: Mapping[str, Any], chain: IncludeChain
    ) -> str:
        parts = []
        for node in nodes:
            if isinstance(node, IfNode):
                branch = self._select_branch(node, context)
                if branch:
                    parts.append(await self._render_nodes_async(branch, context, chain))
            elif isinstance(node, EachNode):
                for item_context in self._iterate(node, context):
                    parts.append(await self._render_nodes_async(node.children, item_context, chain))
            elif isinstance(node, IncludeNode):
                parts.append(await self._render_include_async(node, context, chain))
            else:
                parts.append(self._render_leaf(node, context))
        return "".join(parts)

    # ======= Узлы =======

    def _render_leaf(self, node: TemplateNode, context: Mapping[str, Any]) -> str:
        """Текст и переменные: узлы без детей."""
        if isinstance(node, TextNode):
            return node.value
        if isinstance(node, VariableNode):
            value = resolve_path(context, node.value)
            return "" if value is MISSING else escape_html_js(stringify(value))
        if isinstance(node, JsonNode):
            return self._render_json(node, context)
        if isinstance(node, HtmlNode):
            value = resolve_path(context, node.value)
            return "" if value is MISSING else stringify(value)

        logger.warning(f"No renderer for node type: {type(node).__name__}")
        return ""

    @staticmethod
    def _render_json(node: JsonNode, context: Mapping[str, Any]) -> str:
        value = resolve_path(context, node.value)
        if value is MISSING:
            return "null"
        try:
            return to_json(value)
        except (TypeError, ValueError) as e:
            logger.warning(f"Cannot serialize '{node.value}' to JSON, rendering null: {e}")
            return "null"

    @staticmethod
    def _select_branch(node: IfNode, context: Mapping[str, Any]) -> Optional[TemplateAST]:
        """Возвращает ветку для рендера или None."""
        if ConditionEvaluator(context).evaluate(node.test):
            return node.children
        return node.else_children

    @staticmethod
    def _iterate(node: EachNode, context: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
        """Порождает производный контекст для каждого элемента коллекции."""
        collection = resolve_path(context, node.collection)
        if collection is MISSING:
            logger.warning(f"{{#each}} collection '{node.collection}' is not defined; block skipped")
            return
        if not is_iterable_collection(collection):
            logger.warning(
                f"{{#each}} collection '{node.collection}' is not a list "
                f"(got {type(collection).__name__}); block skipped"
            )
            return

        for index, item in enumerate(collection):
            bindings = {node.item_alias: item}
            if node.index_alias:
                bindings[node.index_alias] = index
            yield derive_context(context, bindings)

    # ======= Включения =======

    def _render_include(self, node: IncludeNode, context: Mapping[str, Any], chain: IncludeChain) -> str:
        try:
            nested_chain = self._enter_include(node.value, chain)
            source = self.loader.load(node.value)
            if inspect.isawaitable(source):
                if inspect.iscoroutine(source):
                    source.close()
                raise IncludeError(f"Loader returned an awaitable for '{node.value}'; use render_async")
            ast = self._compile_include(node.value, source)
            return self._render_nodes(ast, context, nested_chain)
        except Exception as e:
            return self._include_failed(node.value, e)

    async def _render_include_async(self, node: IncludeNode, context: Mapping[str, Any], chain: IncludeChain) -> str:
        try:
            nested_chain = self._enter_include(node.value, chain)
            source = self.loader.load(node.value)
            if inspect.isawaitable(source):
                source = await source
            ast = self._compile_include(node.value, source)
            return await self._render_nodes_async(ast, context, nested_chain)
        except Exception as e:
            return self._include_failed(node.value, e)

    def _enter_include(self, name: str, chain: IncludeChain) -> IncludeChain:
        """
        Проверяет ограничения включения и возвращает новую цепочку.

        Raises:
            IncludeError: Нет загрузчика, цикл включений или превышена глубина
        """
        if self.loader is None:
            raise IncludeError(f"No template loader configured to include '{name}'")
        nested_chain = chain + (name,)
        if name in chain:
            raise IncludeError(f"Include cycle detected for '{name}'", nested_chain)
        if len(chain) > self.max_include_depth:
            raise IncludeError(f"Maximum include depth {self.max_include_depth} exceeded", nested_chain)
        return nested_chain

    def _compile_include(self, name: str, source: str) -> TemplateAST:
        def compile_func(text: str) -> TemplateAST:
            return compile_template(text, template_name=name, trim_blank_runs=self.trim_blank_runs)

        if self.cache is not None:
            return self.cache.get_or_compile(name, source, compile_func)
        return compile_func(source)

    @staticmethod
    def _include_failed(name: str, error: Exception) -> str:
        logger.error(f"Error loading component {name}: {error}")
        safe_name = name.replace("--", "")
        return f"<!-- Error loading component: {safe_name} -->"

    @staticmethod
    def _initial_chain(template_name: str) -> IncludeChain:
        return (template_name or "<string>",)


__all__ = ["Renderer", "DEFAULT_MAX_INCLUDE_DEPTH"]
