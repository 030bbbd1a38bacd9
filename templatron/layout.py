"""
Композиция вида с лэйаутами.

Вид рендерится первым; результат передаётся в каждый лэйаут (от ближайшего
к внешнему) под зарезервированным ключом `children`. В лэйауте он
вставляется как `{@html children}` — он уже отрендерен и экранирован.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Sequence

from .context import derive_context
from .engine import Templatron

logger = logging.getLogger(__name__)

CHILDREN_KEY = "children"

ComputeFunc = Callable[[Mapping[str, Any]], Optional[Mapping[str, Any]]]


def build_context(data: Optional[Mapping[str, Any]], compute: Optional[ComputeFunc] = None) -> Mapping[str, Any]:
    """
    Собирает контекст рендера.

    Пользовательская функция compute получает весь контекст одним
    отображением и возвращает дополнительные локальные значения,
    которые перекрывают исходные ключи.
    """
    context: Mapping[str, Any] = dict(data or {})
    if compute is None:
        return context
    extra = compute(context)
    if extra:
        context = derive_context(context, extra)
    return context


def render_with_layouts(
    engine: Templatron,
    view: str,
    data: Optional[Mapping[str, Any]] = None,
    layouts: Sequence[str] = (),
    *,
    compute: Optional[ComputeFunc] = None,
) -> str:
    """
    Рендерит вид и оборачивает его в лэйауты.

    Args:
        engine: Движок с настроенным загрузчиком
        view: Имя шаблона вида
        data: Контекст данных
        layouts: Имена лэйаутов от ближайшего к виду до самого внешнего
        compute: Функция вычисления дополнительных локальных значений
    """
    context = build_context(data, compute)
    children = engine.render_template(view, context)
    for layout in layouts:
        logger.debug(f"Wrapping '{view}' with layout '{layout}'")
        children = engine.render_template(layout, derive_context(context, {CHILDREN_KEY: children}))
    return children


async def render_with_layouts_async(
    engine: Templatron,
    view: str,
    data: Optional[Mapping[str, Any]] = None,
    layouts: Sequence[str] = (),
    *,
    compute: Optional[ComputeFunc] = None,
) -> str:
    """Асинхронный вариант render_with_layouts."""
    context = build_context(data, compute)
    children = await engine.render_template_async(view, context)
    for layout in layouts:
        children = await engine.render_template_async(layout, derive_context(context, {CHILDREN_KEY: children}))
    return children


__all__ = ["render_with_layouts", "render_with_layouts_async", "build_context", "CHILDREN_KEY"]
