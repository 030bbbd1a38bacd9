"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from TemplatronError.

Programming errors and bugs should NOT inherit from TemplatronError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional


class TemplatronError(Exception):
    """
    Базовый класс для всех пользовательских ошибок Templatron.

    Сигнализирует о проблемах, которые пользователь может исправить сам:
    битая разметка шаблона, отсутствующие файлы, неверная конфигурация.
    """
    pass


class TemplateSyntaxError(TemplatronError):
    """Структурная ошибка шаблона (непарные блоки, неуместный {:else})."""

    def __init__(self, message: str, line: int = 0, column: int = 0, template_name: str = ""):
        location = f" at {line}:{column}" if line else ""
        where = f" in '{template_name}'" if template_name else ""
        super().__init__(f"{message}{location}{where}")
        self.message = message
        self.line = line
        self.column = column
        self.template_name = template_name


class TemplateNotFoundError(TemplatronError):
    """Шаблон не найден загрузчиком."""

    def __init__(self, name: str, searched: Optional[str] = None):
        suffix = f" (searched in {searched})" if searched else ""
        super().__init__(f"Template not found: {name}{suffix}")
        self.name = name


class TemplateLoadError(TemplatronError):
    """Шаблон найден, но не читается (нет прав, не UTF-8 и т.п.)."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Cannot load template {name}: {reason}")
        self.name = name


class IncludeError(TemplatronError):
    """Ошибка включения шаблона: превышена глубина или обнаружен цикл."""

    def __init__(self, message: str, chain: tuple[str, ...] = ()):
        if chain:
            message = f"{message} (include chain: {' -> '.join(chain)})"
        super().__init__(message)
        self.chain = chain


class ConfigError(TemplatronError):
    """Ошибка загрузки или валидации конфигурации."""
    pass


__all__ = [
    "TemplatronError",
    "TemplateSyntaxError",
    "TemplateNotFoundError",
    "TemplateLoadError",
    "IncludeError",
    "ConfigError",
]
