"""
Фабрики движка для тестов.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from templatron import DictLoader, Templatron


def make_engine(templates: Dict[str, str], **kwargs: Any) -> Templatron:
    """Движок с загрузчиком шаблонов в памяти."""
    return Templatron(DictLoader(templates), **kwargs)


def warnings_from(caplog, logger_prefix: str = "templatron") -> list[str]:
    """Сообщения уровня WARNING и выше от логгеров templatron."""
    return [
        r.getMessage() for r in caplog.records
        if r.name.startswith(logger_prefix) and r.levelno >= logging.WARNING
    ]
