"""
Кэш скомпилированных шаблонов.

Кэш принадлежит вызывающей стороне: движок не хранит глобального состояния.
Записи идентифицируются именем шаблона и перепроверяются по хешу исходного
текста, так что изменённый на диске шаблон перекомпилируется автоматически.
"""

from __future__ import annotations

import hashlib
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .template.nodes import TemplateAST

logger = logging.getLogger(__name__)


def _sha1_text(text: str) -> str:
    """Простой хеш от текста для проверки актуальности записи."""
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class CacheEntry:
    source_hash: str
    ast: TemplateAST


class TemplateCache:
    """
    Потокобезопасный кэш AST по имени шаблона.

    Явная инвалидация — invalidate(name) и clear().
    """

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, name: str, source: str) -> Optional[TemplateAST]:
        """Возвращает AST, если запись есть и исходный текст не менялся."""
        source_hash = _sha1_text(source)
        with self._lock:
            return self._lookup(name, source_hash)

    def put(self, name: str, source: str, ast: TemplateAST) -> None:
        with self._lock:
            self._entries[name] = CacheEntry(source_hash=_sha1_text(source), ast=ast)

    def get_or_compile(self, name: str, source: str, compile_func: Callable[[str], TemplateAST]) -> TemplateAST:
        """
        Возвращает AST из кэша или компилирует и сохраняет его.

        Ошибки компиляции не кэшируются.
        """
        source_hash = _sha1_text(source)
        with self._lock:
            cached = self._lookup(name, source_hash)
            if cached is not None:
                self.hits += 1
                return cached
            self.misses += 1

        # Компиляция вне блокировки: конкурентные промахи по одному имени
        # компилируют дважды, последний put побеждает.
        ast = compile_func(source)
        with self._lock:
            self._entries[name] = CacheEntry(source_hash=source_hash, ast=ast)
        logger.debug(f"Cached compiled template '{name}'")
        return ast

    def invalidate(self, name: str) -> bool:
        """Удаляет запись; возвращает True, если она была."""
        with self._lock:
            return self._entries.pop(name, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _lookup(self, name: str, source_hash: str) -> Optional[TemplateAST]:
        entry = self._entries.get(name)
        if entry is None or entry.source_hash != source_hash:
            return None
        return entry.ast

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["TemplateCache", "CacheEntry"]
