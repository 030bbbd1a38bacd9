"""
Загрузчики исходного текста шаблонов.

Загрузчик — внешний по отношению к ядру компонент: ядро лишь вызывает
`load(name)` при обработке {#include} и для шаблонов верхнего уровня.
Метод может вернуть строку или awaitable со строкой (для render_async).
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, Dict, Mapping, Protocol, Union

from .errors import TemplateLoadError, TemplateNotFoundError

logger = logging.getLogger(__name__)

LoadResult = Union[str, Awaitable[str]]


class TemplateLoader(Protocol):
    """Протокол загрузчика шаблонов."""

    def load(self, name: str) -> LoadResult:
        """
        Возвращает исходный текст шаблона.

        Raises:
            TemplateNotFoundError: Если шаблон не найден
        """
        ...


class FileSystemLoader:
    """
    Загружает шаблоны из каталога на диске.

    Имена разрешаются относительно корня; выход за пределы корня
    (`../secret`, абсолютные пути) запрещён и трактуется как отсутствие шаблона.
    """

    def __init__(self, root: Path | str, *, default_suffix: str = "", encoding: str = "utf-8"):
        self.root = Path(root).resolve()
        self.default_suffix = default_suffix
        self.encoding = encoding

    def resolve(self, name: str) -> Path:
        """
        Находит файл шаблона по имени.

        Если файла нет и задан default_suffix, пробует имя с суффиксом.
        """
        for candidate in self._candidates(name):
            path = (self.root / candidate).resolve()
            if not path.is_relative_to(self.root):
                logger.warning(f"Template path escapes templates root: {name}")
                break
            if path.is_file():
                return path
        raise TemplateNotFoundError(name, str(self.root))

    def load(self, name: str) -> str:
        """
        Raises:
            TemplateNotFoundError: Файла нет или путь выходит за корень
            TemplateLoadError: Файл не читается или не в кодировке encoding
        """
        path = self.resolve(name)
        logger.debug(f"Loading template '{name}' from {path}")
        try:
            return path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateLoadError(name, str(e)) from e

    def _candidates(self, name: str) -> list[str]:
        name = name.lstrip("/")
        if self.default_suffix and not name.endswith(self.default_suffix):
            return [name, name + self.default_suffix]
        return [name]


class AsyncFileSystemLoader(FileSystemLoader):
    """
    Файловый загрузчик для render_async.

    Чтение файла выполняется в пуле потоков и не блокирует цикл событий.
    """

    async def load(self, name: str) -> str:  # type: ignore[override]
        return await asyncio.to_thread(super().load, name)


class DictLoader:
    """Загружает шаблоны из словаря имя → текст (тесты, встроенные шаблоны)."""

    def __init__(self, templates: Mapping[str, str]):
        self.templates: Dict[str, str] = dict(templates)

    def load(self, name: str) -> str:
        try:
            return self.templates[name]
        except KeyError:
            raise TemplateNotFoundError(name) from None


class FunctionLoader:
    """
    Адаптер для произвольной функции загрузки.

    Функция может быть как обычной, так и корутинной; во втором случае
    шаблоны с {#include} нужно рендерить через render_async.
    """

    def __init__(self, func: Callable[[str], LoadResult]):
        self.func = func

    def load(self, name: str) -> LoadResult:
        return self.func(name)


__all__ = [
    "TemplateLoader",
    "FileSystemLoader",
    "AsyncFileSystemLoader",
    "DictLoader",
    "FunctionLoader",
    "LoadResult",
]
