"""
Экранирование и преобразование значений в текст.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

# Порядок важен: амперсанд первым, иначе сущности,
# добавленные последующими заменами, будут экранированы повторно.
_HTML_JS_REPLACEMENTS = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
    ("/", "&#x2F;"),  # не даёт закрыть </script> изнутри значения
    ("`", "&#96;"),   # не даёт закрыть шаблонную строку JS
)

# Символы, которые внутри JSON заменяются на \u-последовательности,
# чтобы результат можно было вставить в <script> и остаться валидным JSON.
_JSON_SCRIPT_SAFE = (
    ("&", "\\u0026"),
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("'", "\\u0027"),
)


def escape_html_js(text: str) -> str:
    """
    Экранирует строку для вставки в HTML и inline-JS.

    Помимо стандартных HTML-символов экранирует `/` и обратную кавычку.
    """
    for char, entity in _HTML_JS_REPLACEMENTS:
        text = text.replace(char, entity)
    return text


def stringify(value: Any) -> str:
    """
    Преобразует значение контекста в выводимый текст.

    None → пустая строка, булевы → true/false, целые float без `.0`,
    списки → элементы через запятую, словари → компактный JSON.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    if isinstance(value, Mapping):
        return json.dumps(dict(value), ensure_ascii=False, separators=(",", ":"), default=str)
    return str(value)


def to_json(value: Any) -> str:
    """
    Сериализует значение в компактный JSON, безопасный для <script>.

    Raises:
        TypeError, ValueError: Если значение не сериализуется в JSON
    """
    if isinstance(value, Mapping) and not isinstance(value, dict):
        value = dict(value)
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    for char, escape in _JSON_SCRIPT_SAFE:
        text = text.replace(char, escape)
    return text


__all__ = ["escape_html_js", "stringify", "to_json"]
