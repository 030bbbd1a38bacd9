from pathlib import Path

import pytest

from templatron import FileSystemLoader, TemplateCache, Templatron
from tests.infrastructure import write_templates


@pytest.fixture
def engine() -> Templatron:
    """Движок без загрузчика: только render_string / compile."""
    return Templatron()


@pytest.fixture
def tpl_root(tmp_path: Path) -> Path:
    """Минимальный каталог шаблонов: вид, частичный шаблон и лэйаут."""
    return write_templates(tmp_path / "views", {
        "index.html": "<h1>{ title }</h1>\n{#include \"partials/list.html\"}",
        "partials/list.html": "<ul>{#each items as it}<li>{ it }</li>{/each}</ul>\n",
        "layouts/main.html": "<html><body>{@html children}</body></html>",
    })


@pytest.fixture
def fs_engine(tpl_root: Path) -> Templatron:
    return Templatron(FileSystemLoader(tpl_root), cache=TemplateCache())
