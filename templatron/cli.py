from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from .cache import TemplateCache
from .config import DEFAULT_CFG_FILE, EngineConfig, load_config, read_yaml_map
from .engine import Templatron
from .errors import TemplatronError
from .layout import render_with_layouts
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="templatron",
        description="Templatron: компиляция и рендер шаблонов",
        add_help=True,
    )
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Общие аргументы для render/check
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--config",
            type=Path,
            default=Path(DEFAULT_CFG_FILE),
            help=f"файл конфигурации (по умолчанию {DEFAULT_CFG_FILE})",
        )
        sp.add_argument(
            "--templates-dir",
            type=Path,
            help="каталог шаблонов (перекрывает templates_dir из конфигурации)",
        )
        sp.add_argument(
            "-v", "--verbose",
            action="count",
            default=0,
            help="подробный лог (-v — INFO, -vv — DEBUG)",
        )

    sp_render = sub.add_parser("render", help="Отрендерить шаблон в stdout")
    add_common(sp_render)
    sp_render.add_argument("template", help="имя шаблона относительно каталога шаблонов")
    sp_render.add_argument(
        "--data",
        type=Path,
        metavar="FILE",
        help="контекст данных: YAML или JSON с отображением на верхнем уровне",
    )
    sp_render.add_argument(
        "--layout",
        action="append",
        default=[],
        metavar="NAME",
        help="лэйаут-обёртка (можно указать несколько, от ближайшего к внешнему)",
    )

    sp_check = sub.add_parser("check", help="Проверить синтаксис шаблонов")
    add_common(sp_check)
    sp_check.add_argument("templates", nargs="+", help="имена шаблонов")

    return p


def _setup_logging(level: int) -> None:
    root = logging.getLogger("templatron")
    root.setLevel(level)
    if not root.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        root.addHandler(h)


def _load_engine_config(ns: argparse.Namespace) -> EngineConfig:
    """Загружает конфигурацию и применяет переопределения из аргументов."""
    cfg = load_config(ns.config)
    if ns.templates_dir is not None:
        cfg = EngineConfig(
            templates_dir=ns.templates_dir,
            default_suffix=cfg.default_suffix,
            max_include_depth=cfg.max_include_depth,
            trim_blank_runs=cfg.trim_blank_runs,
            log_level=cfg.log_level,
        )
    return cfg


def _log_level(cfg: EngineConfig, verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return cfg.log_level_value


def _read_data(path: Optional[Path]) -> Dict[str, Any]:
    if path is None:
        return {}
    if not path.is_file():
        raise TemplatronError(f"Data file not found: {path}")
    return read_yaml_map(path)


def _run_check(engine: Templatron, names: list[str]) -> int:
    failed = 0
    for name in names:
        try:
            engine.get_template(name)
            sys.stdout.write(f"{name}: ok\n")
        except TemplatronError as e:
            failed += 1
            sys.stdout.write(f"{name}: {e}\n")
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)

    try:
        cfg = _load_engine_config(ns)
        _setup_logging(_log_level(cfg, ns.verbose))
        engine = Templatron.from_config(cfg, cache=TemplateCache())

        if ns.cmd == "render":
            data = _read_data(ns.data)
            sys.stdout.write(render_with_layouts(engine, ns.template, data, ns.layout))
            return 0

        if ns.cmd == "check":
            return _run_check(engine, ns.templates)

    except TemplatronError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
