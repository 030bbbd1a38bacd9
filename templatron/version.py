from __future__ import annotations

from importlib import metadata

_DIST_NAME = "templatron"


def tool_version() -> str:
    """Версия установленного дистрибутива; 0.0.0 при запуске из исходников."""
    try:
        return metadata.version(_DIST_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


__all__ = ["tool_version"]
