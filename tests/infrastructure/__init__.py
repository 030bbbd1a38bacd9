"""
Общая инфраструктура тестов Templatron.
"""

from .engine_utils import make_engine, warnings_from
from .file_utils import write, write_templates

__all__ = ["write", "write_templates", "make_engine", "warnings_from"]
