"""
Типы данных и enums для docfields.

Этот модуль содержит базовые типы и константы, используемые во всём приложении.
"""

from __future__ import annotations
from enum import Enum


class FieldMode(str, Enum):
    """Режимы извлечения значения поля."""

    RELATIVE = "relative"
    ABSOLUTE = "absolute"


class DocumentStatus(str, Enum):
    """Статус обработки документа в пакете."""

    SUCCESS = "success"
    ERROR = "error"


# Type aliases для улучшения читаемости
BBox = tuple[float, float, float, float]  # (x0, y0, x1, y1)
