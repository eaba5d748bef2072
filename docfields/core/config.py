"""
Конфигурация приложения docfields.

Этот модуль содержит все константы конфигурации и настройки окружения.
"""

import os
from typing import Optional


# ============================================================================
# Environment Configuration
# ============================================================================

LOG_LEVEL = os.environ.get("DOCFIELDS_LOG_LEVEL", "INFO")
DEFAULT_RENDER_SCALE = float(os.environ.get("DOCFIELDS_RENDER_SCALE", "1.0"))
DEFAULT_PAGE = int(os.environ.get("DOCFIELDS_PAGE", "1"))


# ============================================================================
# Line Builder Configuration
# ============================================================================

# Допуск по Y для фрагментов одной строки (доля меньшей высоты)
LINE_Y_TOLERANCE_RATIO = 0.6

# Почти-совпадение по Y при сортировке: сравниваем по X (доля меньшей высоты)
READING_ORDER_TIE_RATIO = 0.5


# ============================================================================
# Paragraph Builder Configuration
# ============================================================================

# Зазор больше 1.5 высоты предыдущей строки = новый абзац
PARAGRAPH_GAP_RATIO = 1.5

LINE_JOINER = "\n"


# ============================================================================
# Structural Classifier Configuration
# ============================================================================

HEADING_SIZE_RATIO = 1.1  # на 10% крупнее основного текста
HEADING_MAX_CHARS = 100
HEADING_MIN_CAPS_CHARS = 4
DEFAULT_BODY_SIZE = 10

SEPARATOR_RE_PATTERN = r"^[_\-=*]{3,}$"

FOOTER_PREFIXES = ("nota:", "note:")
FOOTER_WORDS = ("nota", "note")


# ============================================================================
# Relative Extraction Configuration
# ============================================================================

# Допуск для висячего отступа слева от якоря (px)
COLUMN_LEFT_TOLERANCE = 20.0

# Абзацы правее column.right + slack пропускаются
COLUMN_RIGHT_SLACK = 50.0

# Пустой зазор больше 4 высот предыдущего блока = конец поля
EMPTY_GAP_RATIO = 4.0

FIELD_JOINER = "\n\n"


# ============================================================================
# Simple Mode (Geometric Intersection) Configuration
# ============================================================================

INTERSECTION_TOLERANCE = 3.0  # px


# ============================================================================
# Metrics Configuration
# ============================================================================

METRICS_PATH: Optional[str] = os.environ.get("DOCFIELDS_METRICS_PATH") or None


# ============================================================================
# Export Configuration
# ============================================================================

CSV_FILE_COLUMN = "file"
CSV_STATUS_COLUMN = "status"
