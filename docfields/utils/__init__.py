"""
Модуль utils: вспомогательные утилиты.
"""

from docfields.utils.text import (
    normalize_key,
    normalized_anchors,
    round_half_up,
    clean_text_inplace,
    strip_field_label,
)
from docfields.utils.geometry import (
    compare_reading_order,
    sort_fragments_reading_order,
    fragments_bbox,
    union_bbox,
    percent_bbox_to_rect,
    fragment_overlaps,
    fragment_center_inside,
)
from docfields.utils.metrics import (
    Timer,
    init_metrics,
    metrics_path_for,
    disable_metrics,
    log_metric,
)

__all__ = [
    # Text utilities
    "normalize_key",
    "normalized_anchors",
    "round_half_up",
    "clean_text_inplace",
    "strip_field_label",
    # Geometry utilities
    "compare_reading_order",
    "sort_fragments_reading_order",
    "fragments_bbox",
    "union_bbox",
    "percent_bbox_to_rect",
    "fragment_overlaps",
    "fragment_center_inside",
    # Metrics utilities
    "Timer",
    "init_metrics",
    "metrics_path_for",
    "disable_metrics",
    "log_metric",
]
