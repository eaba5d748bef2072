"""
Простой режим: извлечение текста по абсолютному прямоугольнику.
"""

from __future__ import annotations
import logging
from typing import Sequence

from docfields.core.config import INTERSECTION_TOLERANCE
from docfields.core.models import PercentBBox, TextFragment
from docfields.utils.geometry import (
    fragment_center_inside,
    fragment_overlaps,
    percent_bbox_to_rect,
    sort_fragments_reading_order,
)


def process_text_intersection(
    fragments: Sequence[TextFragment],
    bbox: PercentBBox,
    page_width: float,
    page_height: float,
    strict: bool = False,
) -> str:
    """
    Возвращает текст фрагментов, попавших в прямоугольник.

    Процентный bbox переводится в пиксели страницы и расширяется на
    допуск в несколько пикселей. По умолчанию берутся фрагменты,
    пересекающиеся с прямоугольником; при strict=True - только те,
    чей центр лежит внутри.

    Args:
        fragments: Фрагменты текста страницы
        bbox: Прямоугольник в процентах от страницы
        page_width: Ширина страницы в пикселях
        page_height: Высота страницы в пикселях
        strict: Проверять центр фрагмента вместо пересечения

    Returns:
        Тексты фрагментов в порядке чтения через пробел
    """
    rect = percent_bbox_to_rect(
        bbox, page_width, page_height, tolerance=INTERSECTION_TOLERANCE
    )
    hit = fragment_center_inside if strict else fragment_overlaps

    selected = [f for f in fragments if hit(f, rect)]
    ordered = sort_fragments_reading_order(selected)

    logging.debug(f"[intersect] {len(selected)}/{len(fragments)} fragments in box")

    return " ".join(f.text for f in ordered if f.text.strip()).strip()
