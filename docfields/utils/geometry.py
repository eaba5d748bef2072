"""
Утилиты для геометрических расчётов.

Этот модуль содержит функции для работы с координатами и bounding boxes.
"""

from __future__ import annotations
from functools import cmp_to_key
from typing import Iterable, List

from docfields.core.config import READING_ORDER_TIE_RATIO
from docfields.core.models import PercentBBox, TextFragment
from docfields.core.types import BBox


def compare_reading_order(a: TextFragment, b: TextFragment) -> int:
    """
    Сравнивает два фрагмента в порядке чтения (сверху вниз, слева направо).

    Фрагменты, чьи Y отличаются меньше чем на половину меньшей высоты,
    считаются стоящими на одной строке и сравниваются по X.
    При равном X решает Y, поэтому порядок детерминирован.

    Args:
        a: Первый фрагмент
        b: Второй фрагмент

    Returns:
        Отрицательное число, 0 или положительное число
    """
    if abs(a.y - b.y) < min(a.h, b.h) * READING_ORDER_TIE_RATIO:
        if a.x != b.x:
            return -1 if a.x < b.x else 1
    if a.y != b.y:
        return -1 if a.y < b.y else 1
    if a.x != b.x:
        return -1 if a.x < b.x else 1
    return 0


def sort_fragments_reading_order(fragments: Iterable[TextFragment]) -> List[TextFragment]:
    """
    Сортирует фрагменты в порядке чтения (стабильная сортировка).

    Args:
        fragments: Фрагменты для сортировки

    Returns:
        Новый отсортированный список
    """
    return sorted(fragments, key=cmp_to_key(compare_reading_order))


def fragments_bbox(fragments: Iterable[TextFragment]) -> BBox:
    """Вычисляет общий bbox (x0, y0, x1, y1) набора фрагментов."""
    items = list(fragments)
    return (
        min(f.x for f in items),
        min(f.y for f in items),
        max(f.x + f.w for f in items),
        max(f.y + f.h for f in items),
    )


def union_bbox(boxes: Iterable[BBox]) -> BBox:
    """Объединяет несколько bbox в один."""
    items = list(boxes)
    return (
        min(b[0] for b in items),
        min(b[1] for b in items),
        max(b[2] for b in items),
        max(b[3] for b in items),
    )


def percent_bbox_to_rect(
    bbox: PercentBBox,
    page_width: float,
    page_height: float,
    tolerance: float = 0.0,
) -> BBox:
    """
    Переводит процентный bbox в пиксели страницы.

    Args:
        bbox: Прямоугольник в процентах (0-100)
        page_width: Ширина страницы в пикселях
        page_height: Высота страницы в пикселях
        tolerance: Расширение прямоугольника во все стороны (px)

    Returns:
        Прямоугольник (x0, y0, x1, y1) в пикселях
    """
    x0 = bbox.xmin / 100 * page_width
    y0 = bbox.ymin / 100 * page_height
    x1 = bbox.xmax / 100 * page_width
    y1 = bbox.ymax / 100 * page_height
    return (x0 - tolerance, y0 - tolerance, x1 + tolerance, y1 + tolerance)


def fragment_overlaps(f: TextFragment, rect: BBox) -> bool:
    """Проверяет, пересекается ли прямоугольник фрагмента с rect."""
    return f.x < rect[2] and f.x + f.w > rect[0] and f.y < rect[3] and f.y + f.h > rect[1]


def fragment_center_inside(f: TextFragment, rect: BBox) -> bool:
    """Проверяет, лежит ли центр фрагмента внутри rect (границы включительно)."""
    cx = f.x + f.w / 2
    cy = f.y + f.h / 2
    return rect[0] <= cx <= rect[2] and rect[1] <= cy <= rect[3]
