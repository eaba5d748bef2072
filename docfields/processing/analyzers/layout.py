"""
Восстановление layout страницы из позиционированных фрагментов текста.

Этот модуль группирует фрагменты в строки, а строки в абзацы.
Порядок результата всегда документный: сверху вниз, слева направо.
"""

from __future__ import annotations
import logging
from typing import List, Sequence

from docfields.core.config import (
    LINE_JOINER,
    LINE_Y_TOLERANCE_RATIO,
    PARAGRAPH_GAP_RATIO,
)
from docfields.core.models import Line, Paragraph, TextFragment
from docfields.utils.geometry import (
    fragments_bbox,
    sort_fragments_reading_order,
    union_bbox,
)
from docfields.utils.text import round_half_up


def group_text_into_lines(fragments: Sequence[TextFragment]) -> List[Line]:
    """
    Группирует фрагменты в визуальные строки по близости по вертикали.

    Фрагменты сортируются в порядке чтения, затем накапливаются в текущую
    строку, пока |y - y_якоря| < 0.6 * min(h, h_предыдущего). Y якоря
    строки берётся от первого фрагмента и не обновляется.

    Args:
        fragments: Фрагменты текста одной страницы

    Returns:
        Список строк в порядке чтения
    """
    lines: List[Line] = []
    current: List[TextFragment] = []
    anchor_y = 0.0

    for frag in sort_fragments_reading_order(fragments):
        if not current:
            current = [frag]
            anchor_y = frag.y
            continue

        last = current[-1]
        tolerance = min(frag.h, last.h) * LINE_Y_TOLERANCE_RATIO

        if abs(frag.y - anchor_y) < tolerance:
            current.append(frag)
        else:
            lines.append(_create_line(current))
            current = [frag]
            anchor_y = frag.y

    if current:
        lines.append(_create_line(current))

    logging.debug(f"[lines] {len(fragments)} fragments -> {len(lines)} lines")
    return lines


def _create_line(fragments: List[TextFragment]) -> Line:
    """Создаёт Line из фрагментов, упорядочивая их слева направо."""
    ordered = sorted(fragments, key=lambda f: f.x)
    return Line(
        fragments=ordered,
        bbox=fragments_bbox(ordered),
        result=" ".join(f.text for f in ordered),
    )


def style_key_of(fragments: Sequence[TextFragment]) -> int:
    """
    Класс размера шрифта: округлённая средняя высота фрагментов.

    Args:
        fragments: Фрагменты строки или абзаца

    Returns:
        Целый ключ стиля (0 для пустого набора)
    """
    if not fragments:
        return 0
    return round_half_up(sum(f.h for f in fragments) / len(fragments))


def line_style_key(line: Line) -> int:
    """Ключ стиля строки."""
    return style_key_of(line.fragments)


def group_lines_into_paragraphs(lines: Sequence[Line]) -> List[Paragraph]:
    """
    Группирует строки в абзацы по вертикальным зазорам и стилю.

    Новый абзац начинается, если зазор между верхом строки и низом
    предыдущей строки больше 1.5 высоты предыдущей строки, или если
    ключ стиля строки отличается от предыдущей.

    Args:
        lines: Строки в порядке чтения

    Returns:
        Список абзацев в документном порядке
    """
    paragraphs: List[Paragraph] = []
    current: List[Line] = []

    for line in lines:
        if not current:
            current.append(line)
            continue

        prev = current[-1]
        vertical_gap = line.y - prev.bottom
        is_big_gap = vertical_gap > prev.height * PARAGRAPH_GAP_RATIO
        same_style = line_style_key(line) == line_style_key(prev)

        if is_big_gap or not same_style:
            paragraphs.append(create_paragraph(current))
            current = [line]
        else:
            current.append(line)

    if current:
        paragraphs.append(create_paragraph(current))

    logging.debug(f"[paragraphs] {len(lines)} lines -> {len(paragraphs)} paragraphs")
    return paragraphs


def create_paragraph(lines: List[Line]) -> Paragraph:
    """
    Создаёт Paragraph из списка строк.

    Args:
        lines: Непустой список строк

    Returns:
        Новый абзац с собственным идентификатором

    Raises:
        ValueError: Если список строк пуст
    """
    if not lines:
        raise ValueError("Cannot create paragraph from empty lines")

    fragments = [f for line in lines for f in line.fragments]

    return Paragraph(
        lines=list(lines),
        bbox=union_bbox(line.bbox for line in lines),
        style_key=style_key_of(fragments),
        text=LINE_JOINER.join(line.result for line in lines),
    )
