"""
Извлечение значений полей относительно текстовых якорей.

Значение поля - это абзацы, идущие после абзаца-якоря, до первого
сработавшего правила остановки. Координаты используются только как
относительные признаки, поэтому шаблон переносит сдвиги вёрстки.
"""

from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set

from docfields.core.config import (
    COLUMN_LEFT_TOLERANCE,
    COLUMN_RIGHT_SLACK,
    EMPTY_GAP_RATIO,
    FIELD_JOINER,
    LINE_JOINER,
)
from docfields.core.models import (
    ContentColumn,
    FieldDefinition,
    Paragraph,
    StopRules,
    TextFragment,
)
from docfields.core.types import FieldMode
from docfields.processing.analyzers.layout import (
    group_lines_into_paragraphs,
    group_text_into_lines,
)
from docfields.processing.analyzers.structure import (
    classify_paragraphs,
    split_at_anchor_lines,
)
from docfields.utils.text import normalize_key, normalized_anchors


def collect_known_anchors(
    definition: Optional[FieldDefinition],
    all_definitions: Iterable[FieldDefinition],
) -> List[str]:
    """Собирает непустые тексты якорей текущего поля и всех полей шаблона."""
    anchors = [definition.anchor_text] if definition is not None else []
    anchors.extend(d.anchor_text for d in all_definitions)
    return [a for a in anchors if a and a.strip()]


def build_document_layout(
    fragments: Sequence[TextFragment],
    known_anchors: Iterable[str] = (),
) -> List[Paragraph]:
    """
    Строит классифицированные абзацы страницы.

    Результат зависит только от фрагментов и набора якорей, поэтому
    его можно один раз построить для документа и переиспользовать
    для всех полей шаблона.

    Args:
        fragments: Фрагменты текста страницы
        known_anchors: Тексты якорей всех полей шаблона

    Returns:
        Абзацы в документном порядке с выставленными флагами
    """
    anchors = list(known_anchors)
    lines = group_text_into_lines(fragments)
    paragraphs = group_lines_into_paragraphs(lines)
    paragraphs = split_at_anchor_lines(paragraphs, anchors)
    return classify_paragraphs(paragraphs, anchors)


def find_anchor(
    paragraphs: Sequence[Paragraph],
    definition: FieldDefinition,
) -> Optional[Paragraph]:
    """
    Находит абзац-якорь поля.

    Сравнение - вхождение подстроки без учёта регистра. Если кандидатов
    несколько, возвращается первый в документном порядке; relative_bbox
    для разрешения неоднозначности не используется.

    Args:
        paragraphs: Абзацы в документном порядке
        definition: Определение поля

    Returns:
        Абзац-якорь или None
    """
    target = normalize_key(definition.anchor_text)
    if not target:
        return None

    candidates = [p for p in paragraphs if target in p.text.casefold()]

    if not candidates:
        return None

    if len(candidates) > 1:
        logging.debug(
            f"[anchor] '{definition.anchor_text}': {len(candidates)} candidates, "
            f"taking first (hint={'yes' if definition.relative_bbox else 'no'})"
        )

    return candidates[0]


def get_content_column(
    anchor: Paragraph,
    paragraphs: Sequence[Paragraph],
    page_width: float,
) -> ContentColumn:
    """
    Оценивает горизонтальные границы содержимого поля.

    Левая граница - левый край якоря минус допуск на висячий отступ,
    правая - ширина страницы (колонки не различаются).

    Args:
        anchor: Абзац-якорь
        paragraphs: Абзацы страницы
        page_width: Ширина страницы в пикселях

    Returns:
        ContentColumn с левой и правой границей
    """
    left = max(0.0, anchor.x - COLUMN_LEFT_TOLERANCE)
    return ContentColumn(left=left, right=page_width)


def _stop_reason(
    p: Paragraph,
    prev: Paragraph,
    rules: StopRules,
    marker: str,
    other_anchors: Set[str],
) -> Optional[str]:
    """Возвращает первое сработавшее правило остановки или None."""
    if rules.stop_at_heading and p.is_heading:
        return "heading"

    if rules.stop_at_separator and p.is_separator:
        return "separator"

    if marker and marker in p.text.casefold():
        return "marker"

    if p.is_footer:
        return "footer"

    if rules.stop_at_next_field and normalize_key(p.text) in other_anchors:
        return "next_field"

    if rules.stop_at_empty_gap:
        gap = p.y - prev.bottom
        if gap > prev.height * EMPTY_GAP_RATIO:
            return "empty_gap"

    return None


def extract_from_layout(
    paragraphs: Sequence[Paragraph],
    definition: FieldDefinition,
    all_definitions: Iterable[FieldDefinition],
    page_width: float,
) -> str:
    """
    Извлекает значение поля из уже построенных абзацев.

    Args:
        paragraphs: Классифицированные абзацы (см. build_document_layout)
        definition: Определение поля
        all_definitions: Все поля шаблона (для правила stop_at_next_field)
        page_width: Ширина страницы в пикселях

    Returns:
        Текст значения или пустая строка
    """
    anchor = find_anchor(paragraphs, definition)
    if anchor is None:
        logging.debug(f"[extract] '{definition.name}': anchor not found")
        return ""

    anchor_index = next(
        (i for i, p in enumerate(paragraphs) if p.id == anchor.id), -1
    )
    if anchor_index == -1:
        return ""

    column = get_content_column(anchor, paragraphs, page_width)
    rules = definition.stop_rules
    marker = normalize_key(definition.stop_marker or "")
    own_anchor = normalize_key(definition.anchor_text)
    other_anchors = set(normalized_anchors(d.anchor_text for d in all_definitions))
    other_anchors.discard(own_anchor)
    max_lines = rules.max_lines if rules.max_lines and rules.max_lines > 0 else None

    parts: List[str] = []
    taken_lines = 0

    for i in range(anchor_index + 1, len(paragraphs)):
        p = paragraphs[i]

        # Далеко правее колонки: соседняя колонка, не останавливаемся
        if p.x > column.right + COLUMN_RIGHT_SLACK:
            continue

        reason = _stop_reason(p, paragraphs[i - 1], rules, marker, other_anchors)
        if reason:
            logging.debug(f"[extract] '{definition.name}': stop at #{i} ({reason})")
            break

        if max_lines is not None:
            remaining = max_lines - taken_lines
            if len(p.lines) > remaining:
                if remaining > 0:
                    parts.append(
                        LINE_JOINER.join(line.result for line in p.lines[:remaining])
                    )
                logging.debug(f"[extract] '{definition.name}': max_lines={max_lines}")
                break
            taken_lines += len(p.lines)

        parts.append(p.text)

    return FIELD_JOINER.join(parts)


def extract_relative_field(
    fragments: Sequence[TextFragment],
    definition: FieldDefinition,
    all_definitions: Sequence[FieldDefinition],
    page_width: float,
    page_height: float,
) -> str:
    """
    Извлекает значение поля по якорю и правилам остановки.

    Layout строится заново при каждом вызове. Для шаблона с несколькими
    полями используйте extract_fields: он строит layout один раз.

    Args:
        fragments: Фрагменты текста страницы
        definition: Определение поля
        all_definitions: Все поля шаблона
        page_width: Ширина страницы в пикселях
        page_height: Высота страницы в пикселях

    Returns:
        Текст значения или пустая строка, если якорь не найден
    """
    anchors = collect_known_anchors(definition, all_definitions)
    paragraphs = build_document_layout(fragments, anchors)
    return extract_from_layout(paragraphs, definition, all_definitions, page_width)


def extract_fields(
    fragments: Sequence[TextFragment],
    definitions: Sequence[FieldDefinition],
    page_width: float,
    page_height: float,
) -> Dict[str, str]:
    """
    Извлекает значения всех относительных полей шаблона из одной страницы.

    Args:
        fragments: Фрагменты текста страницы
        definitions: Поля шаблона
        page_width: Ширина страницы в пикселях
        page_height: Высота страницы в пикселях

    Returns:
        Словарь {имя поля: значение}
    """
    relative = [d for d in definitions if d.mode == FieldMode.RELATIVE]
    if not relative:
        return {}

    paragraphs = build_document_layout(
        fragments, collect_known_anchors(None, definitions)
    )

    return {
        d.name: extract_from_layout(paragraphs, d, definitions, page_width)
        for d in relative
    }
