"""
Структурная классификация абзацев.

Каждый проход выставляет свой флаг (is_heading, is_separator, is_footer)
на месте и возвращает тот же список; порядок абзацев не меняется.
"""

from __future__ import annotations
import logging
import re
from typing import Dict, Iterable, List, Sequence

from docfields.core.config import (
    DEFAULT_BODY_SIZE,
    FOOTER_PREFIXES,
    FOOTER_WORDS,
    HEADING_MAX_CHARS,
    HEADING_MIN_CAPS_CHARS,
    HEADING_SIZE_RATIO,
    SEPARATOR_RE_PATTERN,
)
from docfields.core.models import Line, Paragraph
from docfields.processing.analyzers.layout import create_paragraph
from docfields.utils.text import normalize_key, normalized_anchors


_SEPARATOR_RE = re.compile(SEPARATOR_RE_PATTERN)


def get_body_style(paragraphs: Sequence[Paragraph]) -> int:
    """
    Определяет стиль основного текста.

    Побеждает ключ стиля с наибольшим суммарным числом символов,
    а не с наибольшим числом абзацев. При равенстве берётся первый.

    Args:
        paragraphs: Абзацы страницы

    Returns:
        Ключ стиля основного текста
    """
    counts: Dict[int, int] = {}
    for p in paragraphs:
        counts[p.style_key] = counts.get(p.style_key, 0) + len(p.text)

    if not counts:
        return DEFAULT_BODY_SIZE

    return max(counts, key=lambda k: counts[k])


def analyze_headings(
    paragraphs: List[Paragraph],
    known_anchors: Iterable[str] = (),
) -> List[Paragraph]:
    """
    Помечает заголовки.

    Абзац считается заголовком, если:
    - его текст совпадает (без учёта регистра) с одним из known_anchors;
    - его стиль крупнее основного текста более чем на 10%;
    - он короче 100 символов и не содержит строчных букв.

    Args:
        paragraphs: Абзацы в документном порядке
        known_anchors: Тексты якорей всех полей шаблона

    Returns:
        Тот же список с выставленным is_heading
    """
    if not paragraphs:
        return paragraphs

    body_size = get_body_style(paragraphs)
    anchors = set(normalized_anchors(known_anchors))
    headings = 0

    for p in paragraphs:
        if normalize_key(p.text) in anchors:
            p.is_heading = True
            headings += 1
            continue

        is_larger = p.style_key > body_size * HEADING_SIZE_RATIO
        is_short = len(p.text) < HEADING_MAX_CHARS
        # Без строчных букв: "-----" и "12345" тоже проходят
        is_all_caps = len(p.text) > HEADING_MIN_CAPS_CHARS and p.text == p.text.upper()

        p.is_heading = p.is_heading or is_larger or (is_short and is_all_caps)
        if p.is_heading:
            headings += 1

    logging.debug(
        f"[headings] body style {body_size}: {headings}/{len(paragraphs)} headings"
    )
    return paragraphs


def detect_separators(paragraphs: List[Paragraph]) -> List[Paragraph]:
    """
    Помечает разделители: строки вида "-----", "_____", "=====", "*****".

    Args:
        paragraphs: Абзацы в документном порядке

    Returns:
        Тот же список с выставленным is_separator
    """
    for p in paragraphs:
        if _SEPARATOR_RE.match(p.text.strip()):
            p.is_separator = True
    return paragraphs


def detect_footers(paragraphs: List[Paragraph]) -> List[Paragraph]:
    """
    Помечает сноски-примечания ("Nota:", "Note:"), которые всегда
    завершают значение поля.

    Args:
        paragraphs: Абзацы в документном порядке

    Returns:
        Тот же список с выставленным is_footer
    """
    for p in paragraphs:
        text = normalize_key(p.text)
        if text.startswith(FOOTER_PREFIXES) or text in FOOTER_WORDS:
            p.is_footer = True
    return paragraphs


def split_at_anchor_lines(
    paragraphs: Sequence[Paragraph],
    known_anchors: Iterable[str],
) -> List[Paragraph]:
    """
    Выделяет строки-якоря в отдельные абзацы.

    Метка поля, набранная тем же шрифтом, что и значение, попадает
    в один абзац со значением. Такой абзац делится на части:
    строки до якоря, строка якоря, строки после якоря.

    Args:
        paragraphs: Абзацы в документном порядке
        known_anchors: Тексты якорей всех полей шаблона

    Returns:
        Новый список абзацев в том же порядке
    """
    anchors = set(normalized_anchors(known_anchors))
    if not anchors:
        return list(paragraphs)

    out: List[Paragraph] = []
    for p in paragraphs:
        if len(p.lines) < 2 or not any(
            normalize_key(line.result) in anchors for line in p.lines
        ):
            out.append(p)
            continue

        chunk: List[Line] = []
        for line in p.lines:
            if normalize_key(line.result) in anchors:
                if chunk:
                    out.append(create_paragraph(chunk))
                out.append(create_paragraph([line]))
                chunk = []
            else:
                chunk.append(line)

        if chunk:
            out.append(create_paragraph(chunk))

    if len(out) != len(paragraphs):
        logging.debug(f"[anchors] split {len(paragraphs)} -> {len(out)} paragraphs")
    return out


def classify_paragraphs(
    paragraphs: List[Paragraph],
    known_anchors: Iterable[str] = (),
) -> List[Paragraph]:
    """
    Выполняет все проходы классификации: заголовки, разделители, сноски.

    Args:
        paragraphs: Абзацы в документном порядке
        known_anchors: Тексты якорей всех полей шаблона

    Returns:
        Тот же список с выставленными флагами
    """
    paragraphs = analyze_headings(paragraphs, known_anchors)
    paragraphs = detect_separators(paragraphs)
    return detect_footers(paragraphs)
