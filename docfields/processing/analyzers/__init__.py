"""
Модуль analyzers: восстановление layout и структурная классификация.
"""

from docfields.processing.analyzers.layout import (
    group_text_into_lines,
    group_lines_into_paragraphs,
    create_paragraph,
)
from docfields.processing.analyzers.structure import (
    analyze_headings,
    detect_separators,
    detect_footers,
    split_at_anchor_lines,
    classify_paragraphs,
)

__all__ = [
    "group_text_into_lines",
    "group_lines_into_paragraphs",
    "create_paragraph",
    "analyze_headings",
    "detect_separators",
    "detect_footers",
    "split_at_anchor_lines",
    "classify_paragraphs",
]
