"""
Модуль extractors: извлечение значений полей и фрагментов текста.
"""

from docfields.processing.extractors.relative import (
    build_document_layout,
    find_anchor,
    get_content_column,
    extract_from_layout,
    extract_relative_field,
    extract_fields,
)
from docfields.processing.extractors.intersection import process_text_intersection
from docfields.processing.extractors.pymupdf import (
    FragmentExtractor,
    extract_page_fragments,
)

__all__ = [
    "build_document_layout",
    "find_anchor",
    "get_content_column",
    "extract_from_layout",
    "extract_relative_field",
    "extract_fields",
    "process_text_intersection",
    "FragmentExtractor",
    "extract_page_fragments",
]
