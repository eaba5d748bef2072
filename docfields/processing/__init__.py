"""
Модуль processing: восстановление layout, извлечение полей и пакетная обработка.
"""

from docfields.processing.pipeline import (
    extract_document_fields,
    process_document,
    run_batch,
)

__all__ = [
    "extract_document_fields",
    "process_document",
    "run_batch",
]
