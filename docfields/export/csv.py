"""
Экспорт результатов пакетной обработки в CSV формат.
"""

from __future__ import annotations
import csv
import logging
from typing import Iterable, Sequence

from docfields.core.config import CSV_FILE_COLUMN, CSV_STATUS_COLUMN
from docfields.core.exceptions import ExportError
from docfields.core.models import DocumentResult
from docfields.core.types import DocumentStatus


def _status_value(status) -> str:
    return status.value if isinstance(status, DocumentStatus) else str(status)


def export_batch_csv(
    results: Iterable[DocumentResult],
    field_names: Sequence[str],
    out_path: str,
) -> int:
    """
    Записывает результаты в CSV: одна строка на документ.

    Заголовок: file, <имена полей...>, status.

    Args:
        results: Результаты обработки документов
        field_names: Имена полей шаблона (порядок колонок)
        out_path: Путь к выходному CSV файлу

    Returns:
        Количество записанных строк (без заголовка)

    Raises:
        ExportError: Если файл не удалось записать
    """
    rows = 0
    try:
        with open(out_path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow([CSV_FILE_COLUMN, *field_names, CSV_STATUS_COLUMN])

            for res in results:
                w.writerow(
                    [
                        res.file_name,
                        *(res.data.get(name, "") for name in field_names),
                        _status_value(res.status),
                    ]
                )
                rows += 1
    except OSError as e:
        raise ExportError(f"Cannot write CSV '{out_path}': {e}") from e

    logging.info(f"[export] {rows} rows -> {out_path}")
    return rows
