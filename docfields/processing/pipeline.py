"""
Пакетная обработка PDF документов по шаблону.

Документы обрабатываются по одному: фрагменты страницы извлекаются,
layout строится один раз на документ и переиспользуется для всех полей.
Между документами нет общего состояния.
"""

from __future__ import annotations
import logging
import os
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from docfields.core.config import DEFAULT_PAGE, DEFAULT_RENDER_SCALE
from docfields.core.exceptions import DocFieldsError
from docfields.core.models import DocumentResult, Template, TextFragment
from docfields.core.types import DocumentStatus, FieldMode
from docfields.processing.extractors.intersection import process_text_intersection
from docfields.processing.extractors.pymupdf import extract_page_fragments
from docfields.processing.extractors.relative import extract_fields
from docfields.utils.metrics import Timer, log_metric
from docfields.utils.text import strip_field_label


FragmentLoader = Callable[[str, int, float], Tuple[List[TextFragment], float, float]]


def extract_document_fields(
    fragments: Sequence[TextFragment],
    template: Template,
    page_width: float,
    page_height: float,
) -> Dict[str, str]:
    """
    Применяет все поля шаблона к фрагментам одной страницы.

    Относительные поля извлекаются по общему layout, абсолютные -
    пересечением с bbox и очисткой от повтора имени поля.

    Args:
        fragments: Фрагменты текста страницы
        template: Шаблон
        page_width: Ширина страницы в пикселях
        page_height: Высота страницы в пикселях

    Returns:
        Словарь {имя поля: значение} в порядке полей шаблона
    """
    relative = extract_fields(fragments, template.fields, page_width, page_height)
    data: Dict[str, str] = {}

    for field in template.fields:
        if field.mode == FieldMode.ABSOLUTE:
            value = process_text_intersection(
                fragments, field.relative_bbox, page_width, page_height
            )
            data[field.name] = strip_field_label(value, field.name)
        else:
            data[field.name] = relative.get(field.name, "")

    return data


def process_document(
    pdf_path: str,
    template: Template,
    page_number: int = DEFAULT_PAGE,
    scale: float = DEFAULT_RENDER_SCALE,
    load_fragments: FragmentLoader = extract_page_fragments,
) -> DocumentResult:
    """
    Обрабатывает один документ.

    Ошибки чтения PDF и извлечения полей не пробрасываются:
    документ получает статус error.

    Args:
        pdf_path: Путь к PDF файлу
        template: Шаблон
        page_number: Номер страницы (1-based)
        scale: Масштаб рендера
        load_fragments: Источник фрагментов (по умолчанию PyMuPDF)

    Returns:
        DocumentResult со значениями полей или ошибкой
    """
    file_name = os.path.basename(pdf_path)
    timer = Timer()

    try:
        fragments, width, height = load_fragments(pdf_path, page_number, scale)
        log_metric(
            "fragments", doc=file_name, duration_ms=timer.ms(), count=len(fragments)
        )

        fields_timer = Timer()
        data = extract_document_fields(fragments, template, width, height)
    except DocFieldsError as e:
        logging.error(f"[batch] {file_name}: {e}")
        return _error_result(file_name, e)
    except Exception as e:
        # Сбой PyMuPDF или извлечения: помечаем документ и идём дальше
        logging.error(f"[batch] {file_name}: ошибка обработки документа: {e}")
        return _error_result(file_name, e)

    filled = sum(1 for v in data.values() if v)

    log_metric("fields", doc=file_name, duration_ms=fields_timer.ms(), count=filled)
    logging.info(f"[batch] {file_name}: {filled}/{len(data)} fields filled")

    return DocumentResult(file_name=file_name, data=data)


def _error_result(file_name: str, error: Exception) -> DocumentResult:
    message = str(error) or type(error).__name__
    log_metric("document", doc=file_name, sub="error", info=message)
    return DocumentResult(
        file_name=file_name, status=DocumentStatus.ERROR, error=message
    )


def run_batch(
    pdf_paths: Iterable[str],
    template: Template,
    page_number: int = DEFAULT_PAGE,
    scale: float = DEFAULT_RENDER_SCALE,
    load_fragments: FragmentLoader = extract_page_fragments,
    stop_hook: Optional[Callable[[], bool]] = None,
    progress_hook: Optional[Callable[[int, int], None]] = None,
) -> List[DocumentResult]:
    """
    Применяет шаблон к набору документов последовательно.

    Args:
        pdf_paths: Пути к PDF файлам
        template: Шаблон
        page_number: Номер страницы (1-based)
        scale: Масштаб рендера
        load_fragments: Источник фрагментов (по умолчанию PyMuPDF)
        stop_hook: Вызывается перед каждым документом; True = остановить пакет
        progress_hook: Получает (обработано, всего) после каждого документа

    Returns:
        Результаты по обработанным документам в исходном порядке
    """
    paths = list(pdf_paths)
    results: List[DocumentResult] = []
    timer = Timer()

    logging.info(
        f"[batch] Шаблон '{template.name}': {len(template.fields)} полей, "
        f"{len(paths)} документов"
    )

    for i, path in enumerate(paths, 1):
        if stop_hook and stop_hook():
            logging.warning(f"[batch] Остановлено после {len(results)} документов")
            break

        logging.debug(f"[batch] ({i}/{len(paths)}) {path}")
        results.append(
            process_document(
                path,
                template,
                page_number=page_number,
                scale=scale,
                load_fragments=load_fragments,
            )
        )

        if progress_hook:
            progress_hook(i, len(paths))

    errors = sum(1 for r in results if r.status == DocumentStatus.ERROR)
    log_metric("batch", duration_ms=timer.ms(), count=len(results), info=f"errors={errors}")
    logging.info(f"[batch] Готово: {len(results) - errors} успешно, {errors} с ошибками")

    return results
