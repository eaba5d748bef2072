"""
PyMuPDF-based text layer extraction.

Этот модуль превращает страницу PDF в поток позиционированных фрагментов
(TextFragment) в пикселях страницы при заданном масштабе рендера.
"""

from __future__ import annotations
import logging
from typing import List, Tuple

import pymupdf

from docfields.core.config import DEFAULT_PAGE, DEFAULT_RENDER_SCALE
from docfields.core.exceptions import PDFProcessingError
from docfields.core.models import TextFragment
from docfields.utils.text import clean_text_inplace


class FragmentExtractor:
    """
    Извлекает фрагменты текста из страницы PDF с использованием PyMuPDF.

    Каждый span из page.get_text("dict") становится одним фрагментом.
    Пустые span'ы и span'ы нулевой высоты отбрасываются.
    """

    def __init__(self, scale: float = DEFAULT_RENDER_SCALE):
        self.scale = scale

    def extract_fragments(self, page) -> List[TextFragment]:
        """
        Извлекает фрагменты из страницы PDF.

        Args:
            page: PyMuPDF page объект

        Returns:
            Список TextFragment в координатах страницы (начало слева сверху)
        """
        text_dict = page.get_text("dict")
        fragments: List[TextFragment] = []

        for block in text_dict["blocks"]:
            # Блоки изображений не содержат строк
            if "lines" not in block:
                continue

            for line in block["lines"]:
                for span in line["spans"]:
                    text = clean_text_inplace(span["text"])
                    if not text:
                        continue

                    x0, y0, x1, y1 = span["bbox"]
                    w = max(0.0, (x1 - x0) * self.scale)
                    h = (y1 - y0) * self.scale
                    if h <= 0:
                        continue

                    fragments.append(
                        TextFragment(
                            text=text,
                            x=x0 * self.scale,
                            y=y0 * self.scale,
                            w=w,
                            h=h,
                        )
                    )

        return fragments

    def page_size(self, page) -> Tuple[float, float]:
        """Размер страницы в пикселях при текущем масштабе."""
        return page.rect.width * self.scale, page.rect.height * self.scale


def extract_page_fragments(
    pdf_path: str,
    page_number: int = DEFAULT_PAGE,
    scale: float = DEFAULT_RENDER_SCALE,
) -> Tuple[List[TextFragment], float, float]:
    """
    Извлекает фрагменты текста одной страницы PDF.

    Args:
        pdf_path: Путь к PDF файлу
        page_number: Номер страницы (1-based)
        scale: Масштаб рендера (1.0 = пункты PDF)

    Returns:
        (фрагменты, ширина страницы, высота страницы)

    Raises:
        PDFProcessingError: Если файл не открывается или страницы нет
    """
    try:
        doc = pymupdf.open(pdf_path)
    except Exception as e:
        raise PDFProcessingError(f"Cannot open PDF '{pdf_path}': {e}") from e

    try:
        if page_number < 1 or page_number > doc.page_count:
            raise PDFProcessingError(
                f"'{pdf_path}' has {doc.page_count} pages, page {page_number} requested"
            )

        extractor = FragmentExtractor(scale=scale)
        page = doc[page_number - 1]
        fragments = extractor.extract_fragments(page)
        width, height = extractor.page_size(page)

        logging.debug(
            f"[pdf] {pdf_path} p{page_number}: {len(fragments)} fragments "
            f"({width:.0f}x{height:.0f})"
        )
        return fragments, width, height

    finally:
        doc.close()
