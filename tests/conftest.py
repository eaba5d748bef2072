# tests/conftest.py
import pymupdf
import pytest

from docfields.utils.metrics import disable_metrics


@pytest.fixture(autouse=True)
def _no_metrics():
    # Метрики пишутся в глобальный путь; тесты не должны его наследовать
    disable_metrics()
    yield
    disable_metrics()


def write_pdf(path, lines, width=595, height=842):
    """Создаёт одностраничный PDF; lines = [(x, baseline_y, text, fontsize)]."""
    doc = pymupdf.open()
    page = doc.new_page(width=width, height=height)
    for x, y, text, size in lines:
        page.insert_text((x, y), text, fontsize=size)
    doc.save(str(path))
    doc.close()
    return path


@pytest.fixture
def invoice_pdf(tmp_path):
    return write_pdf(
        tmp_path / "invoice.pdf",
        [
            (72, 72, "INVOICE #", 12),
            (72, 88, "12345", 12),
            (72, 200, "NOTE: paid by transfer", 12),
        ],
    )


@pytest.fixture
def other_invoice_pdf(tmp_path):
    # Тот же формат, другой сдвиг по вертикали
    return write_pdf(
        tmp_path / "invoice2.pdf",
        [
            (90, 140, "INVOICE #", 12),
            (90, 156, "A-778", 12),
            (90, 300, "Note: due in 30 days", 12),
        ],
    )
