"""Tests for PDF text-layer extraction with PyMuPDF."""

import pytest

from docfields.core.exceptions import PDFProcessingError
from docfields.core.models import FieldDefinition, StopRules, Template
from docfields.processing.extractors.pymupdf import extract_page_fragments
from docfields.processing.pipeline import process_document, run_batch


def test_extracts_fragments_in_page_space(invoice_pdf):
    fragments, width, height = extract_page_fragments(str(invoice_pdf))

    texts = [f.text for f in fragments]
    assert "INVOICE #" in texts
    assert "12345" in texts
    assert (width, height) == (595, 842)

    invoice = fragments[texts.index("INVOICE #")]
    assert invoice.h > 0
    assert 50 < invoice.y < 72  # верх строки над базовой линией
    assert invoice.x == pytest.approx(72, abs=1)


def test_scale_multiplies_coordinates(invoice_pdf):
    base, w1, h1 = extract_page_fragments(str(invoice_pdf), scale=1.0)
    scaled, w2, h2 = extract_page_fragments(str(invoice_pdf), scale=2.0)

    assert (w2, h2) == (w1 * 2, h1 * 2)
    assert scaled[0].x == pytest.approx(base[0].x * 2)
    assert scaled[0].h == pytest.approx(base[0].h * 2)


def test_missing_page_and_bad_file_raise(invoice_pdf, tmp_path):
    with pytest.raises(PDFProcessingError):
        extract_page_fragments(str(invoice_pdf), page_number=2)

    bogus = tmp_path / "bogus.pdf"
    bogus.write_bytes(b"this is not a pdf")
    with pytest.raises(PDFProcessingError):
        extract_page_fragments(str(bogus))

    with pytest.raises(PDFProcessingError):
        extract_page_fragments(str(tmp_path / "absent.pdf"))


def test_same_template_tolerates_layout_drift(invoice_pdf, other_invoice_pdf):
    template = Template(
        name="Invoices",
        fields=[
            FieldDefinition(
                id="1",
                name="Invoice",
                anchor_text="INVOICE #",
                stop_rules=StopRules(stop_at_empty_gap=True),
            )
        ],
    )

    results = run_batch([str(invoice_pdf), str(other_invoice_pdf)], template)

    assert [r.data["Invoice"] for r in results] == ["12345", "A-778"]


def test_corrupt_pdf_becomes_error_result(tmp_path):
    bogus = tmp_path / "bogus.pdf"
    bogus.write_bytes(b"%PDF-garbage")
    template = Template(name="t", fields=[FieldDefinition(id="1", name="x", anchor_text="x")])

    result = process_document(str(bogus), template)

    assert result.status == "error"
    assert result.file_name == "bogus.pdf"
