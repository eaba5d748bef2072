"""Tests for batch processing and CSV export."""

import csv

import pytest

from docfields.core.exceptions import ExportError, PDFProcessingError
from docfields.core.models import (
    DocumentResult,
    FieldDefinition,
    PercentBBox,
    StopRules,
    Template,
    TextFragment,
)
from docfields.core.types import DocumentStatus, FieldMode
from docfields.export.csv import export_batch_csv
from docfields.processing.pipeline import process_document, run_batch
from docfields.utils import metrics

PAGES = {
    "a.pdf": [
        TextFragment("Factura: A-1", 20, 10, 60, 10),
        TextFragment("Cliente", 20, 40, 35, 10),
        TextFragment("ACME Ltd", 20, 52, 40, 10),
        TextFragment("Nota: pagado", 20, 90, 60, 10),
    ],
    "b.pdf": [
        TextFragment("Factura: B-77", 30, 12, 60, 10),
        TextFragment("Cliente", 30, 70, 35, 10),
        TextFragment("Globex", 30, 82, 30, 10),
    ],
}


def fake_loader(path, page_number, scale):
    if path not in PAGES:
        raise PDFProcessingError(f"Cannot open PDF '{path}'")
    return PAGES[path], 200.0, 100.0


@pytest.fixture
def template():
    return Template(
        name="Facturas",
        fields=[
            FieldDefinition(
                id="1",
                name="Factura",
                relative_bbox=PercentBBox(xmin=0, ymin=5, xmax=60, ymax=25),
                mode=FieldMode.ABSOLUTE,
            ),
            FieldDefinition(
                id="2",
                name="Cliente",
                anchor_text="Cliente",
                stop_rules=StopRules(stop_at_empty_gap=True),
            ),
        ],
    )


def test_process_document_mixes_modes(template):
    result = process_document("a.pdf", template, load_fragments=fake_loader)

    assert result.status == DocumentStatus.SUCCESS
    assert result.data == {"Factura": "A-1", "Cliente": "ACME Ltd"}


def test_unreadable_document_is_marked_and_batch_continues(template):
    results = run_batch(["a.pdf", "missing.pdf", "b.pdf"], template, load_fragments=fake_loader)

    assert [r.status for r in results] == ["success", "error", "success"]
    assert "missing.pdf" in results[1].error
    assert results[1].data == {}
    assert results[2].data == {"Factura": "B-77", "Cliente": "Globex"}


def test_unexpected_loader_failure_is_marked(template):
    def broken(path, page_number, scale):
        raise RuntimeError("cannot open broken document")

    result = process_document("x.pdf", template, load_fragments=broken)

    assert result.status == DocumentStatus.ERROR
    assert "broken document" in result.error


def test_field_extraction_failure_is_marked_and_batch_continues():
    # Абсолютное поле без bbox, собранное в обход загрузчика шаблонов
    broken = Template(
        name="broken",
        fields=[FieldDefinition(id="1", name="Factura", mode=FieldMode.ABSOLUTE)],
    )

    results = run_batch(["a.pdf", "b.pdf"], broken, load_fragments=fake_loader)

    assert [r.status for r in results] == ["error", "error"]
    assert all(r.error for r in results)
    assert all(r.data == {} for r in results)


def test_stop_hook_cancels_remaining_documents(template):
    seen = []

    results = run_batch(
        ["a.pdf", "b.pdf"],
        template,
        load_fragments=fake_loader,
        stop_hook=lambda: len(seen) >= 1,
        progress_hook=lambda done, total: seen.append((done, total)),
    )

    assert [r.file_name for r in results] == ["a.pdf"]
    assert seen == [(1, 2)]


def test_export_batch_csv(tmp_path, template):
    results = run_batch(["a.pdf", "missing.pdf"], template, load_fragments=fake_loader)
    out = tmp_path / "out.csv"

    rows = export_batch_csv(results, template.field_names, str(out))

    with open(out, newline="", encoding="utf-8") as f:
        table = list(csv.reader(f))
    assert rows == 2
    assert table == [
        ["file", "Factura", "Cliente", "status"],
        ["a.pdf", "A-1", "ACME Ltd", "success"],
        ["missing.pdf", "", "", "error"],
    ]


def test_export_keeps_multiline_values(tmp_path):
    out = tmp_path / "out.csv"
    result = DocumentResult(file_name="c.pdf", data={"Notes": 'line "one"\n\nline two'})

    export_batch_csv([result], ["Notes"], str(out))

    with open(out, newline="", encoding="utf-8") as f:
        table = list(csv.reader(f))
    assert table[1] == ["c.pdf", 'line "one"\n\nline two', "success"]


def test_export_to_missing_directory_raises(tmp_path):
    with pytest.raises(ExportError):
        export_batch_csv([], ["A"], str(tmp_path / "nope" / "out.csv"))


def test_metrics_are_written_when_enabled(tmp_path, template):
    metrics_path = metrics.init_metrics(str(tmp_path / "results.csv"))

    run_batch(["a.pdf"], template, load_fragments=fake_loader)

    with open(metrics_path, newline="", encoding="utf-8") as f:
        stages = [row[1] for row in csv.reader(f)][1:]
    assert stages == ["fragments", "fields", "batch"]


def test_metrics_path_from_environment_gets_header_once(tmp_path, monkeypatch, template):
    path = tmp_path / "env.metrics.csv"
    monkeypatch.setattr(metrics, "METRICS_PATH", str(path))

    run_batch(["a.pdf", "b.pdf"], template, load_fragments=fake_loader)

    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == metrics.METRICS_COLUMNS
    assert [row[1] for row in rows[1:]] == ["fragments", "fields", "fragments", "fields", "batch"]
