"""Tests for the Typer command-line interface."""

import csv
import json
import re

from typer.testing import CliRunner

from docfields import __version__
from docfields.cli import app

runner = CliRunner()


def _template(tmp_path):
    path = tmp_path / "invoices.json"
    path.write_text(
        json.dumps(
            {
                "name": "Invoices",
                "fields": [
                    {
                        "id": "1",
                        "name": "Invoice",
                        "anchorText": "INVOICE #",
                        "stopRules": {"stopAtEmptyGap": True},
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_extract_writes_csv(tmp_path, invoice_pdf, other_invoice_pdf):
    out = tmp_path / "results.csv"

    result = runner.invoke(
        app,
        ["extract", str(_template(tmp_path)), str(invoice_pdf), str(other_invoice_pdf), "--out", str(out)],
    )

    assert result.exit_code == 0, result.output
    assert "Invoice: 12345" in result.output
    with open(out, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["file", "Invoice", "status"]
    assert rows[1:] == [
        ["invoice.pdf", "12345", "success"],
        ["invoice2.pdf", "A-778", "success"],
    ]


def test_extract_reports_bad_template(tmp_path, invoice_pdf):
    bad = tmp_path / "bad.json"
    bad.write_text("[]]", encoding="utf-8")

    result = runner.invoke(app, ["extract", str(bad), str(invoice_pdf)])

    assert result.exit_code == 1


def test_layout_lists_flagged_paragraphs(invoice_pdf):
    result = runner.invoke(app, ["layout", str(invoice_pdf), "--anchor", "INVOICE #"])

    assert result.exit_code == 0, result.output
    assert "INVOICE #" in result.output
    rows = [line for line in result.output.splitlines() if re.match(r"^\s*\d+ [H.][S.][F.] ", line)]
    assert [row.split()[1] for row in rows] == ["H..", "H..", "..F"]
