"""
Точка входа для docfields.

Запускает CLI; эквивалентно консольному скрипту `docfields`.

Пример использования из Python:

    from docfields.core.templates import load_template
    from docfields.processing.pipeline import run_batch
    from docfields.export.csv import export_batch_csv

    template = load_template("facturas.json")
    results = run_batch(["a.pdf", "b.pdf"], template)
    export_batch_csv(results, template.field_names, "out.csv")
"""

from __future__ import annotations

from docfields.cli import run


if __name__ == "__main__":
    run()
