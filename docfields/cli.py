"""
Командная строка docfields.

Команды:
    extract   Применить шаблон к набору PDF и (опционально) выгрузить CSV
    layout    Показать абзацы страницы с флагами классификации
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer

from docfields import __version__
from docfields.core.config import DEFAULT_PAGE, DEFAULT_RENDER_SCALE, LOG_LEVEL
from docfields.core.exceptions import DocFieldsError, ExportError, TemplateError
from docfields.core.templates import load_template
from docfields.core.types import DocumentStatus
from docfields.export.csv import export_batch_csv
from docfields.processing.extractors.pymupdf import extract_page_fragments
from docfields.processing.extractors.relative import build_document_layout
from docfields.processing.pipeline import run_batch
from docfields.utils.metrics import disable_metrics, init_metrics


app = typer.Typer(context_settings={"help_option_names": ["-h", "--help"]})


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Настройка логирования."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(f"docfields {__version__}")
    raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", help="Включить отладочный лог."),
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Показать версию и выйти.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Извлечение полей из однотипных PDF по шаблону."""
    setup_logging("DEBUG" if verbose else LOG_LEVEL)


@app.command()
def extract(
    template_path: Path = typer.Argument(..., help="JSON файл шаблона."),
    pdfs: List[Path] = typer.Argument(..., help="PDF документы."),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="CSV с результатами."),
    page: int = typer.Option(DEFAULT_PAGE, "--page", "-p", help="Номер страницы (1-based)."),
    scale: float = typer.Option(DEFAULT_RENDER_SCALE, "--scale", help="Масштаб рендера."),
    metrics: bool = typer.Option(False, "--metrics", help="Писать {out}.metrics.csv."),
) -> None:
    """Применить шаблон к документам."""
    try:
        template = load_template(str(template_path))
    except TemplateError as e:
        typer.echo(f"Ошибка шаблона: {e}", err=True)
        raise typer.Exit(code=1)

    if metrics and out is not None:
        init_metrics(str(out))
    else:
        disable_metrics()

    results = run_batch(
        [str(p) for p in pdfs], template, page_number=page, scale=scale
    )

    for res in results:
        status = DocumentStatus(res.status).value
        typer.echo(f"{res.file_name}\t{status}")
        if res.status == DocumentStatus.ERROR:
            typer.echo(f"  ! {res.error}")
            continue
        for name, value in res.data.items():
            shown = value.replace("\n", " | ")
            typer.echo(f"  {name}: {shown}")

    if out is not None:
        try:
            export_batch_csv(results, template.field_names, str(out))
        except ExportError as e:
            typer.echo(f"Ошибка экспорта: {e}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"CSV: {out}")


@app.command()
def layout(
    pdf: Path = typer.Argument(..., help="PDF документ."),
    page: int = typer.Option(DEFAULT_PAGE, "--page", "-p", help="Номер страницы (1-based)."),
    scale: float = typer.Option(DEFAULT_RENDER_SCALE, "--scale", help="Масштаб рендера."),
    anchors: Optional[List[str]] = typer.Option(
        None, "--anchor", "-a", help="Текст якоря (можно повторять)."
    ),
) -> None:
    """Показать абзацы страницы и их флаги."""
    try:
        fragments, _, _ = extract_page_fragments(str(pdf), page, scale)
    except DocFieldsError as e:
        typer.echo(f"Ошибка PDF: {e}", err=True)
        raise typer.Exit(code=1)

    for i, p in enumerate(build_document_layout(fragments, anchors or [])):
        flags = "".join(
            flag if on else "."
            for flag, on in (("H", p.is_heading), ("S", p.is_separator), ("F", p.is_footer))
        )
        first = p.lines[0].result if p.lines else ""
        more = f" (+{len(p.lines) - 1} lines)" if len(p.lines) > 1 else ""
        typer.echo(
            f"{i:3d} {flags} h{p.style_key:<3d} x={p.x:7.1f} y={p.y:7.1f}  {first}{more}"
        )


def run() -> None:
    """Точка входа консольного скрипта."""
    app()
