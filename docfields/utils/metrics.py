"""
Метрики обработки пакета документов.

Если путь к файлу метрик задан (DOCFIELDS_METRICS_PATH или init_metrics),
каждый этап обработки документа добавляет строку в CSV:
время, этап, документ, подэтап, длительность, количество, примечание.
"""

from __future__ import annotations
import csv
import os
import time
from typing import List, Optional, Union

from docfields.core import config

METRICS_COLUMNS = ["ts", "stage", "doc", "sub", "duration_ms", "count", "info"]

# None = метрики выключены
METRICS_PATH: Optional[str] = config.METRICS_PATH


class Timer:
    """Засекает время с момента создания; ms() можно вызывать много раз."""

    def __init__(self) -> None:
        self.start = time.perf_counter()

    def ms(self) -> int:
        return int((time.perf_counter() - self.start) * 1000)


def metrics_path_for(out_path: str) -> str:
    """results.csv -> results.metrics.csv"""
    base, _ = os.path.splitext(out_path)
    return f"{base}.metrics.csv"


def init_metrics(out_path: str) -> str:
    """
    Включает метрики для пакета, результаты которого пишутся в out_path.

    Файл метрик создаётся заново (с заголовком) рядом с out_path.

    Args:
        out_path: Путь к CSV с результатами

    Returns:
        Путь к файлу метрик
    """
    global METRICS_PATH

    path = metrics_path_for(out_path)
    with open(path, "w", newline="", encoding="utf-8") as f:
        csv.writer(f).writerow(METRICS_COLUMNS)

    METRICS_PATH = path
    return path


def disable_metrics() -> None:
    global METRICS_PATH
    METRICS_PATH = None


def _cell(value: Optional[int]) -> Union[int, str]:
    return "" if value is None else value


def log_metric(
    stage: str,
    doc: str = "",
    sub: str = "",
    duration_ms: Optional[int] = None,
    count: Optional[int] = None,
    info: str = "",
) -> None:
    """
    Добавляет строку метрики; ничего не делает, если метрики выключены.

    Этапы пайплайна: "fragments" (чтение PDF), "fields" (извлечение),
    "document" (ошибка документа), "batch" (итог пакета).
    """
    if not METRICS_PATH:
        return

    row: List[Union[int, str]] = [
        time.strftime("%Y-%m-%d %H:%M:%S"),
        stage,
        doc,
        sub,
        _cell(duration_ms),
        _cell(count),
        info,
    ]
    # Путь из DOCFIELDS_METRICS_PATH: файл может ещё не существовать
    needs_header = not os.path.exists(METRICS_PATH) or os.path.getsize(METRICS_PATH) == 0

    with open(METRICS_PATH, "a", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        if needs_header:
            w.writerow(METRICS_COLUMNS)
        w.writerow(row)
