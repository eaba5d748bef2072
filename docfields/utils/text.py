"""
Утилиты для обработки текста.

Этот модуль содержит функции нормализации и очистки текстовых значений.
"""

from __future__ import annotations
import math
import re
from typing import Iterable, List

_LEADING_LABEL_NOISE_RE = re.compile(r"^[:\s]+")


def normalize_key(text: str) -> str:
    """
    Нормализует текст для сравнения без учёта регистра.

    Args:
        text: Исходный текст

    Returns:
        Обрезанный текст в casefold
    """
    return (text or "").strip().casefold()


def normalized_anchors(anchors: Iterable[str]) -> List[str]:
    """Нормализует список якорей, отбрасывая пустые."""
    out: List[str] = []
    for anchor in anchors:
        key = normalize_key(anchor)
        if key and key not in out:
            out.append(key)
    return out


def round_half_up(value: float) -> int:
    """Округляет x.5 вверх (в отличие от банковского round())."""
    return int(math.floor(value + 0.5))


def clean_text_inplace(text: str) -> str:
    """
    Очищает текст от мягких переносов и лишних пробелов.

    Args:
        text: Исходный текст

    Returns:
        Очищенный текст
    """
    if not text:
        return text

    # Удаляем мягкий перенос (U+00AD) и неразрывный пробел (U+00A0)
    text = text.replace("\u00ad", "").replace("\u00a0", " ")

    return " ".join(text.split())


def strip_field_label(value: str, name: str) -> str:
    """
    Убирает повтор имени поля в начале значения.

    Пример: "Factura: 12345" для поля "Factura" -> "12345".

    Args:
        value: Извлечённое значение
        name: Имя поля

    Returns:
        Значение без ведущей метки
    """
    if not name or not value:
        return value

    if value.lower().startswith(name.lower()):
        value = value[len(name) :]
        value = _LEADING_LABEL_NOISE_RE.sub("", value)

    return value
