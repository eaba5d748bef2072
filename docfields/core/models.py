"""
Модели данных для docfields.

Этот модуль содержит все dataclass модели, используемые в приложении.
"""

from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from docfields.core.types import BBox, DocumentStatus, FieldMode


@dataclass
class TextFragment:
    """
    Позиционированный фрагмент текста страницы.

    Координаты в пикселях страницы, начало координат слева сверху.

    Attributes:
        text: Текстовое содержимое фрагмента
        x: Левая координата
        y: Верхняя координата
        w: Ширина (>= 0)
        h: Высота (> 0)
    """

    text: str
    x: float
    y: float
    w: float
    h: float


class _Boxed:
    """Производные координаты для моделей с полем bbox (x0, y0, x1, y1)."""

    bbox: BBox

    @property
    def x(self) -> float:
        return self.bbox[0]

    @property
    def y(self) -> float:
        return self.bbox[1]

    @property
    def width(self) -> float:
        return self.bbox[2] - self.bbox[0]

    @property
    def height(self) -> float:
        return self.bbox[3] - self.bbox[1]

    @property
    def bottom(self) -> float:
        return self.bbox[3]


@dataclass
class Line(_Boxed):
    """
    Визуальная строка: фрагменты, лежащие на одной высоте.

    Attributes:
        fragments: Фрагменты строки в порядке чтения
        bbox: Ограничивающий прямоугольник (x0, y0, x1, y1)
        result: Текст фрагментов, объединённый одиночным пробелом
    """

    fragments: List[TextFragment]
    bbox: BBox
    result: str


@dataclass
class Paragraph(_Boxed):
    """
    Абзац: подряд идущие строки без большого зазора и с одним стилем.

    Флаги is_heading / is_separator / is_footer независимы и
    выставляются проходами структурного классификатора.

    Attributes:
        lines: Строки абзаца
        bbox: Ограничивающий прямоугольник абзаца
        style_key: Класс размера шрифта (округлённая средняя высота фрагментов)
        text: Объединённый текст строк
        id: Уникальный идентификатор
    """

    lines: List[Line]
    bbox: BBox
    style_key: int
    text: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    is_heading: bool = False
    is_separator: bool = False
    is_footer: bool = False


@dataclass
class StopRules:
    """
    Независимо включаемые условия окончания значения поля.

    Attributes:
        stop_at_heading: Остановиться на заголовке
        stop_at_separator: Остановиться на разделителе (----, ____)
        stop_at_empty_gap: Остановиться на большом пустом зазоре
        stop_at_next_field: Остановиться на якоре другого поля
        max_lines: Максимальное число строк значения (None = без ограничения)
    """

    stop_at_heading: bool = False
    stop_at_separator: bool = False
    stop_at_empty_gap: bool = False
    stop_at_next_field: bool = False
    max_lines: Optional[int] = None


@dataclass
class PercentBBox:
    """Прямоугольник в процентах от размеров страницы (0-100)."""

    xmin: float
    ymin: float
    xmax: float
    ymax: float


@dataclass
class FieldDefinition:
    """
    Определение поля шаблона.

    Attributes:
        id: Идентификатор поля
        name: Имя поля (колонка в результатах)
        anchor_text: Текст метки, после которой начинается значение
        relative_bbox: Положение на исходной странице в процентах
        stop_rules: Условия окончания значения
        stop_marker: Явный текст, на котором значение заканчивается
        mode: relative (якорь + правила) или absolute (пересечение с bbox)
    """

    id: str
    name: str
    anchor_text: str = ""
    relative_bbox: Optional[PercentBBox] = None
    stop_rules: StopRules = field(default_factory=StopRules)
    stop_marker: Optional[str] = None
    mode: FieldMode = FieldMode.RELATIVE


@dataclass
class Template:
    """Именованный набор определений полей."""

    name: str
    fields: List[FieldDefinition] = field(default_factory=list)

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]


@dataclass
class ContentColumn:
    """Горизонтальные границы содержимого, относящегося к якорю."""

    left: float
    right: float


@dataclass
class DocumentResult:
    """
    Результат применения шаблона к одному документу.

    Attributes:
        file_name: Имя файла документа
        data: Значения полей по имени поля
        status: success или error
        error: Сообщение об ошибке (для status=error)
    """

    file_name: str
    data: Dict[str, str] = field(default_factory=dict)
    status: DocumentStatus = DocumentStatus.SUCCESS
    error: str = ""
