"""
Модуль core: базовые модели, типы и конфигурация.
"""

from docfields.core.models import (
    TextFragment,
    Line,
    Paragraph,
    StopRules,
    PercentBBox,
    FieldDefinition,
    Template,
    ContentColumn,
    DocumentResult,
)
from docfields.core.types import BBox, FieldMode, DocumentStatus
from docfields.core.config import (
    DEFAULT_PAGE,
    DEFAULT_RENDER_SCALE,
    LOG_LEVEL,
    METRICS_PATH,
)
from docfields.core.exceptions import (
    DocFieldsError,
    PDFProcessingError,
    TemplateError,
    ExportError,
)
from docfields.core.templates import (
    field_from_dict,
    field_to_dict,
    load_template,
    save_template,
    template_from_dict,
)

__all__ = [
    # Models
    "TextFragment",
    "Line",
    "Paragraph",
    "StopRules",
    "PercentBBox",
    "FieldDefinition",
    "Template",
    "ContentColumn",
    "DocumentResult",
    # Types
    "BBox",
    "FieldMode",
    "DocumentStatus",
    # Config
    "DEFAULT_PAGE",
    "DEFAULT_RENDER_SCALE",
    "LOG_LEVEL",
    "METRICS_PATH",
    # Exceptions
    "DocFieldsError",
    "PDFProcessingError",
    "TemplateError",
    "ExportError",
    # Templates
    "field_from_dict",
    "field_to_dict",
    "load_template",
    "save_template",
    "template_from_dict",
]
