"""
Модуль export: экспорт результатов.
"""

from docfields.export.csv import export_batch_csv

__all__ = [
    "export_batch_csv",
]
