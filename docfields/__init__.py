"""
docfields: извлечение именованных полей из однотипных PDF документов.

Поле описывается текстом-якорем и правилами остановки; значение
ищется относительно якоря, а не по абсолютным координатам.
"""

__version__ = "0.1.0"
