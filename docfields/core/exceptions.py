"""
Кастомные исключения для docfields.

Ядро (построение layout и извлечение полей) исключений не выбрасывает;
эти классы используются источником фрагментов, загрузкой шаблонов и экспортом.
"""


class DocFieldsError(Exception):
    """Базовое исключение для всех ошибок docfields."""

    pass


class PDFProcessingError(DocFieldsError):
    """Ошибка при открытии PDF или чтении текстового слоя страницы."""

    pass


class TemplateError(DocFieldsError):
    """Ошибка в файле шаблона или в записи определения поля."""

    pass


class ExportError(DocFieldsError):
    """Ошибка при экспорте результатов."""

    pass
