"""
Загрузка и сохранение шаблонов в JSON.

Формат файла:

    {
      "name": "Facturas",
      "fields": [
        {"id": "1", "name": "Total", "anchorText": "Total",
         "stopRules": {"stopAtHeading": true, "stopAtNextField": true},
         "stopMarker": "IVA"},
        {"id": "2", "name": "Fecha", "mode": "absolute",
         "bbox": {"xmin": 10, "ymin": 5, "xmax": 40, "ymax": 8}}
      ]
    }

Ключи в snake_case тоже принимаются.
"""

from __future__ import annotations
import json
import os
from typing import Any, Dict, List, Optional

from docfields.core.exceptions import TemplateError
from docfields.core.models import FieldDefinition, PercentBBox, StopRules, Template
from docfields.core.types import FieldMode


def _get(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Возвращает значение первого найденного ключа."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _bbox_from_dict(data: Any, where: str) -> Optional[PercentBBox]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise TemplateError(f"{where}: bbox must be an object")
    try:
        return PercentBBox(
            xmin=float(data["xmin"]),
            ymin=float(data["ymin"]),
            xmax=float(data["xmax"]),
            ymax=float(data["ymax"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise TemplateError(f"{where}: invalid bbox {data!r}") from e


def _flag(data: Dict[str, Any], camel: str, snake: str, where: str) -> bool:
    # "false" из JSON - строка, bool("false") дал бы True
    value = _get(data, camel, snake, default=False)
    if not isinstance(value, bool):
        raise TemplateError(f"{where}: {camel} must be true or false, got {value!r}")
    return value


def _stop_rules_from_dict(data: Any, where: str) -> StopRules:
    if data is None:
        return StopRules()
    if not isinstance(data, dict):
        raise TemplateError(f"{where}: stopRules must be an object")

    max_lines = _get(data, "maxLines", "max_lines")
    if max_lines is not None:
        try:
            max_lines = int(max_lines)
        except (TypeError, ValueError) as e:
            raise TemplateError(f"{where}: invalid maxLines {max_lines!r}") from e

    return StopRules(
        stop_at_heading=_flag(data, "stopAtHeading", "stop_at_heading", where),
        stop_at_separator=_flag(data, "stopAtSeparator", "stop_at_separator", where),
        stop_at_empty_gap=_flag(data, "stopAtEmptyGap", "stop_at_empty_gap", where),
        stop_at_next_field=_flag(data, "stopAtNextField", "stop_at_next_field", where),
        max_lines=max_lines,
    )


def field_from_dict(data: Any, index: int = 0) -> FieldDefinition:
    """
    Создаёт FieldDefinition из сохранённой записи.

    Args:
        data: Словарь с полями записи
        index: Позиция поля в шаблоне (для id и имени по умолчанию)

    Returns:
        Определение поля

    Raises:
        TemplateError: Если запись некорректна
    """
    where = f"field #{index + 1}"
    if not isinstance(data, dict):
        raise TemplateError(f"{where}: expected an object, got {type(data).__name__}")

    anchor_text = str(_get(data, "anchorText", "anchor_text", default="") or "")
    bbox = _bbox_from_dict(_get(data, "relativeBBox", "relative_bbox", "bbox"), where)

    raw_mode = _get(data, "mode")
    if raw_mode is None:
        mode = FieldMode.ABSOLUTE if not anchor_text.strip() and bbox else FieldMode.RELATIVE
    else:
        try:
            mode = FieldMode(str(raw_mode).lower())
        except ValueError as e:
            raise TemplateError(f"{where}: unknown mode {raw_mode!r}") from e

    if mode == FieldMode.RELATIVE and not anchor_text.strip():
        raise TemplateError(f"{where}: relative field needs anchorText")
    if mode == FieldMode.ABSOLUTE and bbox is None:
        raise TemplateError(f"{where}: absolute field needs bbox")

    stop_marker = _get(data, "stopMarker", "stop_marker")

    return FieldDefinition(
        id=str(_get(data, "id", default=index + 1)),
        name=str(_get(data, "name", default=f"Field {index + 1}")),
        anchor_text=anchor_text,
        relative_bbox=bbox,
        stop_rules=_stop_rules_from_dict(_get(data, "stopRules", "stop_rules"), where),
        stop_marker=str(stop_marker) if stop_marker is not None else None,
        mode=mode,
    )


def field_to_dict(definition: FieldDefinition) -> Dict[str, Any]:
    """Сериализует FieldDefinition в запись с ключами camelCase."""
    rules = definition.stop_rules
    out: Dict[str, Any] = {
        "id": definition.id,
        "name": definition.name,
        "mode": definition.mode.value,
        "anchorText": definition.anchor_text,
        "stopRules": {
            "stopAtHeading": rules.stop_at_heading,
            "stopAtSeparator": rules.stop_at_separator,
            "stopAtEmptyGap": rules.stop_at_empty_gap,
            "stopAtNextField": rules.stop_at_next_field,
        },
    }
    if rules.max_lines is not None:
        out["stopRules"]["maxLines"] = rules.max_lines
    if definition.stop_marker is not None:
        out["stopMarker"] = definition.stop_marker
    if definition.relative_bbox is not None:
        b = definition.relative_bbox
        out["relativeBBox"] = {"xmin": b.xmin, "ymin": b.ymin, "xmax": b.xmax, "ymax": b.ymax}
    return out


def template_from_dict(data: Any, default_name: str = "") -> Template:
    """
    Создаёт Template из JSON-данных.

    Принимает объект {"name", "fields"} или просто список полей.
    """
    if isinstance(data, list):
        data = {"name": default_name, "fields": data}

    if not isinstance(data, dict) or not isinstance(data.get("fields"), list):
        raise TemplateError("template must contain a 'fields' list")

    fields: List[FieldDefinition] = [
        field_from_dict(item, i) for i, item in enumerate(data["fields"])
    ]
    return Template(name=str(data.get("name") or default_name), fields=fields)


def load_template(path: str) -> Template:
    """
    Загружает шаблон из JSON файла.

    Args:
        path: Путь к файлу шаблона

    Returns:
        Шаблон

    Raises:
        TemplateError: Если файл не читается или содержит некорректные данные
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise TemplateError(f"Cannot read template '{path}': {e}") from e

    default_name = os.path.splitext(os.path.basename(path))[0]
    return template_from_dict(data, default_name=default_name)


def save_template(template: Template, path: str) -> None:
    """
    Сохраняет шаблон в JSON файл.

    Args:
        template: Шаблон
        path: Путь к файлу

    Raises:
        TemplateError: Если файл не записывается
    """
    data = {
        "name": template.name,
        "fields": [field_to_dict(f) for f in template.fields],
    }
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
    except OSError as e:
        raise TemplateError(f"Cannot write template '{path}': {e}") from e
