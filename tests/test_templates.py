"""Unit tests for template file loading and saving."""

import json

import pytest

from docfields.core.exceptions import TemplateError
from docfields.core.models import FieldDefinition, PercentBBox, StopRules, Template
from docfields.core.templates import (
    field_from_dict,
    load_template,
    save_template,
    template_from_dict,
)
from docfields.core.types import FieldMode


def test_loads_camel_case_records(tmp_path):
    path = tmp_path / "facturas.json"
    path.write_text(
        json.dumps(
            {
                "name": "Facturas",
                "fields": [
                    {
                        "id": "f1",
                        "name": "Total",
                        "anchorText": "Total",
                        "stopRules": {"stopAtHeading": True, "stopAtNextField": True, "maxLines": 3},
                        "stopMarker": "IVA",
                        "relativeBBox": {"xmin": 1, "ymin": 2, "xmax": 3, "ymax": 4},
                    },
                    {"name": "Fecha", "bbox": {"xmin": 10, "ymin": 5, "xmax": 40, "ymax": 8}},
                ],
            }
        ),
        encoding="utf-8",
    )

    template = load_template(str(path))

    assert template.name == "Facturas"
    total, fecha = template.fields
    assert total.stop_rules == StopRules(
        stop_at_heading=True, stop_at_next_field=True, max_lines=3
    )
    assert total.stop_marker == "IVA"
    assert total.relative_bbox == PercentBBox(1, 2, 3, 4)
    assert total.mode == FieldMode.RELATIVE
    assert fecha.mode == FieldMode.ABSOLUTE
    assert fecha.id == "2"


def test_snake_case_keys_and_defaults():
    field = field_from_dict({"anchor_text": "Customer", "stop_rules": {"stop_at_empty_gap": True}}, 4)

    assert field.id == "5"
    assert field.name == "Field 5"
    assert field.stop_rules.stop_at_empty_gap is True
    assert field.stop_marker is None

    off = field_from_dict({"anchorText": "A", "stopRules": {"stopAtHeading": False}})
    assert off.stop_rules.stop_at_heading is False


def test_bare_list_uses_file_name(tmp_path):
    path = tmp_path / "orders.json"
    path.write_text(json.dumps([{"name": "PO", "anchorText": "Order"}]), encoding="utf-8")

    template = load_template(str(path))

    assert template.name == "orders"
    assert template.field_names == ["PO"]


@pytest.mark.parametrize(
    "record",
    [
        {"name": "no anchor"},
        {"name": "x", "mode": "absolute", "anchorText": "A"},
        {"name": "x", "mode": "sideways", "anchorText": "A"},
        {"name": "x", "anchorText": "A", "bbox": {"xmin": 1}},
        {"name": "x", "anchorText": "A", "stopRules": {"maxLines": "many"}},
        {"name": "x", "anchorText": "A", "stopRules": {"stopAtHeading": "false"}},
        {"name": "x", "anchorText": "A", "stopRules": {"stop_at_empty_gap": 1}},
        "not a record",
    ],
)
def test_invalid_records_raise(record):
    with pytest.raises(TemplateError):
        field_from_dict(record)


def test_invalid_files_raise(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    with pytest.raises(TemplateError):
        load_template(str(broken))
    with pytest.raises(TemplateError):
        load_template(str(tmp_path / "missing.json"))
    with pytest.raises(TemplateError):
        template_from_dict({"name": "no fields"})


def test_save_then_load_keeps_definitions(tmp_path):
    template = Template(
        name="Pedidos",
        fields=[
            FieldDefinition(
                id="1",
                name="Cliente",
                anchor_text="Cliente",
                stop_rules=StopRules(stop_at_separator=True, max_lines=2),
                stop_marker="Dirección",
            ),
            FieldDefinition(
                id="2",
                name="Fecha",
                relative_bbox=PercentBBox(10, 5, 40, 8),
                mode=FieldMode.ABSOLUTE,
            ),
        ],
    )
    path = tmp_path / "pedidos.json"

    save_template(template, str(path))

    assert load_template(str(path)) == template
    assert "Dirección" in path.read_text(encoding="utf-8")
