from __future__ import annotations

import json

from llm_output_format.fields import Field, FieldKind, duplicate_field, move_field
from llm_output_format.schema_builder import build_field_variant, build_schema, render_schema


def _variants(schema: dict, top_level_key: str = "result") -> list:
    return schema["properties"][top_level_key]["properties"]["items"]["items"]["oneOf"]


def test_mood_example_value_schema() -> None:
    fields = [Field(key="mood", kind=FieldKind.single_select, description="user mood", options=["happy", "sad"])]
    schema = json.loads(render_schema(fields, "result"))

    value = _variants(schema)[0]["properties"]["payload"]["properties"]["value"]
    assert value == {"type": "string", "items": {"type": "string", "enum": ["happy", "sad"]}}
    assert schema["required"] == ["result"]


def test_document_shape_and_key_order() -> None:
    schema = build_schema([], "answer")
    assert list(schema) == ["type", "additionalProperties", "properties", "required"]
    assert schema["required"] == ["answer"]

    wrapper = schema["properties"]["answer"]
    assert wrapper["additionalProperties"] is False
    assert wrapper["required"] == ["items"]
    assert wrapper["properties"]["items"] == {
        "type": "array",
        "additionalProperties": False,
        "items": {"oneOf": []},
    }


def test_variant_for_text_field_has_no_items() -> None:
    variant = build_field_variant(Field(key="summary", description="short"))
    props = variant["properties"]
    assert list(props) == ["type", "key", "description", "payload"]
    assert props["type"] == {"const": "text"}
    assert props["key"] == {"const": "summary"}
    assert props["description"] == {"const": "short"}
    assert props["payload"]["properties"]["value"] == {"type": "string"}
    assert props["payload"]["required"] == ["value"]
    assert variant["required"] == ["type", "key", "description", "payload"]


def test_variant_for_multiple_select_is_array_enum_in_order() -> None:
    field = Field(key="tags", kind=FieldKind.multiple_select, description="", options=("b", "a", "b"))
    value = build_field_variant(field)["properties"]["payload"]["properties"]["value"]
    assert value == {"type": "array", "items": {"type": "string", "enum": ["b", "a", "b"]}}


def test_select_without_options_omits_enum() -> None:
    value = build_field_variant(Field(kind=FieldKind.single_select))["properties"]["payload"]["properties"]["value"]
    assert value == {"type": "string", "items": {"type": "string"}}


def test_select_with_empty_options_emits_empty_enum() -> None:
    field = Field(kind=FieldKind.multiple_select, options=())
    value = build_field_variant(field)["properties"]["payload"]["properties"]["value"]
    assert value["items"]["enum"] == []


def test_one_of_follows_field_order(sample_fields) -> None:
    keys = [v["properties"]["key"]["const"] for v in _variants(build_schema(sample_fields, "result"))]
    assert keys == ["summary", "mood", "tags"]

    reordered = move_field(sample_fields, 2, -2)
    keys = [v["properties"]["key"]["const"] for v in _variants(build_schema(reordered, "result"))]
    assert keys == ["tags", "summary", "mood"]


def test_duplicate_then_delete_only_shifts_positions(sample_fields) -> None:
    before = _variants(build_schema(sample_fields, "result"))
    after = _variants(build_schema(duplicate_field(sample_fields, 0), "result"))
    assert after[0] == after[1] == before[0]
    assert after[2:] == before[1:]


def test_render_uses_two_space_indent_and_keeps_unicode() -> None:
    text = render_schema([Field(key="気分", description="ümlaut")], "result")
    assert text.startswith('{\n  "type": "object",\n  "additionalProperties": false,')
    assert "気分" in text
    assert "ümlaut" in text


def test_empty_keys_are_not_rejected() -> None:
    schema = build_schema([Field()], "")
    assert schema["required"] == [""]
    assert _variants(schema, "")[0]["properties"]["key"] == {"const": ""}
