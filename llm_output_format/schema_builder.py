from __future__ import annotations

import json
from typing import Any, Dict, Sequence

from .fields import Field, FieldKind


def build_value_schema(field: Field) -> Dict[str, Any]:
    """Schema for the `payload.value` of one field.

    Select kinds constrain the value with an enum of the field's options, in
    order and without deduplication. A select field whose options were never
    defined gets no `enum` at all, while an empty options tuple yields
    `"enum": []`.
    """
    value: Dict[str, Any] = {
        "type": "array" if field.kind is FieldKind.multiple_select else "string",
    }
    if field.kind.has_options:
        items: Dict[str, Any] = {"type": "string"}
        if field.options is not None:
            items["enum"] = list(field.options)
        value["items"] = items
    return value


def build_field_variant(field: Field) -> Dict[str, Any]:
    return {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "type": {"const": field.kind.value},
            "key": {"const": field.key},
            "description": {"const": field.description},
            "payload": {
                "type": "object",
                "properties": {
                    "value": build_value_schema(field),
                },
                "required": ["value"],
            },
        },
        "required": ["type", "key", "description", "payload"],
    }


def build_schema(fields: Sequence[Field], top_level_key: str) -> Dict[str, Any]:
    """Build the JSON Schema document for a field list.

    The result wraps an `items` array under `top_level_key`; each array entry
    must match one of the per-field variants, which appear in `oneOf` in the
    same order as `fields`.
    """
    return {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            top_level_key: {
                "type": "object",
                "additionalProperties": False,
                "properties": {
                    "items": {
                        "type": "array",
                        "additionalProperties": False,
                        "items": {
                            "oneOf": [build_field_variant(f) for f in fields],
                        },
                    },
                },
                "required": ["items"],
            },
        },
        "required": [top_level_key],
    }


def render_schema(fields: Sequence[Field], top_level_key: str) -> str:
    return json.dumps(build_schema(fields, top_level_key), indent=2, ensure_ascii=False)
