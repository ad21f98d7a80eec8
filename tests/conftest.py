from __future__ import annotations

import pytest

from llm_output_format.fields import Field, FieldKind


@pytest.fixture()
def sample_fields() -> list[Field]:
    return [
        Field(key="summary", kind=FieldKind.text, description="one line summary"),
        Field(key="mood", kind=FieldKind.single_select, description="user mood", options=("happy", "sad")),
        Field(key="tags", kind=FieldKind.multiple_select, description="topics", options=("a", "b", "a")),
    ]
