from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Callable, List, Optional, Sequence, Tuple

from .errors import IndexOutOfRange, InvalidKind

logger = logging.getLogger(__name__)

DEFAULT_TOP_LEVEL_KEY = "result"


class FieldKind(StrEnum):
    text = "text"
    single_select = "singleSelect"
    multiple_select = "multipleSelect"

    @classmethod
    def parse(cls, value) -> "FieldKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidKind(value) from None

    @property
    def has_options(self) -> bool:
        return self is not FieldKind.text


KIND_LABELS = {
    FieldKind.text: "Text",
    FieldKind.single_select: "Single Select",
    FieldKind.multiple_select: "Multi Select",
}


@dataclass(frozen=True, slots=True)
class Field:
    """One user-defined item of the output format.

    `options` is None when absent, which is not the same as an empty tuple.
    """

    key: str = ""
    kind: FieldKind = FieldKind.text
    description: str = ""
    options: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", FieldKind.parse(self.kind))
        # Text fields never carry options.
        if not self.kind.has_options:
            object.__setattr__(self, "options", None)
        elif self.options is not None:
            object.__setattr__(self, "options", tuple(self.options))


FieldList = List[Field]


def _check_index(items: Sequence, index: int) -> None:
    # Negative indexes are out of range, never counted from the end.
    if not isinstance(index, int) or not 0 <= index < len(items):
        raise IndexOutOfRange(index, len(items))


def _replace_at(fields: Sequence[Field], index: int, update: Callable[[Field], Field]) -> FieldList:
    new_fields = list(fields)
    try:
        _check_index(fields, index)
    except IndexOutOfRange as exc:
        logger.debug("Ignoring field edit: %s", exc)
        return new_fields
    new_fields[index] = update(fields[index])
    return new_fields


def add_field(fields: Sequence[Field]) -> FieldList:
    return [*fields, Field()]


def delete_field(fields: Sequence[Field], index: int) -> FieldList:
    try:
        _check_index(fields, index)
    except IndexOutOfRange as exc:
        logger.debug("Ignoring delete: %s", exc)
        return list(fields)
    return [f for i, f in enumerate(fields) if i != index]


def duplicate_field(fields: Sequence[Field], index: int) -> FieldList:
    """Insert a copy of `fields[index]` right after it."""
    new_fields = list(fields)
    try:
        _check_index(fields, index)
    except IndexOutOfRange as exc:
        logger.debug("Ignoring duplicate: %s", exc)
        return new_fields
    # Options are tuples, so the copy shares nothing mutable with the original.
    new_fields.insert(index + 1, replace(fields[index]))
    return new_fields


def move_field(fields: Sequence[Field], index: int, offset: int) -> FieldList:
    """Move a field `offset` positions (negative moves up), clamped to the list bounds."""
    new_fields = list(fields)
    try:
        _check_index(fields, index)
    except IndexOutOfRange as exc:
        logger.debug("Ignoring move: %s", exc)
        return new_fields
    target = min(max(index + offset, 0), len(new_fields) - 1)
    if target != index:
        new_fields.insert(target, new_fields.pop(index))
    return new_fields


def set_key(fields: Sequence[Field], index: int, value: str) -> FieldList:
    return _replace_at(fields, index, lambda f: replace(f, key=value))


def set_description(fields: Sequence[Field], index: int, value: str) -> FieldList:
    return _replace_at(fields, index, lambda f: replace(f, description=value))


def set_kind(fields: Sequence[Field], index: int, value) -> FieldList:
    """Change a field's kind; unknown kinds leave the field as it was.

    Switching to text drops the options. Switching between select kinds keeps
    them, and a field switched from text starts with no options at all.
    """
    try:
        kind = FieldKind.parse(value)
    except InvalidKind as exc:
        logger.debug("Rejected kind change: %s", exc)
        return list(fields)

    def update(field: Field) -> Field:
        options = field.options if kind.has_options else None
        return replace(field, kind=kind, options=options)

    return _replace_at(fields, index, update)


def set_option(fields: Sequence[Field], item_index: int, option_index: int, value: str) -> FieldList:
    def update(field: Field) -> Field:
        options = list(field.options or ())
        try:
            _check_index(options, option_index)
        except IndexOutOfRange as exc:
            logger.debug("Ignoring option edit: %s", exc)
            return field
        options[option_index] = value
        return replace(field, options=tuple(options))

    return _replace_at(fields, item_index, update)


def add_option(fields: Sequence[Field], item_index: int) -> FieldList:
    def update(field: Field) -> Field:
        if not field.kind.has_options:
            logger.debug("Ignoring option add on text field %d", item_index)
            return field
        return replace(field, options=(*(field.options or ()), ""))

    return _replace_at(fields, item_index, update)


def delete_option(fields: Sequence[Field], item_index: int, option_index: int) -> FieldList:
    def update(field: Field) -> Field:
        options = list(field.options or ())
        try:
            _check_index(options, option_index)
        except IndexOutOfRange as exc:
            logger.debug("Ignoring option delete: %s", exc)
            return field
        del options[option_index]
        return replace(field, options=tuple(options))

    return _replace_at(fields, item_index, update)
