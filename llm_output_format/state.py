from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from .errors import InvalidKind, MalformedState
from .fields import DEFAULT_TOP_LEVEL_KEY, Field, FieldKind

logger = logging.getLogger(__name__)

ITEMS_PARAM = "items"
TOP_LEVEL_KEY_PARAM = "topLevelKey"


class DecodedState(NamedTuple):
    fields: List[Field]
    top_level_key: Optional[str]


def field_to_state(field: Field) -> Dict[str, Any]:
    # Share links carry the kind under "type", the same property name the
    # generated schema uses.
    entry: Dict[str, Any] = {
        "key": field.key,
        "type": field.kind.value,
        "description": field.description,
    }
    if field.options is not None:
        entry["options"] = list(field.options)
    return entry


def field_from_state(entry: Any, position: int) -> Field:
    if not isinstance(entry, dict):
        raise MalformedState(f"Item {position} is not an object.")

    for name in ("key", "description"):
        if not isinstance(entry.get(name), str):
            raise MalformedState(f"Item {position} has no string '{name}'.")

    raw_kind = entry.get("type", entry.get("kind"))
    try:
        kind = FieldKind.parse(raw_kind)
    except InvalidKind as exc:
        raise MalformedState(f"Item {position}: {exc}") from exc

    options = entry.get("options")
    if options is not None:
        if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
            raise MalformedState(f"Item {position} has options that are not a list of strings.")
    if not kind.has_options:
        options = None

    return Field(key=entry["key"], kind=kind, description=entry["description"], options=options)


def encode_state(fields: Sequence[Field], top_level_key: str) -> Dict[str, str]:
    items = [field_to_state(f) for f in fields]
    # ASCII-only output; lone surrogates must survive URL encoding.
    return {
        ITEMS_PARAM: json.dumps(items, separators=(",", ":")),
        TOP_LEVEL_KEY_PARAM: top_level_key,
    }


def encode_query(fields: Sequence[Field], top_level_key: str) -> str:
    return urlencode(encode_state(fields, top_level_key))


def _param(params: Mapping[str, Any], name: str) -> Optional[str]:
    value = params.get(name)
    # parse_qs yields lists of values.
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    return value or None


def decode_state(params: Mapping[str, Any]) -> DecodedState:
    """Decode share-link query parameters into a field list.

    A missing `items` parameter is the "no state" case and yields an empty
    list. `top_level_key` is None when the parameter is absent; callers apply
    their own default. Raises MalformedState for anything that does not
    describe a list of fields.
    """
    top_level_key = _param(params, TOP_LEVEL_KEY_PARAM)
    raw_items = _param(params, ITEMS_PARAM)
    if raw_items is None:
        return DecodedState([], top_level_key)

    try:
        items = json.loads(raw_items)
    except (TypeError, ValueError, RecursionError) as exc:
        raise MalformedState(f"'{ITEMS_PARAM}' is not valid JSON: {exc}") from exc

    if not isinstance(items, list):
        raise MalformedState(f"'{ITEMS_PARAM}' must be a JSON array.")

    return DecodedState([field_from_state(entry, i) for i, entry in enumerate(items)], top_level_key)


def decode_query(query: Optional[str]) -> DecodedState:
    if query is None:
        query = ""
    return decode_state(parse_qs(query.lstrip("?"), keep_blank_values=True))


def load_state(params: Optional[Mapping[str, Any]]) -> DecodedState:
    """Hydrate page state, falling back to a fresh page on bad input."""
    try:
        fields, top_level_key = decode_state(params or {})
    except MalformedState as exc:
        logger.warning("Discarding malformed share state: %s", exc)
        return DecodedState([], DEFAULT_TOP_LEVEL_KEY)
    return DecodedState(fields, top_level_key or DEFAULT_TOP_LEVEL_KEY)


def build_share_url(base_url: str, fields: Sequence[Field], top_level_key: str) -> str:
    """Origin and path of `base_url` with the encoded state as its query string."""
    parts = urlsplit(base_url or "")
    return urlunsplit((parts.scheme, parts.netloc, parts.path, encode_query(fields, top_level_key), ""))
