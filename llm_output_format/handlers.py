from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import gradio as gr

from .config import load_settings
from .fields import (
    DEFAULT_TOP_LEVEL_KEY,
    KIND_LABELS,
    Field,
    add_field,
    add_option,
    delete_field,
    delete_option,
    duplicate_field,
    move_field,
    set_description,
    set_key,
    set_kind,
    set_option,
)
from .schema_builder import render_schema
from .state import build_share_url, load_state

logger = logging.getLogger(__name__)

# Dropdown choices as (label, value) pairs; the value is the wire name of the kind.
KIND_CHOICES: List[Tuple[str, str]] = [(label, kind.value) for kind, label in KIND_LABELS.items()]


def _query_params(request: Optional[gr.Request]) -> Dict[str, Any]:
    if request is None:
        return {}
    params = getattr(request, "query_params", None)
    return dict(params) if params else {}


def load_fields_from_request(revision: int, request: gr.Request):
    """Hydrate the editor from the page's `?items=...&topLevelKey=...` query."""
    fields, top_level_key = load_state(_query_params(request))
    if fields:
        logger.info("Loaded %d item(s) from share link", len(fields))
    return fields, top_level_key, (revision or 0) + 1


# Structural edits bump the revision so the editor re-renders.

def handle_add_field(fields: List[Field], revision: int):
    return add_field(fields or []), (revision or 0) + 1


def handle_delete_field(index: int, fields: List[Field], revision: int):
    return delete_field(fields or [], index), (revision or 0) + 1


def handle_duplicate_field(index: int, fields: List[Field], revision: int):
    return duplicate_field(fields or [], index), (revision or 0) + 1


def handle_move_field(index: int, offset: int, fields: List[Field], revision: int):
    return move_field(fields or [], index, offset), (revision or 0) + 1


def handle_kind_change(index: int, value: str, fields: List[Field], revision: int):
    return set_kind(fields or [], index, value), (revision or 0) + 1


def handle_add_option(index: int, fields: List[Field], revision: int):
    return add_option(fields or [], index), (revision or 0) + 1


def handle_delete_option(item_index: int, option_index: int, fields: List[Field], revision: int):
    return delete_option(fields or [], item_index, option_index), (revision or 0) + 1


# Text edits only replace the state; re-rendering would steal input focus.

def handle_key_change(index: int, value: str, fields: List[Field]):
    return set_key(fields or [], index, value or "")


def handle_description_change(index: int, value: str, fields: List[Field]):
    return set_description(fields or [], index, value or "")


def handle_option_change(item_index: int, option_index: int, value: str, fields: List[Field]):
    return set_option(fields or [], item_index, option_index, value or "")


def resolve_share_base_url(request: Optional[gr.Request], configured: Optional[str] = None) -> str:
    """Page URL that share links point at.

    A configured base URL wins; otherwise the browser's referer (the page the
    UI is served from), then the URL of the request itself.
    """
    if configured:
        return configured
    if request is None:
        return ""
    headers = getattr(request, "headers", None) or {}
    referer = headers.get("referer")
    if referer:
        return referer
    url = getattr(request, "url", None)
    return str(url) if url else ""


def generate_schema_handler(fields: List[Field], top_level_key: str, request: gr.Request):
    fields = fields or []
    top_level_key = top_level_key or DEFAULT_TOP_LEVEL_KEY

    schema_text = render_schema(fields, top_level_key)
    base_url = resolve_share_base_url(request, load_settings().base_url)
    share_url = build_share_url(base_url, fields, top_level_key)

    logger.info("Generated schema for %d item(s) under '%s'", len(fields), top_level_key)
    status = "Generated schema!"
    empty_keys = sum(1 for f in fields if not f.key)
    if empty_keys:
        status += f" Warning: {empty_keys} item(s) have an empty key."
    return schema_text, share_url, status
