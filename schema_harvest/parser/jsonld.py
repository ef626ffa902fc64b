# === FILE: schema_harvest/parser/jsonld.py ===
"""JSON-LD block extraction for SchemaHarvest.

Two small steps, kept separate so that one broken block fails alone:

* :func:`extract_blocks`: find every ``<script type="application/ld+json">``
  in a page and return its raw text, in document order.
* :func:`decode_block`: decode one raw candidate; raises
  :class:`~schema_harvest.errors.BlockDecodeError` on failure so that a broken
  block never hides its neighbours.

Zero blocks is a normal outcome, not an error.
"""
from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import Tag

from schema_harvest.errors import BlockDecodeError

__all__: Sequence[str] = ("JSONLD_MIME", "extract_blocks", "decode_block")

JSONLD_MIME = "application/ld+json"


def _is_jsonld(type_attr: Any) -> bool:
    return isinstance(type_attr, str) and type_attr.strip().lower() == JSONLD_MIME


def extract_blocks(document: Any) -> list[str]:
    """Return raw text of every JSON-LD script in *document*.

    Parameters
    ----------
    document
        Either a *str* (HTML markup) **or** a ``PageData`` object with a
        ``content`` attribute.
    """
    html = document.content if hasattr(document, "content") else document
    if isinstance(html, bytes):
        html = html.decode("utf-8", errors="replace")

    soup = BeautifulSoup(html or "", "html.parser")
    blocks: list[str] = []
    for tag in soup.find_all("script", attrs={"type": _is_jsonld}):
        if not isinstance(tag, Tag):
            continue
        text = tag.string if tag.string is not None else tag.get_text()
        blocks.append(str(text))
    return blocks


def decode_block(text: str) -> dict[str, Any]:
    """Decode a JSON-LD candidate into a mapping.

    A top-level array (several entities in one script) is wrapped as
    ``{"@graph": [...]}``; scalars and empty input are rejected.
    """
    stripped = (text or "").strip()
    if not stripped:
        raise BlockDecodeError("empty JSON-LD block")
    try:
        value = json.loads(stripped)
    except json.JSONDecodeError as exc:
        raise BlockDecodeError(str(exc)) from exc

    if isinstance(value, dict):
        return value
    if isinstance(value, list):
        return {"@graph": value}
    raise BlockDecodeError(f"expected a JSON object, got {type(value).__name__}")
