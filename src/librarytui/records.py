from __future__ import annotations

import json
from typing import Any

from .library import (
    DEFAULT_CAPABILITIES,
    Capabilities,
    Category,
    Document,
    DownloadMethod,
    Item,
)


class RecordError(ValueError):
    pass


_METHODS_BY_NAME = {method.value.casefold(): method for method in DownloadMethod}


def parse_record_text(
    text: str,
    capabilities: Capabilities = DEFAULT_CAPABILITIES,
    *,
    source: str = "<record>",
) -> list[Item]:
    text = text.lstrip("\ufeff").strip()
    if not text:
        return []
    if "\n" not in text:
        return [_decode_line(text, capabilities, source, 1)]
    items: list[Item] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        items.append(_decode_line(line, capabilities, source, line_no))
    return items


def item_from_record(
    data: Any, capabilities: Capabilities = DEFAULT_CAPABILITIES
) -> Item:
    if not isinstance(data, dict) or len(data) != 1:
        raise RecordError("Record must be an object with a single Document or Category key")
    tag, body = next(iter(data.items()))
    if not isinstance(body, dict):
        raise RecordError(f"{tag} record body must be an object")
    if tag == "Document":
        return _document_from_body(body, capabilities)
    if tag == "Category":
        return _category_from_body(body, capabilities)
    raise RecordError(f"Unknown record type: {tag}")


def item_to_record(item: Item) -> dict[str, Any]:
    if isinstance(item, Document):
        return {
            "Document": {
                "name": item.name,
                "url": item.url,
                "size": item.size,
                "download_type": item.method.value,
            }
        }
    return {
        "Category": {
            "name": item.name,
            "items": [item_to_record(child) for child in item.items],
            "single_selection": item.single_selection,
        }
    }


def _decode_line(line: str, capabilities: Capabilities, source: str, line_no: int) -> Item:
    try:
        data = json.loads(line)
    except json.JSONDecodeError as exc:
        raise RecordError(f"{source}:{line_no}: invalid JSON ({exc.msg})") from exc
    try:
        return item_from_record(data, capabilities)
    except RecordError as exc:
        raise RecordError(f"{source}:{line_no}: {exc}") from exc


def _document_from_body(body: dict[str, Any], capabilities: Capabilities) -> Document:
    name = _require_str(body, "name", "Document")
    url = _require_str(body, "url", f"Document {name!r}")
    size = body.get("size")
    if isinstance(size, bool) or not isinstance(size, int) or size < 0:
        raise RecordError(f"Document {name!r} needs a non-negative integer size")
    method = _parse_method(body.get("download_type"), name)
    document = Document(name=name, url=url, size=size, method=method, capabilities=capabilities)
    return document


def _category_from_body(body: dict[str, Any], capabilities: Capabilities) -> Category:
    name = _require_str(body, "name", "Category")
    raw_items = body.get("items", [])
    if not isinstance(raw_items, list):
        raise RecordError(f"Category {name!r} items must be a list")
    single_selection = body.get("single_selection", False)
    if not isinstance(single_selection, bool):
        raise RecordError(f"Category {name!r} single_selection must be a boolean")
    items = [item_from_record(child, capabilities) for child in raw_items]
    # empty categories are never stored
    items = [item for item in items if not (isinstance(item, Category) and not item.items)]
    return Category(name, items, single_selection)


def _parse_method(value: Any, name: str) -> DownloadMethod:
    if not isinstance(value, str):
        raise RecordError(f"Document {name!r} needs a download_type")
    method = _METHODS_BY_NAME.get(value.strip().casefold())
    if method is None:
        raise RecordError(f"Document {name!r} has unknown download_type: {value}")
    return method


def _require_str(body: dict[str, Any], key: str, context: str) -> str:
    value = body.get(key)
    if not isinstance(value, str) or not value.strip():
        raise RecordError(f"{context} needs a non-empty {key}")
    return value.strip()
