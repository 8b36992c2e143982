# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : serializers.py
#   file_relpath : src/forge_jsonapi/serializers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pure JSON serialization utilities for encoded documents.

This module converts *already-encoded* documents (or any payload exposing
``to_dict()``) into JSON text, and exposes the JSON:API request headers the
transport collaborator sends along.

It is intentionally:
- Click-free and console-free (no printing)
- side-effect-free (serialization only)

Normalization rules:
- `datetime` / `date` / `time` -> ISO 8601 string
- `Enum` -> `Enum.value`
- `Path` -> `str`
- objects with `.to_dict()` -> normalize of that mapping
- mappings -> dict with stringified keys and normalized values
- sequences/sets -> lists of normalized values
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, cast

from forge_jsonapi.constants import HEADER_ACCEPT, HEADER_CONTENT_TYPE, MEDIA_TYPE


def normalize_payload(obj: object) -> object:
    """Normalize a payload into JSON-serializable structures.

    Notes:
      - Transformers normally produce wire values already; this pass only
        catches leftovers (e.g. a date in an untransformed attribute).
      - Mapping keys are stringified to keep JSON object keys valid.

    Args:
        obj: The payload object to normalize.

    Returns:
        A JSON-serializable representation of `obj`.
    """
    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()

    if isinstance(obj, Enum):
        return normalize_payload(obj.value)

    if isinstance(obj, Path):
        return str(obj)

    if isinstance(obj, Decimal):
        return str(obj)

    to_dict: Any | None = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return normalize_payload(to_dict())

    if isinstance(obj, Mapping):
        mapping: Mapping[object, Any] = cast("Mapping[object, Any]", obj)
        return {str(k): normalize_payload(v) for k, v in mapping.items()}

    if isinstance(obj, (list, tuple, set, frozenset)):
        return [normalize_payload(v) for v in cast("list[object]", obj)]

    return obj


def serialize_document(doc: object, *, indent: int | None = None) -> str:
    """Serialize an encoded document to JSON text (no trailing newline).

    Args:
        doc: A [`Document`][forge_jsonapi.document.Document] or any payload
            accepted by `normalize_payload`.
        indent: Indentation for pretty-printing; ``None`` for compact output.

    Returns:
        The JSON string.
    """
    normalized: object = normalize_payload(doc)
    separators: tuple[str, str] | None = None if indent is not None else (",", ":")
    # json.dumps() doesn't append a trailing newline
    return json.dumps(normalized, indent=indent, separators=separators, ensure_ascii=False)


def request_headers() -> dict[str, str]:
    """Return the JSON:API content-negotiation headers for a request.

    Returns:
        dict[str, str]: ``Content-Type`` and ``Accept`` set to the JSON:API media type.
    """
    return {
        HEADER_CONTENT_TYPE: MEDIA_TYPE,
        HEADER_ACCEPT: MEDIA_TYPE,
    }
