"""
Schema-less documents.

Several records carry opaque key/value payloads (special initiative rules,
position data, resources used). The heuristics only ever read a handful of
optional fields out of them, so a document is kept as a plain mapping and
read through typed accessors that treat a missing or wrongly-typed field as
absent.
"""

import json
import math
from typing import Any, Mapping

Document = dict[str, Any]


def parse_document(raw: Any) -> Document:
    """
    Turns a raw payload into a document.

    Args:
        raw (Any): A mapping, JSON text (str or bytes), or None.

    Returns:
        Document: The parsed document, empty if the payload is not an object.

    """
    if raw is None:
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        return data if isinstance(data, dict) else {}
    return {}


def doc_bool(doc: Mapping[str, Any] | None, key: str) -> bool:
    """True only if the field exists and is the boolean True."""
    if not doc:
        return False
    return doc.get(key) is True


def doc_number(doc: Mapping[str, Any] | None, key: str) -> float | None:
    """
    Reads a numeric field.

    Args:
        doc (Mapping[str, Any] | None): The document.
        key (str): The field name.

    Returns:
        float | None: The value, or None if it is missing, not a number or
            not finite (JSON text may carry Infinity and NaN).

    """
    if not doc:
        return None
    value = doc.get(key)
    # bool is an int subclass, but a flag is not a number.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        value = float(value)
    except OverflowError:
        return None
    return value if math.isfinite(value) else None


def doc_mapping(doc: Mapping[str, Any] | None, key: str) -> Document:
    """Reads a nested object field, empty if it is missing or not an object."""
    if not doc:
        return {}
    value = doc.get(key)
    return dict(value) if isinstance(value, Mapping) else {}
