"""
Flexible Text — Normalization of text fields and tolerant field readers.

Voyager is inconsistent about how it ships display text. The same field may
arrive as any of:

    "headline": "Engineer"                        # bare string
    "headline": {"text": "Engineer", ...}         # TextViewModel wrapper
    "headline": null                              # explicitly empty

decode_flexible_text() folds all three into a plain str. Anything else (a
number, a list, a wrapper whose "text" is not a string) raises
PartialFieldError.

The read_* helpers are what the wire decoders actually call. They look a key
up in a raw entity dict, apply the strict decoder, and on PartialFieldError
log the anomaly and return the field's empty value. A missing key is never
an error.
"""

import logging
from typing import Any, Dict, List, Optional

from .errors import PartialFieldError

logger = logging.getLogger(__name__)


def decode_flexible_text(value: Any) -> str:
    """Normalize a bare string, a {"text": ...} wrapper, or None to a str.

    Raises:
        PartialFieldError: If the value is none of the accepted shapes.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        text = value.get("text")
        if text is None:
            return ""
        if isinstance(text, str):
            return text
    raise PartialFieldError("text", value)


def read_text(raw: Dict[str, Any], key: str) -> str:
    """Read a Flexible Text field, degrading to "" on a bad shape."""
    try:
        return decode_flexible_text(raw.get(key))
    except PartialFieldError as e:
        logger.debug("Ignoring %s: %s", key, e)
        return ""


def read_string(raw: Dict[str, Any], key: str) -> str:
    """Read a plain string field (identifiers, URLs, enum values)."""
    value = raw.get(key)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    logger.debug("Ignoring %s: expected string, got %s", key, type(value).__name__)
    return ""


def read_int(raw: Dict[str, Any], key: str) -> int:
    # bool is an int subclass; a boolean count is a shape error
    value = raw.get(key)
    if value is None:
        return 0
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    logger.debug("Ignoring %s: expected integer, got %s", key, type(value).__name__)
    return 0


def read_bool(raw: Dict[str, Any], key: str) -> bool:
    value = raw.get(key)
    if isinstance(value, bool):
        return value
    if value is not None:
        logger.debug("Ignoring %s: expected boolean, got %s", key, type(value).__name__)
    return False


def read_object(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Read a nested object field, degrading to {} when absent or not a dict."""
    value = raw.get(key)
    if isinstance(value, dict):
        return value
    if value is not None:
        logger.debug("Ignoring %s: expected object, got %s", key, type(value).__name__)
    return {}


def read_ref(raw: Dict[str, Any], key: str) -> Optional[str]:
    """Read a URN reference field such as "*company".

    Returns:
        The referenced URN, or None when absent or not a non-empty string.
    """
    value = raw.get(key)
    if isinstance(value, str) and value:
        return value
    if value is not None:
        logger.debug("Ignoring reference %s: %r", key, value)
    return None


def collect_refs(value: Any) -> List[str]:
    """Collect every URN found under a "*"-prefixed key, in document order.

    Voyager marks references to included entities by prefixing the key with
    "*" ("*entityResult": "urn:li:..."). The value may be a single URN or a
    list of them. Nested objects and lists are searched recursively; values
    under ordinary keys are never treated as references.

    Args:
        value: A root item (dict), or any nested value inside one.

    Returns:
        The URNs in the order they appear, without duplicates.
    """
    refs: List[str] = []
    _walk_refs(value, refs)
    seen = set()
    ordered = []
    for urn in refs:
        if urn not in seen:
            seen.add(urn)
            ordered.append(urn)
    return ordered


def _walk_refs(value: Any, out: List[str]):
    if isinstance(value, dict):
        for key, child in value.items():
            if isinstance(key, str) and key.startswith("*"):
                if isinstance(child, str) and child:
                    out.append(child)
                elif isinstance(child, list):
                    out.extend(v for v in child if isinstance(v, str) and v)
            else:
                _walk_refs(child, out)
    elif isinstance(value, list):
        for child in value:
            _walk_refs(child, out)
