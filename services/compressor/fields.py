"""
Field lookup and loose coercion for decoded JSON records.

Records are plain decoded JSON (dict / list / str / int / float / bool /
None). Fields are addressed by dotted paths: ``"host"`` reads a top-level
key, ``"meta.host"`` walks into nested objects, a numeric segment indexes
an array and ``\\.`` escapes a literal dot inside a key.

Coercion is deliberately forgiving: a value of the wrong type degrades
to ``0`` / ``0.0`` rather than raising.
"""

from __future__ import annotations

import json
import math
import re
from decimal import Decimal
from typing import Any, List, Union

MISSING = object()

_PATH_SPLIT = re.compile(r"(?<!\\)\.")
_INT_TEXT = re.compile(r"-?[0-9]+")


def split_path(path: str) -> List[str]:
    """Split a dotted path into its segments, honouring ``\\.`` escapes."""
    return [segment.replace("\\.", ".") for segment in _PATH_SPLIT.split(path)]


def lookup(record: Any, path: str) -> Any:
    """Resolve `path` against `record`; returns `MISSING` when absent.

    A path that resolves to JSON ``null`` is present and returns None.
    """
    current = record
    for segment in split_path(path):
        if isinstance(current, dict):
            if segment not in current:
                return MISSING
            current = current[segment]
        elif isinstance(current, list):
            if not segment.isdecimal():
                return MISSING
            index = int(segment)
            if index >= len(current):
                return MISSING
            current = current[index]
        else:
            return MISSING
    return current


def _parse_number(text: str) -> float:
    # No surrounding whitespace, digit separators or non-ASCII digits
    if not text.isascii() or "_" in text or text != text.strip():
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def as_int(value: Any) -> int:
    """Integer view of a JSON value.

    Numbers truncate toward zero. Strings must be an optional ``-`` followed
    by ASCII digits; anything else (``"12.5"``, ``" 7"``, ``"1e3"``) is 0.
    """
    if value is MISSING or value is None:
        return 0
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return int(value)
    if isinstance(value, str) and _INT_TEXT.fullmatch(value):
        try:
            return int(value)
        except ValueError:
            # beyond the interpreter digit limit
            return 0
    return 0


def as_float(value: Any) -> float:
    """Float view of a JSON value; anything non-numeric becomes 0.0."""
    if value is MISSING or value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, float):
        return value
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        return _parse_number(value)
    return 0.0


def format_float(value: float) -> str:
    """Shortest positional rendering: 1.0 -> "1", 1e20 -> "100000000000000000000"."""
    if not math.isfinite(value):
        return repr(value)
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def compact_number(value: float) -> Union[int, float]:
    """Integral floats become ints so they encode as ``30`` rather than ``30.0``.

    Magnitudes of 1e21 and above stay floats and keep exponent notation.
    """
    if value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def as_text(value: Any) -> str:
    """String view of a JSON value used for tags and group keys."""
    if value is MISSING or value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_float(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
