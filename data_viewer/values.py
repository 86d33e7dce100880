from __future__ import annotations

import json
from enum import Enum
from typing import Any


class ValueKind(Enum):
    SCALAR = "scalar"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Any) -> ValueKind:
    """Classify a decoded JSON value.

    Only objects are ever recursed into by the flattener; arrays and scalars
    (including None) are leaves.
    """
    if isinstance(value, dict):
        return ValueKind.OBJECT
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    return ValueKind.SCALAR


def _is_plain_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool)) or value is None


def _dump_json(value: Any, indent=None) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, indent=indent)
    except TypeError:
        return str(value)


def stringify_value(value: Any) -> str:
    """Generic string conversion used for search matching and cell display."""
    kind = kind_of(value)
    if kind is ValueKind.ARRAY:
        if all(_is_plain_scalar(v) for v in value):
            return ", ".join(stringify_value(v) for v in value)
        return _dump_json(list(value))
    if kind is ValueKind.OBJECT:
        return _dump_json(value)

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_cell(value: Any, raw_json: bool = False) -> str:
    """Render a cell; nested values are pretty-printed when showing raw JSON rows."""
    if raw_json and kind_of(value) is not ValueKind.SCALAR:
        return _dump_json(value, indent=2)
    return stringify_value(value)
