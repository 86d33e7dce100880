from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from .values import ValueKind, kind_of

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100


def flatten_object(
    obj: Dict[str, Any],
    parent_key: str = '',
    sep: str = '.',
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Dict[str, Any]:
    """Flatten nested objects into a single level of dot-path keys.

    Arrays are leaves and are never recursed into. Keys keep the order in
    which they are met walking the source depth-first. The input is not
    modified. Objects nested deeper than `max_depth` are kept as leaves.
    """
    result: Dict[str, Any] = {}
    _flatten_into(obj, parent_key, sep, max_depth, 0, result)
    return result


def _flatten_into(
    obj: Dict[str, Any],
    parent_key: str,
    sep: str,
    max_depth: int,
    depth: int,
    result: Dict[str, Any],
) -> None:
    for key, value in obj.items():
        # On a path collision ('a.b' vs {'a': {'b': ...}}) the later value wins.
        new_key = f"{parent_key}{sep}{key}" if parent_key else str(key)
        if kind_of(value) is ValueKind.OBJECT:
            if depth + 1 >= max_depth:
                logger.warning("Flatten depth limit %d reached at '%s'; keeping object as a value.", max_depth, new_key)
                result[new_key] = value
            else:
                _flatten_into(value, new_key, sep, max_depth, depth + 1, result)
        else:
            result[new_key] = value


def flatten_rows(
    rows: Iterable[Dict[str, Any]],
    enabled: bool = True,
    max_depth: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Flatten every row when enabled; otherwise pass rows through unchanged."""
    if not enabled:
        return list(rows)
    depth = DEFAULT_MAX_DEPTH if max_depth is None else max_depth
    return [flatten_object(row, max_depth=depth) for row in rows]
