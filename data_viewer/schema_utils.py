from __future__ import annotations

from typing import Any, Dict, List, Sequence


def infer_columns(rows: Sequence[Dict[str, Any]]) -> List[str]:
    """Derive the table columns from the keys of the first row."""
    if not rows:
        return []
    return list(rows[0].keys())


def count_text(filtered: int, total: int) -> str:
    if total <= 0:
        return ""
    if filtered == total:
        return f"Rows: {total}"
    return f"Rows: {filtered} of {total}"
