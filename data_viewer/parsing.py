from __future__ import annotations

import csv
import io
import json
from enum import Enum
from typing import Any, Dict, List

from .errors import EmptyOrInvalidFile, InvalidPasteFormat, MalformedJSON


class DataFormat(Enum):
    CSV = "csv"
    JSON = "json"
    NDJSON = "ndjson"
    PASTE = "paste"

    @property
    def is_json(self) -> bool:
        return self is not DataFormat.CSV


def _require_rows(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not rows:
        raise EmptyOrInvalidFile()
    return rows


def _is_blank_record(record: List[str]) -> bool:
    return not any(field.strip() for field in record)


def unique_header(names: List[str]) -> List[str]:
    """Rename repeated header names to name_2, name_3, ... so no column is lost."""
    taken = set(names)
    used = set()
    result: List[str] = []
    for name in names:
        candidate = name
        suffix = 2
        while candidate in used:
            candidate = f"{name}_{suffix}"
            suffix += 1
            # Never take a name that appears verbatim elsewhere in the header.
            if candidate in taken:
                candidate = name
        used.add(candidate)
        result.append(candidate)
    return result


def parse_csv(text: str) -> List[Dict[str, str]]:
    """Parse CSV text; the first non-blank record is the header.

    Later records are matched to the header by position. Missing trailing
    fields become '' and surplus fields are dropped.
    """
    records = [r for r in csv.reader(io.StringIO(text)) if not _is_blank_record(r)]
    if not records:
        raise EmptyOrInvalidFile()

    header = unique_header([name.strip() for name in records[0]])
    rows: List[Dict[str, str]] = []
    for record in records[1:]:
        row: Dict[str, str] = {}
        for idx, name in enumerate(header):
            row[name] = record[idx] if idx < len(record) else ''
        rows.append(row)
    return _require_rows(rows)


def _rows_from_value(value: Any, error_cls) -> List[Dict[str, Any]]:
    """Turn one decoded JSON document into rows.

    - list[dict] -> one row per element
    - dict -> a single row
    """
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        for idx, item in enumerate(value):
            if not isinstance(item, dict):
                raise error_cls(f"element {idx} is not a JSON object")
        return value
    raise error_cls("top-level value must be an array of objects or an object")


def parse_json(text: str) -> List[Dict[str, Any]]:
    if not text.strip():
        raise EmptyOrInvalidFile()
    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedJSON(str(exc)) from exc
    return _require_rows(_rows_from_value(value, MalformedJSON))


def parse_ndjson(text: str) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for lineno, line in enumerate(text.split('\n'), start=1):
        if not line.strip():
            continue
        try:
            value = json.loads(line)
        except json.JSONDecodeError as exc:
            raise MalformedJSON(exc.msg, line=lineno) from exc
        if not isinstance(value, dict):
            raise MalformedJSON("expected a JSON object", line=lineno)
        rows.append(value)
    return _require_rows(rows)


def _paste_error(_detail: str = '') -> InvalidPasteFormat:
    return InvalidPasteFormat()


def parse_pasted_text(text: str) -> List[Dict[str, Any]]:
    """Parse clipboard text: a JSON array of objects, or a single object."""
    if text is None or not text.strip():
        raise InvalidPasteFormat()
    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidPasteFormat() from exc
    return _require_rows(_rows_from_value(value, _paste_error))


_PARSERS = {
    DataFormat.CSV: parse_csv,
    DataFormat.JSON: parse_json,
    DataFormat.NDJSON: parse_ndjson,
    DataFormat.PASTE: parse_pasted_text,
}


def parse_text(text: str, data_format: DataFormat) -> List[Dict[str, Any]]:
    return _PARSERS[data_format](text)
