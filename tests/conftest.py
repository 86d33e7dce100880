"""Shared fixtures for data viewer tests."""

import json

import pytest

from data_viewer.ingestion import Dataset
from data_viewer.parsing import DataFormat


@pytest.fixture
def write_file(tmp_path):
    """Write text to a file under tmp_path and return its path."""
    def _write(name, content, encoding="utf-8"):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding=encoding)
        return path
    return _write


@pytest.fixture
def nested_rows():
    return [
        {"id": 1, "user": {"name": "Alice", "address": {"city": "Oslo"}}, "tags": ["a", "b"]},
        {"id": 2, "user": {"name": "bob", "address": {"city": "Lima"}}, "tags": []},
    ]


@pytest.fixture
def nested_dataset(nested_rows):
    return Dataset(rows=tuple(nested_rows), data_format=DataFormat.JSON, source_name="people.json")


@pytest.fixture
def numbered_dataset():
    """Thirty flat rows, n = 1..30."""
    rows = tuple({"n": i, "label": f"row {i}"} for i in range(1, 31))
    return Dataset(rows=rows, data_format=DataFormat.NDJSON, source_name="numbers.ndjson")


@pytest.fixture
def ndjson_text(nested_rows):
    return "\n".join(json.dumps(r) for r in nested_rows) + "\n"
