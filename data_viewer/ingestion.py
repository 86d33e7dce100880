from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .io_utils import detect_format, file_display_name, read_text_content
from .parsing import DataFormat, parse_pasted_text, parse_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dataset:
    """Rows exactly as parsed, before any flattening."""

    rows: Tuple[Dict[str, Any], ...]
    data_format: DataFormat
    source_name: str = ''

    def __len__(self) -> int:
        return len(self.rows)


def load_from_file(file_obj) -> Dataset:
    """Detect the format from the file name, read the file and parse it.

    The format check happens before any read. Raises a DataViewerError
    subclass on failure.
    """
    name = file_display_name(file_obj)
    data_format = detect_format(name)
    text = read_text_content(file_obj)
    rows = parse_text(text, data_format)
    logger.info("Parsed %d rows from %s (%s)", len(rows), name, data_format.value)
    return Dataset(rows=tuple(rows), data_format=data_format, source_name=name)


def load_from_pasted_text(text: str) -> Dataset:
    rows = parse_pasted_text(text)
    logger.info("Parsed %d rows from pasted text", len(rows))
    return Dataset(rows=tuple(rows), data_format=DataFormat.PASTE, source_name='clipboard')
