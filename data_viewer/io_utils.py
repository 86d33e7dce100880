from __future__ import annotations

import logging
import os

from .errors import FileReadError, UnsupportedFormat
from .parsing import DataFormat

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = {
    '.csv': DataFormat.CSV,
    '.json': DataFormat.JSON,
    '.ndjson': DataFormat.NDJSON,
}

# Bytes left undefined by cp1252 (0x81, 0x8D, 0x8F, 0x90, 0x9D) fail both.
TEXT_ENCODINGS = ('utf-8-sig', 'cp1252')


def file_display_name(file_obj) -> str:
    """Best-effort original file name for an uploaded file or a path."""
    if file_obj is None:
        return ''
    for attr in ('orig_name', 'name'):
        value = getattr(file_obj, attr, None)
        if isinstance(value, str) and value:
            return os.path.basename(value)
    return os.path.basename(os.fspath(file_obj))


def detect_format(file_name: str) -> DataFormat:
    """Pick the parser from the file name suffix alone."""
    lowered = (file_name or '').lower()
    for suffix, data_format in SUPPORTED_SUFFIXES.items():
        if lowered.endswith(suffix):
            return data_format
    raise UnsupportedFormat()


def decode_bytes(content: bytes) -> str:
    for encoding in TEXT_ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise FileReadError()


def read_text_content(file_obj) -> str:
    """Read an uploaded file object or a file path fully into memory as text."""
    if file_obj is None:
        raise FileReadError("No file uploaded.")

    try:
        if hasattr(file_obj, 'read'):
            if hasattr(file_obj, 'seek'):
                file_obj.seek(0)
            content = file_obj.read()
        else:
            path = file_obj if isinstance(file_obj, (str, os.PathLike)) else file_obj.name
            with open(path, 'rb') as f:
                content = f.read()
    except OSError as exc:
        logger.warning("Could not read %s: %s", file_display_name(file_obj), exc)
        raise FileReadError() from exc

    if isinstance(content, bytes):
        content = decode_bytes(content)
    return content
