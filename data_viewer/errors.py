from __future__ import annotations

from typing import Optional


class DataViewerError(ValueError):
    """Base class for every error surfaced to the user as a status message."""

    default_message = "An unknown error occurred."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class UnsupportedFormat(DataViewerError):
    default_message = "Unsupported file format. Please upload a CSV, JSON, or NDJSON file."


class FileReadError(DataViewerError):
    default_message = "Error reading file."


class ParseError(DataViewerError):
    default_message = "Failed to parse data."


class EmptyOrInvalidFile(ParseError):
    default_message = "The file is empty or contains no valid data."


class MalformedJSON(ParseError):
    default_message = "Invalid JSON."

    def __init__(self, detail: Optional[str] = None, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"Invalid JSON on line {line}: {detail}"
        elif detail:
            message = f"Invalid JSON: {detail}"
        else:
            message = None
        super().__init__(message)


class InvalidPasteFormat(ParseError):
    default_message = "Failed to parse pasted data. Please ensure it's a valid JSON array."
