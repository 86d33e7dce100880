"""
Unit tests for the CSV, JSON, NDJSON and paste parsers.
"""

import pytest

from data_viewer.errors import EmptyOrInvalidFile, InvalidPasteFormat, MalformedJSON, ParseError
from data_viewer.parsing import (
    DataFormat,
    parse_csv,
    parse_json,
    parse_ndjson,
    parse_pasted_text,
    parse_text,
)
from data_viewer.schema_utils import infer_columns


class TestParseCsv:
    """Test suite for parse_csv."""

    def test_first_line_is_header(self):
        rows = parse_csv("name,age\nAlice,30\nbob,25\n")

        assert rows == [{"name": "Alice", "age": "30"}, {"name": "bob", "age": "25"}]
        assert infer_columns(rows) == ["name", "age"]

    def test_quoted_fields(self):
        rows = parse_csv('name,note\n"Smith, J","said ""hi"""\n')

        assert rows == [{"name": "Smith, J", "note": 'said "hi"'}]

    def test_short_and_long_records(self):
        rows = parse_csv("a,b,c\n1\n1,2,3,4\n")

        assert rows == [{"a": "1", "b": "", "c": ""}, {"a": "1", "b": "2", "c": "3"}]

    def test_duplicate_header_names_renamed(self):
        """Repeated header names keep their own columns as name_2, name_3, ..."""
        rows = parse_csv("a,a,b,a\n1,2,3,4\n")

        assert rows == [{"a": "1", "a_2": "2", "b": "3", "a_3": "4"}]

    def test_renamed_header_skips_existing_names(self):
        rows = parse_csv("a,a,a_2\n1,2,3\n")

        assert infer_columns(rows) == ["a", "a_3", "a_2"]
        assert rows[0]["a_2"] == "3"

    def test_blank_lines_skipped(self):
        rows = parse_csv("\na,b\n\n1,2\n\n")

        assert rows == [{"a": "1", "b": "2"}]

    def test_crlf_line_endings(self):
        assert parse_csv("a,b\r\n1,2\r\n") == [{"a": "1", "b": "2"}]

    def test_empty_file_fails(self):
        """An empty CSV is an error, never a zero-row success."""
        with pytest.raises(EmptyOrInvalidFile):
            parse_csv("")

    def test_header_only_fails(self):
        with pytest.raises(EmptyOrInvalidFile):
            parse_csv("a,b\n")


class TestParseJson:
    """Test suite for parse_json."""

    def test_array_of_objects(self):
        rows = parse_json('[{"a":1},{"a":2}]')

        assert len(rows) == 2
        assert infer_columns(rows) == ["a"]

    def test_top_level_object_is_one_row(self):
        assert parse_json('{"a": {"b": 1}}') == [{"a": {"b": 1}}]

    def test_pretty_printed_multiline_document(self):
        rows = parse_json('[\n  {"a": 1},\n  {"a": 2}\n]\n')

        assert rows == [{"a": 1}, {"a": 2}]

    def test_malformed_json(self):
        with pytest.raises(MalformedJSON) as exc_info:
            parse_json('[{"a": 1},')

        assert str(exc_info.value).startswith("Invalid JSON")

    def test_scalar_rejected(self):
        with pytest.raises(MalformedJSON):
            parse_json("42")

    def test_non_object_element_rejected(self):
        with pytest.raises(MalformedJSON, match="element 1"):
            parse_json('[{"a": 1}, 2]')

    @pytest.mark.parametrize("text", ["", "   \n", "[]"])
    def test_empty_fails(self, text):
        with pytest.raises(EmptyOrInvalidFile):
            parse_json(text)


class TestParseNdjson:
    """Test suite for parse_ndjson."""

    def test_trailing_blank_line_ignored(self):
        rows = parse_ndjson('{"a":1}\n{"a":2}\n')

        assert rows == [{"a": 1}, {"a": 2}]

    def test_blank_lines_between_records(self):
        assert parse_ndjson('{"a":1}\n\n  \n{"a":2}') == [{"a": 1}, {"a": 2}]

    def test_bad_line_is_fatal(self):
        """One bad line fails the whole load and names its line number."""
        with pytest.raises(MalformedJSON) as exc_info:
            parse_ndjson('{"a":1}\n\n{"a":\n{"a":3}\n')

        assert exc_info.value.line == 3
        assert "line 3" in str(exc_info.value)

    def test_non_object_line_rejected(self):
        with pytest.raises(MalformedJSON):
            parse_ndjson('{"a":1}\n[1, 2]\n')

    def test_empty_fails(self):
        with pytest.raises(EmptyOrInvalidFile):
            parse_ndjson("\n\n")


class TestParsePastedText:
    """Test suite for parse_pasted_text."""

    def test_array(self):
        assert parse_pasted_text('[{"a": 1}]') == [{"a": 1}]

    def test_object_is_one_row(self):
        assert parse_pasted_text('{"a": 1}') == [{"a": 1}]

    @pytest.mark.parametrize("text", ["not json", "42", '"x"', '[1, 2]', ""])
    def test_invalid_paste(self, text):
        with pytest.raises(InvalidPasteFormat) as exc_info:
            parse_pasted_text(text)

        assert "valid JSON array" in str(exc_info.value)

    def test_empty_array_fails(self):
        with pytest.raises(EmptyOrInvalidFile):
            parse_pasted_text("[]")


class TestParseText:

    def test_dispatch(self):
        assert parse_text("a\n1\n", DataFormat.CSV) == [{"a": "1"}]
        assert parse_text('{"a":1}\n', DataFormat.NDJSON) == [{"a": 1}]

    def test_errors_share_parse_error_base(self):
        with pytest.raises(ParseError):
            parse_text("", DataFormat.JSON)

    def test_is_json(self):
        assert not DataFormat.CSV.is_json
        assert DataFormat.JSON.is_json
        assert DataFormat.NDJSON.is_json
        assert DataFormat.PASTE.is_json
