"""
Unit tests for the CSV parser.

Covers the line splitter, numeric coercion, row skipping and the three
fatal parse errors.
"""
import logging

import pytest

from water_quality.csv_parser import (
    CSVParseError,
    CSVReadError,
    EmptyInputError,
    NoDataError,
    Table,
    coerce_cell,
    format_line,
    load_file,
    parse,
    split_line,
)


class TestSplitLine:
    """Test the single-line field splitter."""

    def test_plain_fields_are_trimmed(self):
        assert split_line(" a , b,c ") == ["a", "b", "c"]

    def test_quoted_comma_stays_in_field(self):
        assert split_line('"Site, A",7.1') == ["Site, A", "7.1"]

    def test_doubled_quote_is_literal(self):
        assert split_line('"say ""hi""",x') == ['say "hi"', "x"]

    def test_empty_line_gives_one_empty_field(self):
        assert split_line("") == [""]

    def test_trailing_comma_gives_empty_last_field(self):
        assert split_line("a,b,") == ["a", "b", ""]

    def test_unterminated_quote_swallows_rest_of_line(self):
        assert split_line('"a,b') == ["a,b"]


class TestCoercion:
    """Test numeric literal detection."""

    @pytest.mark.parametrize(
        "field, expected",
        [
            ("7", 7.0),
            ("-3.5", -3.5),
            ("+2", 2.0),
            (".5", 0.5),
            ("5.", 5.0),
            ("1e3", 1000.0),
            ("2.5E-2", 0.025),
        ],
    )
    def test_numbers(self, field, expected):
        value = coerce_cell(field)
        assert isinstance(value, float)
        assert value == expected

    @pytest.mark.parametrize("field", ["", "n/a", "Infinity", "NaN", "0x1F", "1,5", "1.2.3", "e5", "-"])
    def test_text_stays_text(self, field):
        assert coerce_cell(field) == field


class TestParse:
    """Test whole-table parsing."""

    def test_headers_and_rows(self, sample_table):
        assert sample_table.headers[:3] == ("Site", "Date", "pH")
        assert len(sample_table.rows) == 4
        assert sample_table.rows[0]["Site"] == "River, North"
        assert sample_table.rows[0]["pH"] == 7.2

    def test_every_record_has_all_headers(self, sample_table):
        for row in sample_table.rows:
            assert set(row) == set(sample_table.headers)

    def test_mismatched_row_is_skipped(self):
        table = parse("a,b\n1,2\n1,2,3\n4,5")
        assert table.rows == ({"a": 1.0, "b": 2.0}, {"a": 4.0, "b": 5.0})

    def test_mismatched_row_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="water_quality.csv_parser"):
            parse("a,b\n1,2\n1,2,3\n4,5")
        assert "Row 2 has 3 values but expected 2" in caplog.text

    def test_blank_lines_are_ignored(self):
        table = parse("a,b\n\n1,2\n   \n3,4\n")
        assert len(table.rows) == 2

    def test_crlf_line_endings(self):
        table = parse("a,b\r\n1,2\r\n3,x\r\n")
        assert table.headers == ("a", "b")
        assert table.rows[1] == {"a": 3.0, "b": "x"}

    def test_empty_field_stays_empty_string(self):
        table = parse("a,b\n1,\n2,3")
        assert table.rows[0]["b"] == ""

    def test_whitespace_only_input(self):
        with pytest.raises(EmptyInputError):
            parse("  \n\t \n")

    def test_empty_input(self):
        with pytest.raises(EmptyInputError):
            parse("")

    def test_no_valid_rows(self):
        with pytest.raises(NoDataError):
            parse("a,b\n1\n1,2,3\n")

    def test_header_only(self):
        with pytest.raises(NoDataError):
            parse("a,b,c")

    def test_errors_share_a_base_class(self):
        assert issubclass(EmptyInputError, CSVParseError)
        assert issubclass(NoDataError, ValueError)

    def test_parse_is_idempotent(self, sample_text):
        assert parse(sample_text) == parse(sample_text)

    def test_table_is_frozen(self, sample_table):
        with pytest.raises(AttributeError):
            sample_table.rows = ()

    def test_duplicate_header_keeps_last_value(self):
        table = parse("a,a\n1,2")
        assert table.rows[0] == {"a": 2.0}


class TestFormatRoundTrip:
    """Values with commas and quotes survive format -> parse."""

    def test_round_trip(self):
        header = format_line(["Site", "Note", "pH"])
        row = format_line(["Site, A", 'said "ok"', 7.25])
        table = parse(header + "\n" + row)
        assert table.rows[0] == {"Site": "Site, A", "Note": 'said "ok"', "pH": 7.25}

    def test_plain_values_are_not_quoted(self):
        assert format_line(["a", 1.5, "b c"]) == "a,1.5,b c"


class TestColumns:
    """Test column name helpers on Table."""

    def test_column_names_in_order(self, sample_table):
        assert sample_table.column_names() == list(sample_table.headers)

    def test_numeric_column_names(self, sample_table):
        assert sample_table.numeric_column_names() == [
            "pH",
            "Temperature (C)",
            "Dissolved Oxygen (mg/L)",
            "Turbidity (NTU)",
        ]

    def test_one_number_is_enough(self):
        table = parse("v,w\n1,a\nx,b\n3,c")
        assert table.numeric_column_names() == ["v"]

    def test_column_values_for_missing_column(self, sample_table):
        assert sample_table.column_values("nope") == []

    def test_len(self, sample_table):
        assert len(sample_table) == 4


class TestLoadFile:
    """Test reading CSV files from disk."""

    def test_load_strips_bom(self, csv_file):
        path = csv_file("\ufeffpH,Temp\n7,12\n", encoding="utf-8")
        table = load_file(path)
        assert isinstance(table, Table)
        assert table.headers == ("pH", "Temp")

    def test_missing_file(self, tmp_path):
        with pytest.raises(CSVReadError):
            load_file(tmp_path / "missing.csv")

    def test_parse_errors_pass_through(self, csv_file):
        with pytest.raises(EmptyInputError):
            load_file(csv_file("   "))
