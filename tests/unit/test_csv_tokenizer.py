"""Tests del tokenizador, la detección de dialecto y la carga de CSV."""

import pytest

from backend.core.dxcompare.csv_engine import CsvLoader, DialectDetector, Tokenizer
from backend.core.dxcompare.errors import ErrorCategory


class TestTokenizer:
    def test_simple_rows_are_trimmed(self):
        rows, error = Tokenizer.tokenize("a , b,c\n 1,2 , 3\n", ",")

        assert error is None
        assert rows == [["a", "b", "c"], ["1", "2", "3"]]

    def test_quoted_field_keeps_delimiters_and_newlines(self):
        rows, error = Tokenizer.tokenize('"a,b";"line1\nline2"\nx;y\n', ";")

        assert error is None
        assert rows == [["a,b", "line1\nline2"], ["x", "y"]]

    def test_escaped_quote_and_backslash_inside_literal(self):
        rows, error = Tokenizer.tokenize('"say \\"hi\\"","back\\\\slash"\n', ",")

        assert error is None
        assert rows == [['say "hi"', "back\\slash"]]

    def test_backslash_is_literal_outside_quotes(self):
        rows, error = Tokenizer.tokenize("C:\\temp,x\n", ",")

        assert error is None
        assert rows == [["C:\\temp", "x"]]

    def test_text_after_closing_quote_is_appended(self):
        rows, error = Tokenizer.tokenize('"abc"def,x\n', ",")

        assert error is None
        assert rows == [["abcdef", "x"]]

    def test_trailing_blank_lines_are_dropped(self):
        rows, error = Tokenizer.tokenize("a,b\n1,2\n\n\n", ",")

        assert error is None
        assert rows == [["a", "b"], ["1", "2"]]

    def test_empty_text_gives_empty_table(self):
        rows, error = Tokenizer.tokenize("", ",")

        assert error is None
        assert rows == []

    def test_unterminated_literal_is_parse_error(self):
        rows, error = Tokenizer.tokenize('a,b\n"open,field\n', ",")

        assert rows is None
        assert error.code == "UNTERMINATED_LITERAL"
        assert error.category == ErrorCategory.PARSE
        assert error.details["line"] == 2

    def test_unstable_column_count_is_parse_error(self):
        rows, error = Tokenizer.tokenize("a,b,c\n1,2\n", ",")

        assert rows is None
        assert error.code == "UNSTABLE_COLUMN_COUNT"
        assert error.details["row"] == 1


class TestDialectDetector:
    @pytest.mark.parametrize("text,expected", [
        ("a;b;c\n1;2;3\n4;5;6\n", ";"),
        ("a,b,c\n1,2,3\n", ","),
        ("a\tb\n1\t2\n", "\t"),
        ("a|b|c\n1|2|3\n", "|"),
    ])
    def test_detects_delimiter(self, text, expected):
        assert DialectDetector.detect_delimiter(text) == expected

    def test_semicolon_wins_tie_with_decimal_commas(self):
        text = "1,0;2,5\n3,0;4,5\n"

        assert DialectDetector.detect_delimiter(text) == ";"

    def test_consistency_beats_priority(self):
        # ';' aparece en una sola fila, ',' divide todas igual
        text = "a,b\nc;d,e\nf,g\n"

        assert DialectDetector.detect_delimiter(text) == ","

    def test_no_candidate_returns_none(self):
        assert DialectDetector.detect_delimiter("single\ncolumn\n") is None

    def test_decimal_separator_comma_with_semicolon_delimiter(self):
        assert DialectDetector.detect_decimal_separator("1,5;2,5\n", ";") == ","

    def test_decimal_separator_excludes_field_delimiter(self):
        assert DialectDetector.detect_decimal_separator("1,5,2,5\n", ",") is None

    def test_decimal_separator_tie_goes_to_dot(self):
        assert DialectDetector.detect_decimal_separator("1.5;2,5\n", ";") == "."

    def test_resolve_falls_back_to_comma(self):
        dialect = DialectDetector.resolve("only\none\ncolumn\n")

        assert dialect.delimiter == ","
        assert dialect.delimiter_detected

    def test_explicit_values_are_kept(self):
        dialect = DialectDetector.resolve("1,5;2\n", delimiter=";", decimal_separator=",")

        assert dialect.delimiter == ";"
        assert dialect.decimal_separator == ","
        assert not dialect.delimiter_detected


class TestCsvLoader:
    def test_bom_and_carriage_returns_are_removed(self, write_file):
        path = write_file("bom.csv", b"\xef\xbb\xbfa,b\r\n1,2\r\n")

        table, error = CsvLoader.load_table(path)

        assert error is None
        assert table.rows == [["a", "b"], ["1", "2"]]

    def test_latin1_file_is_decoded(self, write_file):
        path = write_file("latin.csv", "nombre;año\nJosé;2020\n".encode("latin-1"))

        table, error = CsvLoader.load_table(path)

        assert error is None
        assert len(table.rows) == 2
        assert table.rows[1][1] == "2020"

    def test_missing_file_is_io_error(self, tmp_path):
        table, error = CsvLoader.load_table(tmp_path / "missing.csv")

        assert table is None
        assert error.category == ErrorCategory.IO

    def test_table_records_detected_decimal_separator(self, write_file):
        path = write_file("de.csv", "x;y\n1,5;2,25\n")

        table, error = CsvLoader.load_table(path)

        assert error is None
        assert table.decimal_separator == ","
