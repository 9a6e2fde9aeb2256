"""
CSV text parsing and source loading.
"""
import pytest
import requests

from cryonics_core import io_csv
from cryonics_core.io_csv import SourceError, load_rows, load_source, parse_csv


class TestParseCsv:
    def test_quoted_comma_and_doubled_quote(self):
        rows = parse_csv('a,"Scottsdale, ""AZ""",b')
        assert rows == [["a", 'Scottsdale, "AZ"', "b"]]

    def test_empty_input_has_no_rows(self):
        assert parse_csv("") == []

    def test_trailing_row_without_newline(self):
        assert parse_csv("h1,h2\n1,2") == [["h1", "h2"], ["1", "2"]]

    def test_carriage_return_ends_a_row(self):
        assert parse_csv("a,b\rc,d") == [["a", "b"], ["c", "d"]]
        assert parse_csv("a,b\r\nc,d\r\n") == [["a", "b"], ["c", "d"]]

    def test_line_break_inside_quotes_is_literal(self):
        assert parse_csv('x,"line1\nline2"\ny,z') == [["x", "line1\nline2"], ["y", "z"]]

    def test_cells_are_trimmed(self):
        assert parse_csv("  a ,  b  \n") == [["a", "b"]]

    def test_space_before_opening_quote(self):
        assert parse_csv('a, "b, c"') == [["a", "b, c"]]

    def test_quote_inside_unquoted_field_opens_quote_mode(self):
        assert parse_csv('a,b"c,d"\n') == [["a", "bc,d"]]
        assert parse_csv('x,ab"c\nd"e,f') == [["x", "abc\nde", "f"]]

    def test_blank_lines_yield_no_rows(self):
        assert parse_csv("a\n\n\nb") == [["a"], ["b"]]

    def test_separator_only_line_keeps_empty_cells(self):
        assert parse_csv(",\n") == [["", ""]]

    def test_unterminated_quote_does_not_raise(self):
        """The rest of the text ends up inside the open field."""
        rows = parse_csv('a,"open\nmore')
        assert rows == [["a", "open\nmore"]]

    def test_unterminated_quote_with_long_tail(self):
        """A tail far beyond 128 KB still lands in one field."""
        tail = "".join(f"2025-Q4,Org {i},{i},{i}\n" for i in range(10000))
        rows = parse_csv('Quarter,Organisation,Patients,Members\n2025-Q4,"Alcor,1,1\n' + tail)
        assert len(rows) == 2
        assert rows[1][0] == "2025-Q4"
        assert len(rows[1]) == 2
        assert len(rows[1][1]) > 131072
        assert rows[1][1].startswith("Alcor,1,1\n2025-Q4,Org 0,0,0")


class _FakeResponse:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text
        self.encoding = "utf-8"


class TestLoadSource:
    def test_reads_local_file(self, sample_csv, sample_text):
        assert load_source(sample_csv) == sample_text

    def test_missing_file_is_a_source_error(self, tmp_path):
        with pytest.raises(SourceError, match="Source not found"):
            load_source(tmp_path / "nope.csv")

    def test_url_fetch_adds_cache_buster(self, monkeypatch):
        seen = {}

        def fake_get(url, timeout):
            seen["url"] = url
            seen["timeout"] = timeout
            return _FakeResponse(200, "h\nr")

        monkeypatch.setattr(io_csv.requests, "get", fake_get)
        assert load_source("https://example.org/data.csv?v=2", timeout=3) == "h\nr"
        assert seen["url"].startswith("https://example.org/data.csv?v=2&t=")
        assert seen["timeout"] == 3

    def test_non_200_response(self, monkeypatch):
        monkeypatch.setattr(io_csv.requests, "get", lambda url, timeout: _FakeResponse(404))
        with pytest.raises(SourceError, match="Response was not OK: 404"):
            load_source("http://example.org/data.csv")

    def test_transport_failure(self, monkeypatch):
        def boom(url, timeout):
            raise requests.ConnectionError("connection refused")

        monkeypatch.setattr(io_csv.requests, "get", boom)
        with pytest.raises(SourceError, match="connection refused"):
            load_source("http://example.org/data.csv")

    def test_load_rows_parses_the_file(self, sample_csv):
        rows = load_rows(sample_csv)
        assert rows[0] == ["Quarter", "Organisation", "Patients", "Members"]
        assert rows[1] == ["2025-Q4", "Alcor", "1,234", "1500"]
