"""Tests for storeops/common/csv_utils.py"""

from storeops.common.csv_utils import (
    EXTRA_FIELDS_KEY,
    CsvCodec,
    decode_bytes,
    read_csv,
    read_header,
    union_fieldnames,
    write_csv,
)


class TestDecode:
    def test_rows_in_source_order(self):
        rows = CsvCodec().decode("Handle,Title\na,Alpha\nb,Beta\n")
        assert rows == [{"Handle": "a", "Title": "Alpha"}, {"Handle": "b", "Title": "Beta"}]

    def test_skips_completely_empty_lines(self):
        rows = CsvCodec().decode("Handle,Title\na,Alpha\n\nb,Beta\n")
        assert [row["Handle"] for row in rows] == ["a", "b"]

    def test_keeps_rows_of_blank_cells(self):
        rows = CsvCodec().decode("Handle,Title,Tags\na,Alpha,\n,,\nb,Beta,\n")
        assert [row["Handle"] for row in rows] == ["a", "", "b"]
        assert rows[1] == {"Handle": "", "Title": "", "Tags": ""}

    def test_short_rows_padded(self):
        rows = CsvCodec().decode("Handle,Title,Tags\na\n")
        assert rows == [{"Handle": "a", "Title": "", "Tags": ""}]

    def test_long_rows_keep_surplus(self):
        rows = CsvCodec().decode("Handle,Title\na,Alpha,extra1,extra2\n")
        assert rows[0][EXTRA_FIELDS_KEY] == ["extra1", "extra2"]

    def test_quoted_multiline_field(self):
        rows = CsvCodec().decode('Handle,Body\na,"<p>one,\ntwo</p>"\n')
        assert rows[0]["Body"] == "<p>one,\ntwo</p>"

    def test_strips_bom(self):
        rows = CsvCodec().decode("\ufeffHandle,Title\na,Alpha\n")
        assert "Handle" in rows[0]

    def test_header_only(self):
        assert CsvCodec().decode("Handle,Title\n") == []


class TestEncode:
    def test_union_of_keys_in_first_seen_order(self):
        text = CsvCodec().encode([{"a": "1", "b": "2"}, {"b": "3", "c": "4"}])
        assert text.splitlines() == ["a,b,c", "1,2,", ",3,4"]

    def test_explicit_fieldnames_extended_with_new_keys(self):
        text = CsvCodec().encode([{"Handle": "x", "Tags": "t"}], fieldnames=["Handle", "Title"])
        assert text.splitlines()[0] == "Handle,Title,Tags"

    def test_quotes_when_needed(self):
        text = CsvCodec().encode([{"Body": 'say "hi", then'}])
        assert text.splitlines()[1] == '"say ""hi"", then"'

    def test_surplus_cells_written_back(self):
        codec = CsvCodec()
        original = "Handle,Title\r\na,Alpha,extra\r\n"
        assert codec.encode(codec.decode(original)) == original

    def test_none_written_as_empty(self):
        text = CsvCodec().encode([{"a": None}])
        assert text.splitlines() == ["a", '""']

    def test_no_columns(self):
        assert CsvCodec().encode([]) == ""

    def test_round_trip(self):
        rows = [
            {"Handle": "mug-01", "Body (HTML)": "<p>a, b</p>", "Tags": "x, y"},
            {"Handle": "", "Body (HTML)": "line1\nline2", "Tags": ""},
        ]
        codec = CsvCodec()
        assert codec.decode(codec.encode(rows)) == rows


class TestHelpers:
    def test_read_header(self):
        assert read_header("Handle,Title\na,b\n") == ["Handle", "Title"]
        assert read_header("") == []

    def test_union_fieldnames_excludes_surplus(self):
        assert union_fieldnames([{"a": "1", EXTRA_FIELDS_KEY: ["x"]}]) == ["a"]

    def test_decode_bytes(self):
        assert decode_bytes("\ufeffabc".encode("utf-8")) == "abc"
        assert decode_bytes("\ufeffabc") == "abc"


class TestFileIO:
    def test_write_then_read(self, tmp_path):
        path = tmp_path / "nested" / "rows.csv"
        count = write_csv(path, [{"Handle": "a", "Tags": "x, y"}])

        assert count == 1
        assert list(read_csv(path)) == [{"Handle": "a", "Tags": "x, y"}]
