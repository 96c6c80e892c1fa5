from __future__ import annotations

import pytest

from prf_bulk.csvio.reader import DecodeError, decode_csv_bytes, rows_from_records


def test_decode_basic():
    decoded = decode_csv_bytes(b"a,b\r\n1,2\r\n3,4\r\n")
    assert decoded.header == ["a", "b"]
    assert [r.cells for r in decoded.rows] == [("1", "2"), ("3", "4")]
    assert [r.line_number for r in decoded.rows] == [2, 3]
    assert decoded.encoding == "utf-8"


def test_decode_strips_bom_and_header_whitespace():
    decoded = decode_csv_bytes("\ufeff Name , Email\nx,y\n".encode("utf-8"))
    assert decoded.header == ["Name", "Email"]


def test_blank_lines_skipped_but_counted():
    decoded = decode_csv_bytes(b"a,b\n\n1,2\n,\n3,4\n")
    assert [r.line_number for r in decoded.rows] == [3, 5]


def test_multiline_cell_keeps_physical_line_numbers():
    raw = b'a,b\n1,"two\nlines"\n3,4\n'
    decoded = decode_csv_bytes(raw)
    assert decoded.rows[0].cells == ("1", "two\nlines")
    assert [r.line_number for r in decoded.rows] == [2, 4]


def test_ragged_rows_are_kept():
    decoded = decode_csv_bytes(b"a,b,c\n1,2\n1,2,3,4\n")
    assert [len(r.cells) for r in decoded.rows] == [2, 4]


def test_non_utf8_input_is_decoded():
    raw = "name,city\nPaul,Montréal\n".encode("latin-1")
    decoded = decode_csv_bytes(raw)
    assert decoded.rows[0].cells[1] == "Montréal"
    assert decoded.encoding != "utf-8"


@pytest.mark.parametrize("raw", [b"", b"   \n\n", b",,\n"])
def test_empty_input(raw):
    with pytest.raises(DecodeError):
        decode_csv_bytes(raw)


def test_unterminated_quote_is_decode_error():
    with pytest.raises(DecodeError, match="malformed CSV"):
        decode_csv_bytes(b'a,b\n1,"oops\n')


def test_rows_from_records():
    rows = rows_from_records([["1"], ["2"]])
    assert [(r.line_number, r.cells) for r in rows] == [(2, ("1",)), (3, ("2",))]
