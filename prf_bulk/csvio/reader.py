from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from charset_normalizer import from_bytes

from ..models.row_data import RawRow

"""CSV decoding: raw bytes -> header + RawRow list.

- UTF-8 (with or without BOM) is tried first; otherwise the best guess from
  charset-normalizer is used.
- Rows are tokenized with the csv module and kept ragged (column-count checks
  belong to the classifier).
- Physical line numbers are tracked through the reader so multi-line quoted
  cells and skipped blank lines do not shift later line numbers.
"""

__all__ = [
    "DecodeError",
    "DecodedCsv",
    "decode_csv_bytes",
    "decode_text",
    "rows_from_records",
]


class DecodeError(Exception):
    """Raised when the input cannot be turned into a header + rows."""


@dataclass(frozen=True)
class DecodedCsv:
    header: list[str]
    rows: list[RawRow]
    encoding: str


def decode_text(raw: bytes) -> tuple[str, str]:
    """Return (text, encoding used)."""
    try:
        return raw.decode("utf-8-sig"), "utf-8"
    except UnicodeDecodeError:
        pass
    match = from_bytes(raw).best()
    if match is None:
        raise DecodeError("unable to detect the file encoding")
    try:
        return raw.decode(match.encoding), match.encoding
    except (UnicodeDecodeError, LookupError) as e:
        raise DecodeError(f"unable to decode input as {match.encoding}: {e}") from e


def decode_csv_bytes(raw: bytes) -> DecodedCsv:
    """Decode raw CSV bytes.

    Raises:
        DecodeError: empty input, undecodable bytes, malformed CSV or no header row
    """
    if not raw.strip():
        raise DecodeError("input file is empty")
    text, encoding = decode_text(raw)

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    header: list[str] | None = None
    rows: list[RawRow] = []
    line_start = 1
    try:
        for record in reader:
            # reader.line_num is the physical line the record ended on
            this_line = line_start
            line_start = reader.line_num + 1
            if not record or all(not c.strip() for c in record):
                continue
            if header is None:
                header = [c.strip() for c in record]
                continue
            rows.append(RawRow(line_number=this_line, cells=tuple(record)))
    except csv.Error as e:
        raise DecodeError(f"malformed CSV near line {reader.line_num}: {e}") from e

    if header is None:
        raise DecodeError("input file has no header row")
    return DecodedCsv(header=header, rows=rows, encoding=encoding)


def rows_from_records(records: Iterable[Sequence[str]], first_line: int = 2) -> list[RawRow]:
    """Wrap already-tokenized records as RawRows numbered from ``first_line``."""
    return [
        RawRow(line_number=first_line + i, cells=tuple(record))
        for i, record in enumerate(records)
    ]
