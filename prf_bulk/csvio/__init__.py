"""CSV decoding (input) and rendering (outputs, reports)."""

from .reader import DecodedCsv, DecodeError, decode_csv_bytes, rows_from_records
from .writer import render_existing_members, render_message_report, render_new_members

__all__ = [
    "DecodeError",
    "DecodedCsv",
    "decode_csv_bytes",
    "render_existing_members",
    "render_message_report",
    "render_new_members",
    "rows_from_records",
]
