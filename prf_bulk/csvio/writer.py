from __future__ import annotations

import csv
from collections.abc import Iterable, Sequence

import pandas as pd

from ..models.message import Message
from ..models.row_data import ExistingMember, NewMember
from ..validation.reference import EXISTING_MEMBER_COLUMNS, NEW_MEMBER_COLUMNS

"""CSV text rendering for output chunks and message reports.

Layout contract:
- header row always present (even for zero data rows)
- text fields quoted, numeric fields (Month, report line) unquoted
- CRLF row terminators
"""

__all__ = [
    "REPORT_COLUMNS",
    "render_existing_members",
    "render_message_report",
    "render_new_members",
]

REPORT_COLUMNS: tuple[str, ...] = ("line", "code", "message")

LINE_TERMINATOR = "\r\n"


def _to_csv_text(records: Sequence[tuple], columns: Sequence[str]) -> str:
    df = pd.DataFrame.from_records(list(records), columns=list(columns))
    return df.to_csv(
        index=False,
        quoting=csv.QUOTE_NONNUMERIC,
        lineterminator=LINE_TERMINATOR,
    )


def render_new_members(rows: Iterable[NewMember]) -> str:
    return _to_csv_text([r.output_fields() for r in rows], NEW_MEMBER_COLUMNS)


def render_existing_members(rows: Iterable[ExistingMember]) -> str:
    return _to_csv_text([r.output_fields() for r in rows], EXISTING_MEMBER_COLUMNS)


def render_message_report(messages: Iterable[Message]) -> str:
    """errors.csv / warnings.csv body: one row per message (line, code, message)."""
    return _to_csv_text([m.to_report_row() for m in messages], REPORT_COLUMNS)
