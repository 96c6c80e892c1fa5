from __future__ import annotations

import re

from prf_bulk.models.message import Message
from prf_bulk.models.run_result import CATEGORY_NEW, NamedFile, RunCounts, RunResult
from prf_bulk.models.run_state import RunState
from prf_bulk.services.summary import render_summary_line
from prf_bulk.validation.reference import Code

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY rows=(\d+) valid=(\d+) new=(\d+) existing=(\d+) "
    r"warnings=(\d+) errors=(\d+) files=(\d+) state=(complete|failed)$"
)


def test_render_summary_line_complete():
    result = RunResult(
        state=RunState.COMPLETE,
        errors=[Message.create(3, Code.EMAIL_INVALID, "bad")],
        counts=RunCounts(
            total_rows=5,
            valid_rows=4,
            new_member_count=3,
            existing_member_count=1,
            warning_count=2,
            error_count=1,
        ),
        new_files=[NamedFile("001_prf_bulk_import_20261019.csv", CATEGORY_NEW, 1, 3)],
    )
    line = render_summary_line(result)
    match = SUMMARY_PATTERN.match(line)
    assert match, line
    assert match.groups() == ("5", "4", "3", "1", "2", "1", "1", "complete")


def test_render_summary_line_failed():
    result = RunResult(
        state=RunState.FAILED,
        errors=[Message.create(0, Code.HEADERS_MISSING, "missing")],
    )
    line = render_summary_line(result)
    assert line == "SUMMARY rows=0 valid=0 new=0 existing=0 warnings=0 errors=1 files=0 state=failed"
