from __future__ import annotations

from ..models.run_result import RunResult

"""SUMMARY line rendering for the CLI.

Format:
SUMMARY rows={total} valid={valid} new={new} existing={existing}
warnings={warnings} errors={errors} files={files} state={state}
"""


def render_summary_line(result: RunResult) -> str:
    """Render a single SUMMARY line from a RunResult.

    Failed runs have no counts; every counter except errors is rendered as 0.

    Examples:
        >>> from prf_bulk.models import Message, RunResult, RunState
        >>> failed = RunResult(state=RunState.FAILED,
        ...                    errors=[Message.create(0, "error.headers_missing", "x")])
        >>> render_summary_line(failed)
        'SUMMARY rows=0 valid=0 new=0 existing=0 warnings=0 errors=1 files=0 state=failed'
    """
    counts = result.counts
    files = len(result.new_files) + len(result.existing_files)
    if counts is None:
        rows = valid = new = existing = 0
        warnings = len(result.warnings)
        errors = len(result.errors)
    else:
        rows = counts.total_rows
        valid = counts.valid_rows
        new = counts.new_member_count
        existing = counts.existing_member_count
        warnings = counts.warning_count
        errors = counts.error_count
    return (
        f"SUMMARY rows={rows} "
        f"valid={valid} "
        f"new={new} "
        f"existing={existing} "
        f"warnings={warnings} "
        f"errors={errors} "
        f"files={files} "
        f"state={result.state.value}"
    )
