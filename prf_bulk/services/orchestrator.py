from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, date, datetime
from functools import partial

from ..csvio.reader import DecodeError, decode_csv_bytes
from ..csvio.writer import render_existing_members, render_message_report, render_new_members
from ..logging.message_log import MessageLog
from ..models.config_models import PipelineConfig
from ..models.message import FILE_LEVEL_LINE, Message
from ..models.row_data import ExistingMember, NewMember, RawRow, Rejected, ValidRow
from ..models.run_result import (
    CATEGORY_EXISTING,
    CATEGORY_NEW,
    ChunkPlan,
    Manifest,
    NamedFile,
    OutputBundle,
    RunCounts,
    RunResult,
)
from ..models.run_state import ALLOWED_TRANSITIONS, RunState, StateTransitionError
from ..validation.reference import Code
from .chunking import chunk
from .classifier import Classification, HeaderCheck, check_header, classify_row
from .dedup import deduplicate
from .naming import NameAssignment, NamingOverflowError, assign_names, parse_start_seq
from .packaging import PackagingSink
from .progress import RowProgress

logger = logging.getLogger(__name__)

"""Pipeline orchestration.

PipelineOrchestrator sequences one run through the state machine

    idle -> validating -> transforming -> splitting -> naming -> packaging -> complete

and converts every environmental failure (caps, decode, headers, sequence
overflow, packaging sink) into a ``failed`` run carrying a single top-level
error message. Per-row problems never fail the run; they are recorded as
Messages and the row is excluded from the outputs.

One orchestrator instance handles one run at a time; call reset() before
starting the next one.
"""

__all__ = [
    "ERRORS_REPORT_NAME",
    "WARNINGS_REPORT_NAME",
    "PipelineOrchestrator",
    "run_pipeline",
]

ERRORS_REPORT_NAME = "errors.csv"
WARNINGS_REPORT_NAME = "warnings.csv"


class PipelineOrchestrator:
    """State machine + stage sequencing for a single pipeline run."""

    def __init__(
        self,
        config: PipelineConfig | None = None,
        sink: PackagingSink | None = None,
    ) -> None:
        self.config = config or PipelineConfig()
        self.sink = sink
        self._state = RunState.IDLE
        self._history: list[RunState] = [RunState.IDLE]
        self._messages = MessageLog()
        self._result: RunResult | None = None

    # -- state machine -------------------------------------------------

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def history(self) -> list[RunState]:
        """States visited by the current run, in order."""
        return list(self._history)

    @property
    def result(self) -> RunResult | None:
        return self._result

    @property
    def messages(self) -> MessageLog:
        return self._messages

    def reset(self) -> None:
        """Return to idle from any state and discard all run-scoped data."""
        logger.debug(f"reset from state={self._state.value}")
        self._state = RunState.IDLE
        self._history = [RunState.IDLE]
        self._messages = MessageLog()
        self._result = None

    def _transition(self, target: RunState) -> None:
        if target not in ALLOWED_TRANSITIONS[self._state]:
            raise StateTransitionError(
                f"invalid transition {self._state.value} -> {target.value}"
            )
        logger.debug(f"state {self._state.value} -> {target.value}")
        self._state = target
        self._history.append(target)

    def _fail(self, code: Code, text: str) -> RunResult:
        """Move to failed with one top-level error; only the error report survives."""
        self._messages.append(Message.create(FILE_LEVEL_LINE, code, text))
        self._transition(RunState.FAILED)
        logger.error(f"run failed: {code.value}: {text}")
        self._result = RunResult(state=RunState.FAILED, errors=self._messages.errors)
        return self._result

    def _fail_with(self, messages: list[Message]) -> RunResult:
        self._messages.extend(messages)
        self._transition(RunState.FAILED)
        for m in messages:
            logger.error(f"run failed: {m.code}: {m.text}")
        self._result = RunResult(state=RunState.FAILED, errors=self._messages.errors)
        return self._result

    # -- entry points ----------------------------------------------------

    def process_bytes(
        self,
        raw: bytes,
        start_seq: str | int | None = None,
        *,
        date_stamp: date | None = None,
        job_id: str | None = None,
    ) -> RunResult:
        """Run the pipeline over raw CSV bytes (size cap + decode + run_pipeline)."""
        self._transition(RunState.VALIDATING)
        if len(raw) > self.config.max_bytes:
            return self._fail(
                Code.FILE_TOO_LARGE,
                f"input is {len(raw)} bytes, limit is {self.config.max_bytes}",
            )
        try:
            decoded = decode_csv_bytes(raw)
        except DecodeError as e:
            return self._fail(Code.DECODE_FAILED, str(e))
        logger.debug(f"decoded {len(decoded.rows)} rows (encoding={decoded.encoding})")
        return self._run_validated(decoded.rows, decoded.header, start_seq, date_stamp, job_id)

    def run_pipeline(
        self,
        rows: Sequence[RawRow],
        header: Sequence[str],
        start_seq: str | int | None = None,
        *,
        date_stamp: date | None = None,
        job_id: str | None = None,
    ) -> RunResult:
        """Run the pipeline over already-decoded rows.

        Args:
            rows: decoded data rows (with physical line numbers)
            header: the header row as read from the input
            start_seq: first sequence number, e.g. ``"001"`` (defaults to config)
            date_stamp: UTC run date used in file names (defaults to today, UTC)
            job_id: manifest job id (defaults to a random UUID hex)

        Returns:
            RunResult; ``state`` is COMPLETE or FAILED

        Raises:
            StateTransitionError: if the orchestrator is not idle (call reset())
        """
        self._transition(RunState.VALIDATING)
        return self._run_validated(rows, header, start_seq, date_stamp, job_id)

    # -- stages ----------------------------------------------------------

    def _run_validated(
        self,
        rows: Sequence[RawRow],
        header: Sequence[str],
        start_seq: str | int | None,
        date_stamp: date | None,
        job_id: str | None,
    ) -> RunResult:
        seed = self.config.start_seq if start_seq is None else start_seq
        try:
            parse_start_seq(seed)
        except ValueError as e:
            return self._fail(Code.START_SEQ_INVALID, str(e))

        if len(rows) > self.config.max_rows:
            return self._fail(
                Code.ROW_LIMIT_EXCEEDED,
                f"input has {len(rows)} data rows, limit is {self.config.max_rows}",
            )

        header_check = check_header(header)
        if not header_check.ok:
            return self._fail_with(header_check.errors)
        self._messages.extend(header_check.warnings)

        self._transition(RunState.TRANSFORMING)
        valid_rows = self._classify_all(rows, header_check)

        self._transition(RunState.SPLITTING)
        dedup = deduplicate(valid_rows)
        self._messages.extend(dedup.messages)
        new_rows = [r for r in dedup.rows if isinstance(r, NewMember)]
        existing_rows = [r for r in dedup.rows if isinstance(r, ExistingMember)]
        plan = ChunkPlan(
            new_chunks=chunk(new_rows, self.config.chunk_size),
            existing_chunks=chunk(existing_rows, self.config.chunk_size),
        )

        self._transition(RunState.NAMING)
        run_date = date_stamp or datetime.now(UTC).date()
        try:
            names = assign_names(
                len(plan.new_chunks),
                len(plan.existing_chunks),
                seed,
                run_date,
                min_width=self.config.seq_min_width,
            )
        except NamingOverflowError as e:
            return self._fail(Code.NAMING_OVERFLOW, str(e))

        new_files, existing_files = _named_files(plan, names)
        errors = self._messages.errors
        warnings = self._messages.warnings
        counts = RunCounts(
            total_rows=len(rows),
            valid_rows=len(new_rows) + len(existing_rows),
            new_member_count=len(new_rows),
            existing_member_count=len(existing_rows),
            warning_count=len(warnings),
            error_count=len(errors),
        )
        manifest = Manifest(
            job_id=job_id or uuid.uuid4().hex,
            date_utc=run_date.isoformat(),
            start_seq=str(seed),
            sequence_range_start=names.format_seq(names.sequence_numbers[0]) if names.sequence_numbers else None,
            sequence_range_end=names.format_seq(names.sequence_numbers[-1]) if names.sequence_numbers else None,
            new_file_names=names.new_names,
            existing_file_names=names.existing_names,
            counts=counts,
        )

        self._transition(RunState.PACKAGING)
        bundle = _assemble_bundle(plan, names, errors, warnings, manifest)
        artifact = None
        if self.sink is not None:
            try:
                artifact = self.sink.package(bundle)
            except Exception as e:  # sink is an external collaborator; any failure fails the run
                return self._fail(Code.PACKAGING_FAILED, f"packaging failed: {e}")

        self._transition(RunState.COMPLETE)
        logger.info(
            f"run complete: rows={counts.total_rows} new={counts.new_member_count} "
            f"existing={counts.existing_member_count} files={len(new_files) + len(existing_files)}"
        )
        self._result = RunResult(
            state=RunState.COMPLETE,
            errors=errors,
            warnings=warnings,
            counts=counts,
            new_files=new_files,
            existing_files=existing_files,
            manifest=manifest,
            bundle=bundle,
            artifact=artifact,
        )
        return self._result

    def _classify_all(self, rows: Sequence[RawRow], header_check: HeaderCheck) -> list[ValidRow]:
        """Classify every row; results are consumed in input order either way."""
        classify = partial(
            classify_row,
            column_index=header_check.column_index,
            arity=header_check.arity,
        )
        valid: list[ValidRow] = []
        rejected = 0

        def consume(outcomes: Iterable[Classification], progress: RowProgress) -> int:
            count = 0
            for outcome in outcomes:
                count += self._record(outcome, valid)
                progress.advance()
            return count

        with RowProgress(len(rows)) as progress:
            if self.config.max_workers > 1 and len(rows) > 1:
                # Executor.map yields in submission order
                with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                    rejected = consume(pool.map(classify, rows), progress)
            else:
                rejected = consume(map(classify, rows), progress)
            progress.set_postfix(valid=len(valid), rejected=rejected)
        logger.debug(f"classified {len(rows)} rows: valid={len(valid)} rejected={rejected}")
        return valid

    def _record(self, outcome: Classification, valid: list[ValidRow]) -> int:
        self._messages.extend(outcome.messages)
        row = outcome.row
        if isinstance(row, Rejected):
            self._messages.append(Message.create(row.line_number, row.error_code, row.message))
            return 1
        valid.append(row)
        return 0


def _named_files(plan: ChunkPlan, names: NameAssignment) -> tuple[list[NamedFile], list[NamedFile]]:
    seqs = iter(names.sequence_numbers)
    new_files = [
        NamedFile(file_name=name, category=CATEGORY_NEW, sequence_number=next(seqs), row_count=len(rows))
        for name, rows in zip(names.new_names, plan.new_chunks, strict=True)
    ]
    existing_files = [
        NamedFile(file_name=name, category=CATEGORY_EXISTING, sequence_number=next(seqs), row_count=len(rows))
        for name, rows in zip(names.existing_names, plan.existing_chunks, strict=True)
    ]
    return new_files, existing_files


def _assemble_bundle(
    plan: ChunkPlan,
    names: NameAssignment,
    errors: list[Message],
    warnings: list[Message],
    manifest: Manifest,
) -> OutputBundle:
    files: list[tuple[str, str]] = []
    for name, rows in zip(names.new_names, plan.new_chunks, strict=True):
        files.append((name, render_new_members(rows)))
    for name, rows in zip(names.existing_names, plan.existing_chunks, strict=True):
        files.append((name, render_existing_members(rows)))
    files.append((ERRORS_REPORT_NAME, render_message_report(errors)))
    files.append((WARNINGS_REPORT_NAME, render_message_report(warnings)))
    return OutputBundle(files=files, manifest=manifest)


def run_pipeline(
    rows: Sequence[RawRow],
    header: Sequence[str],
    start_seq: str | int | None = None,
    *,
    config: PipelineConfig | None = None,
    sink: PackagingSink | None = None,
    date_stamp: date | None = None,
) -> RunResult:
    """One-shot convenience wrapper around a fresh PipelineOrchestrator."""
    return PipelineOrchestrator(config, sink).run_pipeline(rows, header, start_seq, date_stamp=date_stamp)
