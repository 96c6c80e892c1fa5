from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .message import Message
from .row_data import ExistingMember, NewMember
from .run_state import RunState

"""Run-level result models.

RunCounts, ChunkPlan, NamedFile, Manifest and RunResult describe what a
single pipeline run produced. They are built by the orchestrator and are
read-only once the run reaches a terminal state.
"""

__all__ = [
    "CATEGORY_EXISTING",
    "CATEGORY_NEW",
    "ChunkPlan",
    "Manifest",
    "NamedFile",
    "OutputBundle",
    "RunCounts",
    "RunResult",
]

CATEGORY_NEW = "new"
CATEGORY_EXISTING = "existing"


@dataclass(frozen=True)
class RunCounts:
    """Aggregated counters for one run.

    valid_rows counts rows that reach an output file (after dedup), so
    valid_rows == new_member_count + existing_member_count.
    """
    total_rows: int = 0
    valid_rows: int = 0
    new_member_count: int = 0
    existing_member_count: int = 0
    warning_count: int = 0
    error_count: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalRows": self.total_rows,
            "validRows": self.valid_rows,
            "newMemberCount": self.new_member_count,
            "existingMemberCount": self.existing_member_count,
            "warningCount": self.warning_count,
            "errorCount": self.error_count,
        }


@dataclass(frozen=True)
class ChunkPlan:
    """Per-category chunks; each chunk holds at most chunk_size rows."""
    new_chunks: list[list[NewMember]]
    existing_chunks: list[list[ExistingMember]]


@dataclass(frozen=True)
class NamedFile:
    """One output CSV file: name, category, sequence number and row count."""
    file_name: str
    category: str  # CATEGORY_NEW / CATEGORY_EXISTING
    sequence_number: int
    row_count: int


@dataclass(frozen=True)
class Manifest:
    """Run manifest persisted as manifest.json inside the bundle."""
    job_id: str
    date_utc: str  # YYYY-MM-DD
    start_seq: str
    sequence_range_start: str | None
    sequence_range_end: str | None
    new_file_names: list[str]
    existing_file_names: list[str]
    counts: RunCounts

    def to_dict(self) -> dict[str, Any]:
        return {
            "jobId": self.job_id,
            "dateUTC": self.date_utc,
            "startSeq": self.start_seq,
            "sequenceRangeStart": self.sequence_range_start,
            "sequenceRangeEnd": self.sequence_range_end,
            "newFileNames": list(self.new_file_names),
            "existingFileNames": list(self.existing_file_names),
            "counts": self.counts.to_dict(),
        }


@dataclass(frozen=True)
class OutputBundle:
    """Everything handed to the packaging sink: (file name, text) pairs + manifest."""
    files: list[tuple[str, str]]
    manifest: Manifest

    @property
    def file_names(self) -> list[str]:
        return [name for name, _ in self.files]


@dataclass(frozen=True)
class RunResult:
    """Outcome of a run.

    On a failed run only ``errors`` (and ``state``) is meaningful; output lists
    are empty and manifest/bundle/artifact are None. A complete run may still
    carry errors for rejected rows.
    """
    state: RunState
    errors: list[Message]
    warnings: list[Message] = field(default_factory=list)
    counts: RunCounts | None = None
    new_files: list[NamedFile] = field(default_factory=list)
    existing_files: list[NamedFile] = field(default_factory=list)
    manifest: Manifest | None = None
    bundle: OutputBundle | None = None
    artifact: Any = None  # whatever the packaging sink returned

    @property
    def succeeded(self) -> bool:
        return self.state is RunState.COMPLETE

    @property
    def new_file_names(self) -> list[str]:
        return [f.file_name for f in self.new_files]

    @property
    def existing_file_names(self) -> list[str]:
        return [f.file_name for f in self.existing_files]
