"""Domain models for the PRF bulk import builder.

Rows (raw and classified), messages, the run state machine and run results.
"""

from .message import FILE_LEVEL_LINE, Message
from .row_data import ClassifiedRow, ExistingMember, NewMember, RawRow, Rejected, ValidRow
from .run_result import (
    CATEGORY_EXISTING,
    CATEGORY_NEW,
    ChunkPlan,
    Manifest,
    NamedFile,
    OutputBundle,
    RunCounts,
    RunResult,
)
from .run_state import ALLOWED_TRANSITIONS, RunState, StateTransitionError

__all__ = [
    # Rows
    "ClassifiedRow",
    "ExistingMember",
    "NewMember",
    "RawRow",
    "Rejected",
    "ValidRow",
    # Messages
    "FILE_LEVEL_LINE",
    "Message",
    # Run
    "ALLOWED_TRANSITIONS",
    "CATEGORY_EXISTING",
    "CATEGORY_NEW",
    "ChunkPlan",
    "Manifest",
    "NamedFile",
    "OutputBundle",
    "RunCounts",
    "RunResult",
    "RunState",
    "StateTransitionError",
]
