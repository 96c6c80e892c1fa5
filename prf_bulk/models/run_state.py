from __future__ import annotations

from enum import Enum

"""RunState enum and the allowed transitions of the pipeline state machine.

Linear path:
    idle -> validating -> transforming -> splitting -> naming -> packaging -> complete

``failed`` is terminal and reachable from validating / transforming (caps,
headers, decode) and from naming / packaging (sequence overflow, sink failure).
``reset`` returns any state to idle; it is handled by the orchestrator and is
not listed here.
"""

__all__ = [
    "ALLOWED_TRANSITIONS",
    "RunState",
    "StateTransitionError",
]


class RunState(Enum):
    """Lifecycle of a single pipeline run."""
    IDLE = "idle"
    VALIDATING = "validating"
    TRANSFORMING = "transforming"
    SPLITTING = "splitting"
    NAMING = "naming"
    PACKAGING = "packaging"
    COMPLETE = "complete"
    FAILED = "failed"


class StateTransitionError(Exception):
    """Raised on a transition the state machine does not allow."""


ALLOWED_TRANSITIONS: dict[RunState, frozenset[RunState]] = {
    RunState.IDLE: frozenset({RunState.VALIDATING}),
    RunState.VALIDATING: frozenset({RunState.TRANSFORMING, RunState.FAILED}),
    RunState.TRANSFORMING: frozenset({RunState.SPLITTING, RunState.FAILED}),
    RunState.SPLITTING: frozenset({RunState.NAMING}),
    RunState.NAMING: frozenset({RunState.PACKAGING, RunState.FAILED}),
    RunState.PACKAGING: frozenset({RunState.COMPLETE, RunState.FAILED}),
    RunState.COMPLETE: frozenset(),
    RunState.FAILED: frozenset(),
}
