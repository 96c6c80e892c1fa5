from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..models.message import Message

"""Run-scoped accumulation of error / warning Messages.

MessageLog keeps messages in the order they were appended and exposes the two
report sequences (errors, warnings) ordered by input line; messages on the
same line keep their append order. ``flush`` optionally writes the run's
messages as JSON Lines (``messages-YYYYMMDD-HHMMSS.log``, UTC).
"""

__all__ = [
    "MessageLog",
]

TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class MessageLog:
    """In-memory buffer of Messages for one run. Not thread-safe; the
    orchestrator appends from a single thread after results are gathered."""

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def extend(self, messages: Iterable[Message]) -> None:
        self._messages.extend(messages)

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def errors(self) -> list[Message]:
        return sorted((m for m in self._messages if m.is_error), key=lambda m: m.line_number)

    @property
    def warnings(self) -> list[Message]:
        return sorted((m for m in self._messages if m.is_warning), key=lambda m: m.line_number)

    def clear(self) -> None:
        self._messages.clear()

    def flush(self, directory: Path) -> Path | None:
        """Write buffered messages as JSON Lines and clear the buffer.

        Returns the written path, or None when there was nothing to write.
        """
        if not self._messages:
            return None
        directory.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
        fp = directory / f"messages-{stamp}.log"
        with fp.open("a", encoding="utf-8") as f:
            for m in self._messages:
                f.write(m.to_json_line() + "\n")
        self._messages.clear()
        return fp
