from __future__ import annotations

import json
from dataclasses import asdict, dataclass

from ..validation.reference import Code

"""Message model for error / warning reporting.

A Message is created by header validation, the row classifier or the
deduplicator and is never mutated afterwards. line_number=0 is the sentinel
for file-level messages (caps, headers, decode / packaging failures).
"""

__all__ = [
    "FILE_LEVEL_LINE",
    "Message",
]

FILE_LEVEL_LINE = 0


@dataclass(frozen=True)
class Message:
    """Structured error or warning record.

    Attributes:
        line_number: 1-based physical line in the input, 0 for file-level messages
        code: Namespaced identifier (``error.*`` / ``warning.*``), see Code
        text: Human-readable description
    """
    line_number: int
    code: str
    text: str

    @staticmethod
    def create(line_number: int, code: Code | str, text: str) -> Message:
        """Create a Message, accepting either a Code member or its string value."""
        code_value = code.value if isinstance(code, Code) else str(code)
        return Message(line_number=line_number, code=code_value, text=text)

    @property
    def is_error(self) -> bool:
        return self.code.startswith("error.")

    @property
    def is_warning(self) -> bool:
        return self.code.startswith("warning.")

    def to_report_row(self) -> tuple[int, str, str]:
        """Row for the errors.csv / warnings.csv report (line, code, message)."""
        return (self.line_number, self.code, self.text)

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
