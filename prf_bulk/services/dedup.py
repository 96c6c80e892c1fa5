from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..models.message import Message
from ..models.row_data import ValidRow
from ..validation.reference import Code

"""Exact-duplicate removal over the ordered stream of valid rows.

The fingerprint is a SHA-256 digest of the JSON serialization of
``[kind, *output_fields]``. JSON escaping keeps field boundaries unambiguous
whatever characters the fields contain, and ``kind`` keeps a new-member row
from ever matching an existing-member row. Line numbers are not part of the
fingerprint.
"""

__all__ = [
    "DedupResult",
    "deduplicate",
    "row_fingerprint",
]


@dataclass(frozen=True)
class DedupResult:
    rows: list[ValidRow]
    messages: list[Message] = field(default_factory=list)

    @property
    def dropped(self) -> int:
        return len(self.messages)


def row_fingerprint(row: ValidRow) -> str:
    payload = json.dumps([row.kind, *row.output_fields()], ensure_ascii=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("ascii")).hexdigest()


def deduplicate(rows: Iterable[ValidRow]) -> DedupResult:
    """Keep the first occurrence of each fingerprint, drop later exact repeats.

    One duplicate_row warning is emitted per dropped row, on the dropped
    row's line. Scope is a single call (no memory across runs).
    """
    first_seen: dict[str, int] = {}
    kept: list[ValidRow] = []
    messages: list[Message] = []
    for row in rows:
        fp = row_fingerprint(row)
        original_line = first_seen.get(fp)
        if original_line is not None:
            messages.append(Message.create(
                row.line_number,
                Code.DUPLICATE_ROW,
                f"exact duplicate of line {original_line}, row skipped",
            ))
            continue
        first_seen[fp] = row.line_number
        kept.append(row)
    return DedupResult(rows=kept, messages=messages)
