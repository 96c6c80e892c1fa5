from __future__ import annotations

from dataclasses import dataclass
from datetime import date

"""Deterministic output file naming.

One global counter is shared by both categories: new-member files are
numbered first, existing-member files continue from where they stopped, so no
two files of a run share a sequence number.

    new:      {seq}_prf_bulk_import_{YYYYMMDD}.csv
    existing: {seq}_extension_prf_bulk_import_{YYYYMMDD}.csv
"""

__all__ = [
    "DEFAULT_MIN_WIDTH",
    "MAX_SEQUENCE",
    "NameAssignment",
    "NamingOverflowError",
    "assign_names",
    "parse_start_seq",
]

DEFAULT_MIN_WIDTH = 3

# Largest integer that survives a round trip through an IEEE-754 double
# (manifest consumers may parse sequence numbers as floats).
MAX_SEQUENCE = 2**53 - 1

NEW_NAME_TEMPLATE = "{seq}_prf_bulk_import_{stamp}.csv"
EXISTING_NAME_TEMPLATE = "{seq}_extension_prf_bulk_import_{stamp}.csv"


class NamingOverflowError(Exception):
    """Raised when the run would need a sequence number above MAX_SEQUENCE."""


@dataclass(frozen=True)
class NameAssignment:
    """Names generated for one run.

    sequence_numbers lists the numbers in assignment order (new files first).
    next_seq is the first number not used by this run.
    """
    new_names: list[str]
    existing_names: list[str]
    sequence_numbers: list[int]
    width: int
    next_seq: int

    def format_seq(self, value: int) -> str:
        return str(value).zfill(self.width)


def parse_start_seq(start_seq: str | int) -> tuple[int, int]:
    """Return (value, digit width) for a start sequence like ``"001"``.

    Raises:
        ValueError: for negative numbers or anything that is not plain digits
    """
    if isinstance(start_seq, bool):
        raise ValueError(f"invalid start sequence: {start_seq!r}")
    if isinstance(start_seq, int):
        if start_seq < 0:
            raise ValueError(f"start sequence must be non-negative, got {start_seq}")
        return start_seq, len(str(start_seq))
    text = str(start_seq).strip()
    if not text or not text.isascii() or not text.isdigit():
        raise ValueError(f"start sequence must be a non-negative integer, got {start_seq!r}")
    return int(text), len(text)


def assign_names(
    new_count: int,
    existing_count: int,
    start_seq: str | int,
    date_stamp: date,
    min_width: int = DEFAULT_MIN_WIDTH,
) -> NameAssignment:
    """Assign gapless, zero-padded sequence numbers to every output file.

    The padding width is max(min_width, digits in start_seq, digits in the
    final sequence number) and is the same for every file of the run, so the
    seed's leading zeros act as a floor.

    Raises:
        ValueError: negative counts or malformed start_seq
        NamingOverflowError: the final sequence number would exceed MAX_SEQUENCE
    """
    if new_count < 0 or existing_count < 0:
        raise ValueError("chunk counts must be non-negative")
    start, seed_width = parse_start_seq(start_seq)
    total = new_count + existing_count
    last = start + total - 1
    if total and last > MAX_SEQUENCE:
        raise NamingOverflowError(
            f"sequence {last} exceeds maximum {MAX_SEQUENCE} (start={start}, files={total})"
        )

    width = max(min_width, seed_width, len(str(last)) if total else 0)
    stamp = date_stamp.strftime("%Y%m%d")
    numbers = list(range(start, start + total))

    def render(template: str, value: int) -> str:
        return template.format(seq=str(value).zfill(width), stamp=stamp)

    new_names = [render(NEW_NAME_TEMPLATE, n) for n in numbers[:new_count]]
    existing_names = [render(EXISTING_NAME_TEMPLATE, n) for n in numbers[new_count:]]
    return NameAssignment(
        new_names=new_names,
        existing_names=existing_names,
        sequence_numbers=numbers,
        width=width,
        next_seq=start + total,
    )
