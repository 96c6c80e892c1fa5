from __future__ import annotations

from dataclasses import dataclass
from typing import Union

"""Row models for the PRF bulk import builder.

RawRow is what the CSV decoder hands over (one per physical data record).
ClassifiedRow is the tagged outcome of the row classifier:
NewMember | ExistingMember | Rejected.
"""

__all__ = [
    "ClassifiedRow",
    "ExistingMember",
    "NewMember",
    "RawRow",
    "Rejected",
    "ValidRow",
]


@dataclass(frozen=True)
class RawRow:
    """One decoded input record.

    ``line_number`` is the 1-based physical line in the source file
    (the header is line 1, so the first data row is line 2).
    """
    line_number: int
    cells: tuple[str, ...]


@dataclass(frozen=True)
class NewMember:
    """Output row for a payer without a prior card number."""
    line_number: int
    name: str
    email: str
    country_code: str  # ISO2 or FALLBACK_COUNTRY_CODE
    total_amount: str  # decimal string, <= 2 fraction digits
    currency: str  # upper-case, 3 letters
    month: int  # 1..12
    support_region: str
    note: str

    kind = "new"

    def output_fields(self) -> tuple[str | int, ...]:
        return (
            self.name,
            self.email,
            self.country_code,
            self.total_amount,
            self.currency,
            self.month,
            self.support_region,
            self.note,
        )


@dataclass(frozen=True)
class ExistingMember:
    """Output row for a payer with a known, digits-only card number."""
    line_number: int
    card_id: str  # PRF-000123
    total_amount: str
    currency: str
    month: int
    support_region: str
    note: str

    kind = "existing"

    def output_fields(self) -> tuple[str | int, ...]:
        return (
            self.card_id,
            self.total_amount,
            self.currency,
            self.month,
            self.support_region,
            self.note,
        )


@dataclass(frozen=True)
class Rejected:
    """A row that failed a hard check. Carries no output payload."""
    line_number: int
    error_code: str
    message: str

    kind = "rejected"


ValidRow = Union[NewMember, ExistingMember]
ClassifiedRow = Union[NewMember, ExistingMember, Rejected]
