from __future__ import annotations

import re
from datetime import date

from .reference import CARD_ID_PREFIX, CARD_ID_WIDTH

"""Field validators and normalizers.

All functions are pure and total over ``str`` input: they return a bool or a
normalized value / ``None`` and never raise. Safe to call from worker threads.
"""

__all__ = [
    "build_card_id",
    "is_valid_amount",
    "is_valid_currency",
    "is_valid_email",
    "is_valid_iso_date",
    "is_valid_month",
    "normalize_header_name",
    "normalize_month",
]

MAX_EMAIL_LENGTH = 255

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[a-z]{2,}$", re.IGNORECASE)
_AMOUNT_RE = re.compile(r"^\d+(\.\d{1,2})?$", re.ASCII)
_CURRENCY_RE = re.compile(r"^[A-Za-z]{3}$")
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
_DIGITS_RE = re.compile(r"^\d+$", re.ASCII)


def is_valid_email(value: str) -> bool:
    s = value.strip()
    if not s or len(s) >= MAX_EMAIL_LENGTH:
        return False
    return _EMAIL_RE.match(s) is not None


def is_valid_amount(value: str) -> bool:
    """Positive decimal with at most two fraction digits (``10``, ``10.5``, ``10.50``)."""
    s = value.strip()
    if not _AMOUNT_RE.match(s):
        return False
    # "0" / "0.00" match the shape but are not positive
    return any(ch not in "0." for ch in s)


def is_valid_currency(value: str) -> bool:
    return _CURRENCY_RE.match(value.strip()) is not None


def is_valid_iso_date(value: str) -> bool:
    """Strict ``YYYY-MM-DD`` that is also a real calendar date."""
    s = value.strip()
    if not _ISO_DATE_RE.match(s):
        return False
    try:
        date(int(s[0:4]), int(s[5:7]), int(s[8:10]))
    except ValueError:
        return False
    return True


def normalize_month(value: str) -> int | None:
    """Return the month as 1..12, or None. Leading zeros / whitespace are ignored."""
    s = value.strip()
    if not _DIGITS_RE.match(s):
        return None
    stripped = s.lstrip("0")
    if not stripped or len(stripped) > 2:
        return None
    month = int(stripped)
    if 1 <= month <= 12:
        return month
    return None


def is_valid_month(value: str) -> bool:
    return normalize_month(value) is not None


def normalize_header_name(header: str) -> str:
    """Comparison key for header names: lower-case, no whitespace, no underscores."""
    return "".join(ch for ch in header.lower() if not ch.isspace() and ch != "_")


def build_card_id(raw_digits: str) -> str | None:
    """Build ``PRF-000123`` style card numbers.

    Returns None when the input is not a non-empty digit string or is wider
    than CARD_ID_WIDTH.
    """
    s = raw_digits.strip()
    if not _DIGITS_RE.match(s) or len(s) > CARD_ID_WIDTH:
        return None
    return f"{CARD_ID_PREFIX}{s.zfill(CARD_ID_WIDTH)}"
