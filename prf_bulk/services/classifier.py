from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

from ..models.message import FILE_LEVEL_LINE, Message
from ..models.row_data import ClassifiedRow, ExistingMember, NewMember, RawRow, Rejected
from ..validation.reference import (
    FALLBACK_COUNTRY_CODE,
    REQUIRED_HEADERS,
    VALIDATED_FIELDS,
    Code,
    lookup_country,
)
from ..validation.validators import (
    build_card_id,
    is_valid_amount,
    is_valid_currency,
    is_valid_email,
    is_valid_iso_date,
    is_valid_month,
    normalize_header_name,
    normalize_month,
)

"""Header validation and row classification.

check_header() resolves the input header against REQUIRED_HEADERS and
produces the column index used by classify_row(). classify_row() maps one
RawRow to exactly one ClassifiedRow plus zero or more warning Messages.

Neither function raises for malformed data: every problem becomes a Rejected
row or a Message. Both are pure and safe to call from worker threads.
"""

__all__ = [
    "Classification",
    "HeaderCheck",
    "check_header",
    "classify_row",
]

_FIELD_VALIDATORS: Mapping[Code, Callable[[str], bool]] = {
    Code.EMAIL_INVALID: is_valid_email,
    Code.AMOUNT_INVALID: is_valid_amount,
    Code.CURRENCY_INVALID: is_valid_currency,
    Code.MONTH_INVALID: is_valid_month,
    Code.DATE_INVALID: is_valid_iso_date,
}

_FIELD_ERROR_TEXT: Mapping[Code, str] = {
    Code.EMAIL_INVALID: "invalid email address",
    Code.AMOUNT_INVALID: "total amount must be a positive number with at most 2 decimals",
    Code.CURRENCY_INVALID: "currency must be a 3-letter code",
    Code.MONTH_INVALID: "month must be between 1 and 12",
    Code.DATE_INVALID: "payment date must be a real date in YYYY-MM-DD format",
}


@dataclass(frozen=True)
class HeaderCheck:
    """Result of resolving the input header.

    column_index maps each canonical header name to its position in the input
    row; it is only complete when ``ok`` is True.
    """
    ok: bool
    column_index: dict[str, int]
    arity: int
    errors: list[Message] = field(default_factory=list)
    warnings: list[Message] = field(default_factory=list)


@dataclass(frozen=True)
class Classification:
    """Exactly one classified row plus the warnings it produced."""
    row: ClassifiedRow
    messages: list[Message] = field(default_factory=list)


def check_header(header: Sequence[str]) -> HeaderCheck:
    """Validate the header row against REQUIRED_HEADERS.

    - any missing required column -> hard failure (one headers_missing error)
    - unknown or repeated columns -> one headers_extra warning
    - all required columns present but not in canonical order -> one
      headers_reordered warning
    """
    wanted = {normalize_header_name(h): h for h in REQUIRED_HEADERS}
    column_index: dict[str, int] = {}
    extras: list[str] = []
    for pos, raw in enumerate(header):
        canonical = wanted.get(normalize_header_name(raw))
        if canonical is None or canonical in column_index:
            extras.append(raw)
            continue
        column_index[canonical] = pos

    errors: list[Message] = []
    warnings: list[Message] = []
    missing = [h for h in REQUIRED_HEADERS if h not in column_index]
    if missing:
        errors.append(Message.create(
            FILE_LEVEL_LINE,
            Code.HEADERS_MISSING,
            f"missing required columns: {', '.join(missing)}",
        ))
        return HeaderCheck(ok=False, column_index=column_index, arity=len(header), errors=errors)

    if extras:
        warnings.append(Message.create(
            FILE_LEVEL_LINE,
            Code.HEADERS_EXTRA,
            f"ignoring unexpected columns: {', '.join(extras)}",
        ))
    found_order = sorted(column_index, key=column_index.__getitem__)
    if found_order != list(REQUIRED_HEADERS):
        warnings.append(Message.create(
            FILE_LEVEL_LINE,
            Code.HEADERS_REORDERED,
            "required columns are present but not in the standard order",
        ))
    return HeaderCheck(
        ok=True,
        column_index=column_index,
        arity=len(header),
        errors=errors,
        warnings=warnings,
    )


def _reject(raw: RawRow, code: Code, text: str) -> Classification:
    return Classification(row=Rejected(line_number=raw.line_number, error_code=code.value, message=text))


def classify_row(raw: RawRow, column_index: Mapping[str, int], arity: int) -> Classification:
    """Classify one input row.

    Checks short-circuit in this order: column count, field validators (in
    canonical column order), CardID shape. The country lookup never fails;
    an unmapped country adds a warning and uses FALLBACK_COUNTRY_CODE.
    """
    if len(raw.cells) != arity:
        return _reject(
            raw,
            Code.ROW_SHAPE,
            f"expected {arity} columns, found {len(raw.cells)}",
        )

    def cell(name: str) -> str:
        return raw.cells[column_index[name]]

    for column, code in VALIDATED_FIELDS:
        if not _FIELD_VALIDATORS[code](cell(column)):
            return _reject(raw, code, f"{_FIELD_ERROR_TEXT[code]}: {cell(column)!r}")

    card_raw = cell("CardID").strip()
    card_id: str | None = None
    if card_raw:
        card_id = build_card_id(card_raw)
        if card_id is None:
            return _reject(raw, Code.CARD_ID_INVALID, f"CardID must be up to 6 digits: {card_raw!r}")

    messages: list[Message] = []
    country_raw = cell("Country")
    country_code = lookup_country(country_raw)
    if country_code is None:
        country_code = FALLBACK_COUNTRY_CODE
        messages.append(Message.create(
            raw.line_number,
            Code.COUNTRY_UNMAPPED,
            f"unknown country {country_raw.strip()!r}, using {FALLBACK_COUNTRY_CODE}",
        ))

    month = normalize_month(cell("Month"))
    assert month is not None, "Month passed is_valid_month"
    total_amount = cell("Total Amount").strip()
    currency = cell("Currency").strip().upper()
    support_region = cell("Support Region").strip()
    note = cell("Note").strip()

    if card_id is None:
        row: ClassifiedRow = NewMember(
            line_number=raw.line_number,
            name=cell("Name").strip(),
            email=cell("Email").strip(),
            country_code=country_code,
            total_amount=total_amount,
            currency=currency,
            month=month,
            support_region=support_region,
            note=note,
        )
    else:
        row = ExistingMember(
            line_number=raw.line_number,
            card_id=card_id,
            total_amount=total_amount,
            currency=currency,
            month=month,
            support_region=support_region,
            note=note,
        )
    return Classification(row=row, messages=messages)
