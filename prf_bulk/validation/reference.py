from __future__ import annotations

from enum import Enum
from types import MappingProxyType

"""Static reference tables for the PRF bulk import builder.

Everything in this module is read-only for the lifetime of the process:
- REQUIRED_HEADERS: the 13 logical input columns (canonical order)
- COUNTRY_CODES: country name -> ISO 3166-1 alpha-2 lookup
- Code: closed catalog of error / warning identifiers
- NEW_MEMBER_COLUMNS / EXISTING_MEMBER_COLUMNS: output CSV layouts
"""

__all__ = [
    "Code",
    "COUNTRY_CODES",
    "EXISTING_MEMBER_COLUMNS",
    "FALLBACK_COUNTRY_CODE",
    "CARD_ID_PREFIX",
    "CARD_ID_WIDTH",
    "NEW_MEMBER_COLUMNS",
    "REQUIRED_HEADERS",
    "VALIDATED_FIELDS",
    "lookup_country",
]


class Code(str, Enum):
    """Machine-readable message identifiers, namespaced by severity."""

    # errors
    HEADERS_MISSING = "error.headers_missing"
    ROW_SHAPE = "error.row_shape"
    EMAIL_INVALID = "error.email_invalid"
    AMOUNT_INVALID = "error.amount_invalid"
    CURRENCY_INVALID = "error.currency_invalid"
    MONTH_INVALID = "error.month_invalid"
    DATE_INVALID = "error.date_invalid"
    CARD_ID_INVALID = "error.card_id_invalid"
    ROW_LIMIT_EXCEEDED = "error.row_limit_exceeded"
    FILE_TOO_LARGE = "error.file_too_large"
    DECODE_FAILED = "error.decode_failed"
    START_SEQ_INVALID = "error.start_seq_invalid"
    NAMING_OVERFLOW = "error.naming_overflow"
    PACKAGING_FAILED = "error.packaging_failed"
    # warnings
    HEADERS_EXTRA = "warning.headers_extra"
    HEADERS_REORDERED = "warning.headers_reordered"
    COUNTRY_UNMAPPED = "warning.country_unmapped"
    DUPLICATE_ROW = "warning.duplicate_row"

    @property
    def is_error(self) -> bool:
        return self.value.startswith("error.")

    @property
    def is_warning(self) -> bool:
        return self.value.startswith("warning.")


# Canonical input layout. Order matters only for the reorder warning and for
# the left-to-right field validation order in the classifier.
REQUIRED_HEADERS: tuple[str, ...] = (
    "Name",
    "Email",
    "Country",
    "CardID",
    "Total Amount",
    "Currency",
    "Month",
    "Payment Date",
    "Support Region",
    "Note",
    "Transaction ID",
    "Payment Method",
    "Phone",
)

# Fields checked by a validator, paired with the error code they raise.
VALIDATED_FIELDS: tuple[tuple[str, Code], ...] = (
    ("Email", Code.EMAIL_INVALID),
    ("Total Amount", Code.AMOUNT_INVALID),
    ("Currency", Code.CURRENCY_INVALID),
    ("Month", Code.MONTH_INVALID),
    ("Payment Date", Code.DATE_INVALID),
)

NEW_MEMBER_COLUMNS: tuple[str, ...] = (
    "Name",
    "Email",
    "Country",
    "Total Amount",
    "Currency",
    "Month",
    "SupportRegion",
    "Note",
)

EXISTING_MEMBER_COLUMNS: tuple[str, ...] = (
    "PRF Card No",
    "TotalAmount",
    "Currency",
    "Month",
    "SupportRegion",
    "Note",
)

CARD_ID_PREFIX = "PRF-"
CARD_ID_WIDTH = 6

FALLBACK_COUNTRY_CODE = "ZZ"

# Keys are lower-cased, whitespace-collapsed country names.
COUNTRY_CODES: MappingProxyType[str, str] = MappingProxyType({
    "myanmar": "MM",
    "burma": "MM",
    "thailand": "TH",
    "singapore": "SG",
    "malaysia": "MY",
    "indonesia": "ID",
    "philippines": "PH",
    "vietnam": "VN",
    "viet nam": "VN",
    "cambodia": "KH",
    "laos": "LA",
    "brunei": "BN",
    "india": "IN",
    "bangladesh": "BD",
    "china": "CN",
    "hong kong": "HK",
    "taiwan": "TW",
    "japan": "JP",
    "south korea": "KR",
    "korea": "KR",
    "australia": "AU",
    "new zealand": "NZ",
    "united states": "US",
    "united states of america": "US",
    "usa": "US",
    "canada": "CA",
    "mexico": "MX",
    "united kingdom": "GB",
    "uk": "GB",
    "great britain": "GB",
    "ireland": "IE",
    "germany": "DE",
    "france": "FR",
    "netherlands": "NL",
    "belgium": "BE",
    "switzerland": "CH",
    "austria": "AT",
    "italy": "IT",
    "spain": "ES",
    "portugal": "PT",
    "sweden": "SE",
    "norway": "NO",
    "denmark": "DK",
    "finland": "FI",
    "poland": "PL",
    "czech republic": "CZ",
    "czechia": "CZ",
    "united arab emirates": "AE",
    "uae": "AE",
    "qatar": "QA",
    "saudi arabia": "SA",
    "israel": "IL",
    "turkey": "TR",
    "south africa": "ZA",
    "brazil": "BR",
    "argentina": "AR",
})

_ISO2_CODES: frozenset[str] = frozenset(COUNTRY_CODES.values())


def lookup_country(value: str) -> str | None:
    """Return the ISO2 code for a country name, or None when unmapped.

    Accepts names case/whitespace-insensitively and passes through values that
    already are one of the known ISO2 codes.
    """
    key = " ".join(value.split()).lower()
    if not key:
        return None
    code = COUNTRY_CODES.get(key)
    if code is not None:
        return code
    if key.upper() in _ISO2_CODES:
        return key.upper()
    return None
