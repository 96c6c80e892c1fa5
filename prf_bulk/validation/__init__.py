"""Field validators and static reference data."""

from .reference import (
    CARD_ID_PREFIX,
    CARD_ID_WIDTH,
    COUNTRY_CODES,
    EXISTING_MEMBER_COLUMNS,
    FALLBACK_COUNTRY_CODE,
    NEW_MEMBER_COLUMNS,
    REQUIRED_HEADERS,
    Code,
    lookup_country,
)
from .validators import (
    build_card_id,
    is_valid_amount,
    is_valid_currency,
    is_valid_email,
    is_valid_iso_date,
    is_valid_month,
    normalize_header_name,
    normalize_month,
)

__all__ = [
    "CARD_ID_PREFIX",
    "CARD_ID_WIDTH",
    "COUNTRY_CODES",
    "Code",
    "EXISTING_MEMBER_COLUMNS",
    "FALLBACK_COUNTRY_CODE",
    "NEW_MEMBER_COLUMNS",
    "REQUIRED_HEADERS",
    "build_card_id",
    "is_valid_amount",
    "is_valid_currency",
    "is_valid_email",
    "is_valid_iso_date",
    "is_valid_month",
    "lookup_country",
    "normalize_header_name",
    "normalize_month",
]
