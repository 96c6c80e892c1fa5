from __future__ import annotations

import pytest

from prf_bulk.validation.validators import (
    build_card_id,
    is_valid_amount,
    is_valid_currency,
    is_valid_email,
    is_valid_iso_date,
    is_valid_month,
    normalize_header_name,
    normalize_month,
)

"""Unit tests for field validators."""


@pytest.mark.parametrize("value", ["a@b.com", "  first.last@example.co.uk ", "X@Y.ORG", "a+tag@sub.domain.io"])
def test_email_valid(value):
    assert is_valid_email(value) is True


@pytest.mark.parametrize("value", ["", "plain", "a@b", "a@b.c", "a@@b.com", "a b@c.com", "@b.com", "a@.com1"])
def test_email_invalid(value):
    assert is_valid_email(value) is False


def test_email_length_limit():
    local = "a" * 240
    ok = f"{local}@b.com"  # 246 chars
    assert is_valid_email(ok) is True
    too_long = "a" * 249 + "@b.com"  # 255 chars
    assert is_valid_email(too_long) is False


@pytest.mark.parametrize("value", ["10", "10.5", "10.50", " 3.99 ", "0.01"])
def test_amount_valid(value):
    assert is_valid_amount(value) is True


@pytest.mark.parametrize("value", ["", "-5", "10.123", "1,000", "abc", ".5", "5.", "0", "0.00"])
def test_amount_invalid(value):
    assert is_valid_amount(value) is False


@pytest.mark.parametrize("value,expected", [("USD", True), ("usd", True), (" Mmk ", True), ("US", False), ("USDT", False), ("U$D", False), ("", False)])
def test_currency(value, expected):
    assert is_valid_currency(value) is expected


@pytest.mark.parametrize("value,expected", [
    ("2026-07-15", True),
    ("2024-02-29", True),
    ("2026-02-30", False),
    ("2023-02-29", False),
    ("2026-13-01", False),
    ("2026-7-15", False),
    ("20260715", False),
    ("15/07/2026", False),
    ("", False),
])
def test_iso_date(value, expected):
    assert is_valid_iso_date(value) is expected


@pytest.mark.parametrize("value,expected", [("7", 7), ("07", 7), (" 12 ", 12), ("001", 1), ("0", None), ("13", None), ("", None), ("7.0", None), ("-1", None)])
def test_normalize_month(value, expected):
    assert normalize_month(value) == expected
    assert is_valid_month(value) is (expected is not None)


def test_normalize_header_name():
    assert normalize_header_name("Total Amount") == "totalamount"
    assert normalize_header_name("total_amount") == "totalamount"
    assert normalize_header_name(" TOTAL  AMOUNT ") == "totalamount"
    assert normalize_header_name("Card_ID") == normalize_header_name("CardID")


def test_build_card_id():
    assert build_card_id("123456") == "PRF-123456"
    assert build_card_id("42") == "PRF-000042"
    assert build_card_id(" 7 ") == "PRF-000007"


@pytest.mark.parametrize("value", ["", "1234567", "12a", "-12", "1.5"])
def test_build_card_id_rejects(value):
    assert build_card_id(value) is None


@pytest.mark.parametrize("value", ["１２３", "١٢٣", "12３"])
def test_card_id_ascii_digits_only(value):
    assert build_card_id(value) is None


@pytest.mark.parametrize("value", ["١٠.٥٠", "１０", "10.５"])
def test_amount_ascii_digits_only(value):
    assert not is_valid_amount(value)


def test_month_and_date_ascii_digits_only():
    assert normalize_month("７") is None
    assert not is_valid_iso_date("２０２６-０７-１５")
