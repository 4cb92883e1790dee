"""
Tests for the date-time and amount normalizers.
"""
from datetime import datetime, timezone

import pytest

from qfxparse.errors import InvalidTransactionAmountError, UnexpectedDateFormatError
from qfxparse.normalizers import parse_amount, parse_ofx_datetime

EXPECTED = datetime(2025, 7, 25, 14, 30, 0, tzinfo=timezone.utc)


# =============================================================================
# DATE-TIMES
# =============================================================================

@pytest.mark.parametrize("value", [
    "20250725143000",
    "20250725T143000",
    "20250725T143000Z",
    "20250725143000Z",
    "20250725143000[+7:PDT]",
    "20250725T143000[+7:PDT]",
    "20250725143000[-5:EST]",
    " 20250725143000 ",
])
def test_datetime_spellings_normalize_to_same_instant(value):
    assert parse_ofx_datetime(value) == EXPECTED


def test_result_is_utc_aware():
    assert parse_ofx_datetime("20250725143000").tzinfo == timezone.utc


def test_fractional_seconds_with_t():
    parsed = parse_ofx_datetime("20240101T123456.789Z")
    assert parsed == datetime(2024, 1, 1, 12, 34, 56, 789000, tzinfo=timezone.utc)


def test_fractional_seconds_without_t_and_bracket():
    parsed = parse_ofx_datetime("20250726120000.000[-7:PDT]")
    assert parsed == datetime(2025, 7, 26, 12, 0, 0, tzinfo=timezone.utc)


def test_fraction_longer_than_microseconds_is_truncated():
    parsed = parse_ofx_datetime("20240101123456.123456789")
    assert parsed.microsecond == 123456


@pytest.mark.parametrize("value", [
    "20250725",
    "20250725T",
    "2025072514300",
    "202507251430000",
    "20251325143000",
    "20250725253000",
    "invalid-date-string",
    "",
    "[+7:PDT]",
    "2025-07-25T14:30:00Z",
])
def test_invalid_datetimes_are_rejected(value):
    with pytest.raises(UnexpectedDateFormatError) as excinfo:
        parse_ofx_datetime(value, "DTPOSTED")
    assert excinfo.value.value == value
    assert excinfo.value.field == "DTPOSTED"


# =============================================================================
# AMOUNTS
# =============================================================================

@pytest.mark.parametrize("value,expected", [
    ("-100.51", -100.51),
    ("100.51", 100.51),
    ("+3", 3.0),
    ("0", 0.0),
    ("-.5", -0.5),
    ("12.", 12.0),
    (" 42.10 ", 42.10),
    ("1e5", 100000.0),
    ("-1.5E-2", -0.015),
    ("2.5e+1", 25.0),
])
def test_valid_amounts(value, expected):
    assert parse_amount(value) == expected


@pytest.mark.parametrize("value", [
    "100123456-7891",
    "1,000.00",
    "$10.00",
    "1e",
    "e5",
    "1e400",
    "NaN",
    "inf",
    "1_000",
    "",
    "-",
    ".",
    "9" * 400,
])
def test_invalid_amounts_are_rejected(value):
    with pytest.raises(InvalidTransactionAmountError) as excinfo:
        parse_amount(value, "TRNAMT")
    assert excinfo.value.value == value
    assert excinfo.value.field == "TRNAMT"
