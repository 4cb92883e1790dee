"""
Leaf value normalizers for OFX date-times and amounts.
"""
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation as DecimalInvalidOperation
from typing import Optional
import math
import re

from qfxparse.errors import InvalidTransactionAmountError, UnexpectedDateFormatError

# Tried in order, first match wins
_DATETIME_FORMATS = (
    (re.compile(r"\d{14}\.\d+"), '%Y%m%d%H%M%S.%f'),
    (re.compile(r"\d{8}T\d{6}\.\d+"), '%Y%m%dT%H%M%S.%f'),
    (re.compile(r"\d{8}T\d{6}"), '%Y%m%dT%H%M%S'),
    (re.compile(r"\d{14}"), '%Y%m%d%H%M%S'),
)

_AMOUNT = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def _remove_last_bracketed(value: str) -> str:
    """Drop a trailing timezone hint, e.g. 20250725143000[-7:PDT] -> 20250725143000"""
    pos = value.rfind('[')
    if pos != -1:
        return value[:pos]
    return value


def _truncate_fraction(value: str) -> str:
    """strptime only understands up to six fractional digits"""
    head, sep, fraction = value.partition('.')
    if sep and len(fraction) > 6:
        return f"{head}.{fraction[:6]}"
    return value


def parse_ofx_datetime(date_str: str, field: Optional[str] = None) -> datetime:
    """
    Parse an OFX date-time to an aware UTC datetime.

    Accepts YYYYMMDDHHMMSS with an optional 'T' between date and time,
    optional fractional seconds, an optional trailing 'Z' and an optional
    trailing bracketed offset such as [-5:EST]. The offset is discarded and
    every value is read as UTC. A bare date is rejected.

    Args:
        date_str: Raw value token
        field: Tag the value belongs to, used in error messages

    Raises:
        UnexpectedDateFormatError: If no accepted spelling matches
    """
    value = _remove_last_bracketed(date_str.strip()).strip()
    if value.endswith('Z'):
        value = value[:-1]

    for pattern, fmt in _DATETIME_FORMATS:
        if not pattern.fullmatch(value):
            continue
        try:
            parsed = datetime.strptime(_truncate_fraction(value), fmt)
        except ValueError:
            # Right shape but not a real calendar instant, e.g. month 13
            continue
        return parsed.replace(tzinfo=timezone.utc)

    raise UnexpectedDateFormatError(date_str, field)


def parse_amount(amount_str: str, field: Optional[str] = None) -> float:
    """
    Parse a signed decimal amount such as -100.51 or 1.5E-2.

    Only bare ASCII numbers are accepted: no currency symbols, thousands
    separators, NaN or infinities.

    Raises:
        InvalidTransactionAmountError: If the value is not a finite decimal
    """
    value = amount_str.strip()
    if not _AMOUNT.fullmatch(value):
        raise InvalidTransactionAmountError(amount_str, field)

    try:
        amount = Decimal(value)
    except DecimalInvalidOperation:
        raise InvalidTransactionAmountError(amount_str, field)

    result = float(amount)
    if not math.isfinite(result):
        # Out of float range
        raise InvalidTransactionAmountError(amount_str, field)
    return result
