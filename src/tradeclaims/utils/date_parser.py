"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from typing import Any, Optional

from dateutil import parser as date_parser

# Day zero of the Excel 1900 date system (accounts for the 1900 leap-year bug)
EXCEL_EPOCH = date(1899, 12, 30)
# 9999-12-31
MAX_EXCEL_SERIAL = 2958466
_EXCEL_SERIAL = re.compile(r"^\d{4,5}(\.\d+)?$")
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def parse_date(value: Any) -> date:
    """Parse a date value into a date object.

    Supports:
    - date and datetime objects
    - ISO and free-form text: "2024-01-15", "15 Jan 2024", "2024-01-15 00:00:00"
    - Excel serial day numbers: 45306, "45306", "45306.0"

    Args:
        value: Date value in one of the supported forms

    Returns:
        Date object

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        raise ValueError("Empty date")

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _from_excel_serial(float(value))

    date_str = str(value).strip()
    if not date_str:
        raise ValueError("Empty date string")

    if _EXCEL_SERIAL.match(date_str):
        return _from_excel_serial(float(date_str))

    # Parse against two different defaults; any component taken from a default
    # differs between the results, so partial dates are rejected.
    try:
        parsed = date_parser.parse(date_str, default=_DEFAULT_A)
        check = date_parser.parse(date_str, default=_DEFAULT_B)
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
    if parsed.date() != check.date():
        raise ValueError(f"Could not parse date '{date_str}': year, month and day are required")
    return parsed.date()


def try_parse_date(value: Any) -> Optional[date]:
    """Parse a date value, returning None instead of raising."""
    try:
        return parse_date(value)
    except ValueError:
        return None


def _from_excel_serial(serial: float) -> date:
    if not 1 <= serial < MAX_EXCEL_SERIAL:
        raise ValueError(f"Could not parse date '{serial}': not a valid Excel serial date")
    return EXCEL_EPOCH + timedelta(days=int(serial))
