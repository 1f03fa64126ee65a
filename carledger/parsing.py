"""Parsing raw text input into typed values.

Each helper returns None when the text does not parse. Callers abort the
operation in that case; nothing unparsed reaches the stores.
"""

from datetime import date, datetime
from typing import Optional

from dateutil import parser as date_parser


def parse_int(text: Optional[str]) -> Optional[int]:
    """Parse a whole number ('58000'); None if not one."""
    if text is None:
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None


def parse_float(text: Optional[str]) -> Optional[float]:
    """Parse a decimal number ('12.5'); None if not one."""
    if text is None:
        return None
    try:
        return float(text.strip())
    except ValueError:
        return None


def parse_datetime(text: Optional[str]) -> Optional[datetime]:
    """Parse a date or date-time in any format dateutil understands."""
    if text is None or not text.strip():
        return None
    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError):
        return None


def parse_date(text: Optional[str]) -> Optional[date]:
    """Parse a calendar date, dropping any time of day."""
    parsed = parse_datetime(text)
    return parsed.date() if parsed is not None else None


def parse_month(text: Optional[str]) -> Optional[date]:
    """Parse a 'YYYY-MM' month into the first day of that month."""
    if text is None:
        return None
    parts = text.strip().split("-")
    if len(parts) != 2:
        return None
    year, month = parse_int(parts[0]), parse_int(parts[1])
    if year is None or month is None:
        return None
    try:
        return date(year, month, 1)
    except ValueError:
        return None
