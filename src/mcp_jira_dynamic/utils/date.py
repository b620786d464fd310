"""Utility functions for date operations."""

import logging
from datetime import datetime, timezone

import dateutil.parser

logger = logging.getLogger("mcp-jira-dynamic.utils.date")

COMPACT_DATE_LENGTH = 8  # YYYYMMDD


def parse_date(date_str: str | int | None) -> datetime | None:
    """
    Parse a date string from any format to a datetime object for type consistency.

    The input string `date_str` accepts:
    - None
    - Epoch timestamp (only contains digits and is in milliseconds)
    - Other formats supported by `dateutil.parser` (ISO 8601, RFC 3339, etc.)

    Args:
        date_str: Date string

    Returns:
        Parsed date or None if date_str is None / empty string

    Raises:
        ValueError: If the string is not a recognizable date
    """

    if not date_str:
        return None
    if isinstance(date_str, int) or date_str.isdigit():
        return datetime.fromtimestamp(int(date_str) / 1000, tz=timezone.utc)
    return dateutil.parser.parse(date_str)


def _is_compact_date(value: str) -> bool:
    return len(value) == COMPACT_DATE_LENGTH and value.isdigit()


def format_date_for_api(date_str: str | int) -> str:
    """Return a date in the ``YYYY-MM-DD`` form Jira date fields expect.

    Eight-digit strings are compact ISO dates (``20250115``), not epoch
    milliseconds.

    Raises:
        ValueError: If the value is empty or not a recognizable date
    """
    if isinstance(date_str, str) and _is_compact_date(date_str.strip()):
        return dateutil.parser.isoparse(date_str.strip()).strftime("%Y-%m-%d")
    parsed = parse_date(date_str)
    if parsed is None:
        raise ValueError("Empty date")
    return parsed.strftime("%Y-%m-%d")
