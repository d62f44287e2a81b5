"""
Input validation for route parameters.

Validates ids before they reach the database and parses the year/month
and date query parameters used by the diary endpoints.
"""

from __future__ import annotations
import re
from datetime import date
from typing import Optional, Tuple

# UUID validation pattern (RFC 4122 compliant)
_UUID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$',
    re.IGNORECASE
)

MIN_YEAR = 2000
MAX_YEAR = 2100


def is_valid_uuid(value: Optional[str]) -> bool:
    """Check a string is a UUID before using it in a query."""
    if not value or not isinstance(value, str):
        return False
    return bool(_UUID_PATTERN.match(value))


def parse_year_month(
    year_raw, month_raw, default: Optional[date] = None
) -> Tuple[Optional[Tuple[int, int]], Optional[str]]:
    """
    Parse year/month parameters.

    Missing values default to ``default``'s year and month; without a
    default both are required.

    Returns:
        ((year, month), None) on success, (None, error_message) otherwise
    """
    if default is None and (year_raw in (None, "") or month_raw in (None, "")):
        return None, "Year and month are required."
    try:
        year = int(year_raw) if year_raw not in (None, "") else default.year
        month = int(month_raw) if month_raw not in (None, "") else default.month
    except (TypeError, ValueError):
        return None, "Year and month must be numbers."

    if not MIN_YEAR <= year <= MAX_YEAR:
        return None, f"Year must be between {MIN_YEAR} and {MAX_YEAR}."
    if not 1 <= month <= 12:
        return None, "Month must be between 1 and 12."

    return (year, month), None


def parse_iso_date(raw: Optional[str]) -> Tuple[Optional[date], Optional[str]]:
    """
    Parse a YYYY-MM-DD query parameter.

    Returns:
        (date, None) on success, (None, error_message) otherwise
    """
    if not raw:
        return None, "Date is required (YYYY-MM-DD)."
    try:
        return date.fromisoformat(raw.strip()), None
    except ValueError:
        return None, "Invalid date. Use YYYY-MM-DD."
