"""
Date bucketing helpers shared by the care schedule and diary summaries.

Everything the engine compares is a calendar day. Stored values arrive as
ISO strings (with or without time and offset), datetimes, or dates; these
helpers collapse them to ``date`` so day arithmetic never depends on the
time of day a record was written.
"""

from __future__ import annotations
from typing import Optional, List, Tuple
from calendar import monthrange
from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

logger = logging.getLogger(__name__)


def parse_datetime(value) -> Optional[datetime]:
    """Parse a datetime value, handling ISO strings with Z timezone."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            logger.debug(f"Unparseable datetime value: {value!r}")
            return None
    return None


def to_day(value, tz: Optional[tzinfo] = None) -> Optional[date]:
    """
    Collapse a stored date/datetime value to a calendar day.

    Timestamps are converted to ``tz`` first (when given) so one written
    late in the evening lands on the user's local day. Naive timestamps
    are stored as UTC. Plain dates and date-only strings are returned as-is.

    Args:
        value: date, datetime, ISO string, or None
        tz: Optional timezone used to localize aware datetimes

    Returns:
        date, or None if the value is missing or unparseable
    """
    if value is None:
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None

    parsed = parse_datetime(value)
    if parsed is None:
        return None
    if tz is not None:
        parsed = as_utc(parsed).astimezone(tz)
    return parsed.date()


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive timestamp; aware ones are returned unchanged."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def days_between(earlier: date, later: date) -> int:
    """Whole calendar days from ``earlier`` to ``later`` (negative if reversed)."""
    return (later - earlier).days


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day of a month."""
    last_day_num = monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day_num)


def trailing_days(today: date, count: int) -> List[date]:
    """The ``count`` days ending on ``today``, oldest first."""
    start = today - timedelta(days=count - 1)
    return [start + timedelta(days=i) for i in range(count)]


def resolve_timezone(name: Optional[str], fallback: str = "UTC") -> tzinfo:
    """Look up an IANA timezone name, falling back when it is missing or unknown."""
    for candidate in (name, fallback):
        if not candidate:
            continue
        try:
            return ZoneInfo(candidate)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone {candidate!r}")
    return ZoneInfo("UTC")


def local_today(tz: tzinfo, now: Optional[datetime] = None) -> date:
    """
    Today's date in ``tz``.

    This is the only place the clock is read; callers pass the result into
    the engine as the reference day.
    """
    current = now or datetime.now(tz)
    if current.tzinfo is None:
        return current.date()
    return current.astimezone(tz).date()
