"""
Recurrence rules for plant care.

A plant stores its watering cycle as three raw fields (cycle_type,
cycle_value, cycle_unit). Two different readings of those fields exist:

- Interval: "water every N days", where N = cycle_value * the cycle type's
  day multiplier. Due-ness depends on when the plant was last cared for.
- Calendar anchor: "water on weekday N" (WEEKLY) or "water on day N of the
  month" (MONTHLY). Due-ness depends only on today's date.

The same stored plant can be read either way, so callers pick the reading
explicitly with interval_rule() or anchor_rule(). Nothing here guesses.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union, Dict, Any
import logging

from plantdiary.constants import (
    ANCHOR_CYCLE_UNIT,
    CYCLE_MONTHLY,
    CYCLE_MULTIPLIERS,
    CYCLE_WEEKLY,
    DEFAULT_CYCLE_DAYS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntervalDays:
    """Care is due once ``days`` have elapsed since the last completion."""
    days: int


@dataclass(frozen=True)
class WeeklyOnWeekday:
    """Care is due on a fixed weekday (0=Sunday .. 6=Saturday)."""
    weekday: int


@dataclass(frozen=True)
class MonthlyOnDayOfMonth:
    """Care is due on a fixed day of the month (1-31)."""
    day: int


RecurrenceRule = Union[IntervalDays, WeeklyOnWeekday, MonthlyOnDayOfMonth]
AnchorRule = Union[WeeklyOnWeekday, MonthlyOnDayOfMonth]


def parse_cycle_value(raw) -> Optional[int]:
    """
    Parse a stored cycle_value into a non-negative integer.

    Returns None for anything that isn't a whole number >= 0
    ("7" -> 7, " 3 " -> 3, "7.5" -> None, "-1" -> None, None -> None).
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 0 else None
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return value if value >= 0 else None


def _normalize_type(cycle_type) -> str:
    return str(cycle_type or "").strip().upper()


def interval_rule(cycle_type, cycle_value, cycle_unit=None) -> IntervalDays:
    """
    Read raw cycle fields as an elapsed-days interval.

    cycle_unit is not consulted; the cycle type alone decides the
    multiplier. An unknown cycle type or an unparseable cycle_value falls
    back to DEFAULT_CYCLE_DAYS.

    Args:
        cycle_type: DAILY, WEEKLY, BIWEEKLY, TRIWEEKLY or MONTHLY
        cycle_value: String-encoded count of cycle_type periods
        cycle_unit: Stored unit (ignored for intervals)

    Returns:
        IntervalDays
    """
    multiplier = CYCLE_MULTIPLIERS.get(_normalize_type(cycle_type))
    value = parse_cycle_value(cycle_value)

    if multiplier is None or value is None:
        logger.debug(
            f"Falling back to {DEFAULT_CYCLE_DAYS}-day interval "
            f"(cycle_type={cycle_type!r}, cycle_value={cycle_value!r})"
        )
        return IntervalDays(DEFAULT_CYCLE_DAYS)

    return IntervalDays(value * multiplier)


def anchor_rule(cycle_type, cycle_value, cycle_unit) -> Optional[AnchorRule]:
    """
    Read raw cycle fields as a calendar anchor.

    Only WEEKLY and MONTHLY cycles stored with unit "days" have an anchor.
    Anything else (other types, other units, out-of-range or unparseable
    values) has no anchor and is never due by calendar.

    Returns:
        WeeklyOnWeekday, MonthlyOnDayOfMonth, or None
    """
    if str(cycle_unit or "").strip().lower() != ANCHOR_CYCLE_UNIT:
        return None

    value = parse_cycle_value(cycle_value)
    if value is None:
        return None

    kind = _normalize_type(cycle_type)
    if kind == CYCLE_WEEKLY and 0 <= value <= 6:
        return WeeklyOnWeekday(value)
    if kind == CYCLE_MONTHLY and 1 <= value <= 31:
        return MonthlyOnDayOfMonth(value)
    return None


def interval_rule_for_plant(plant: Dict[str, Any]) -> IntervalDays:
    """interval_rule() over a plant row."""
    return interval_rule(plant.get("cycle_type"), plant.get("cycle_value"), plant.get("cycle_unit"))


def anchor_rule_for_plant(plant: Dict[str, Any]) -> Optional[AnchorRule]:
    """anchor_rule() over a plant row."""
    return anchor_rule(plant.get("cycle_type"), plant.get("cycle_value"), plant.get("cycle_unit"))


def describe_cycle(plant: Dict[str, Any]) -> str:
    """Display form of the stored cycle, e.g. "7days"."""
    value = plant.get("cycle_value")
    unit = plant.get("cycle_unit")
    return f"{'' if value is None else value}{unit or ''}"
