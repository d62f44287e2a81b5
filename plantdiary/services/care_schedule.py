"""
Care schedule calculations.

Turns a plant's recurrence rule plus its most recent completed care into
a care status for a given day. Everything here is a pure function of the
rows passed in and the reference day: no database access, no clock reads,
and nothing is written back. Statuses are recomputed on every request.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Dict, Any, List, Iterable

from plantdiary.constants import (
    DEFAULT_SUNLIGHT_NEEDS,
    STATUS_GOOD,
    STATUS_NEEDS_CARE,
    STATUS_WARNING,
    TASK_WATERING,
    WARNING_DAYS_THRESHOLD,
)
from plantdiary.services.recurrence import (
    AnchorRule,
    IntervalDays,
    MonthlyOnDayOfMonth,
    WeeklyOnWeekday,
    anchor_rule_for_plant,
    describe_cycle,
    interval_rule_for_plant,
)
from plantdiary.utils.dates import as_utc, days_between, parse_datetime, to_day


@dataclass(frozen=True)
class CareStatus:
    days_until_due: int
    overdue_days: int
    status: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "daysUntilDue": self.days_until_due,
            "overdueDays": self.overdue_days,
            "status": self.status,
        }


def status_for_days_until_due(days_until_due: int) -> str:
    """0 -> needs_care, 1-2 -> warning, otherwise good."""
    if days_until_due <= 0:
        return STATUS_NEEDS_CARE
    if days_until_due <= WARNING_DAYS_THRESHOLD:
        return STATUS_WARNING
    return STATUS_GOOD


def compute_care_status(
    rule: IntervalDays,
    last_completion,
    today: date,
    tz: Optional[tzinfo] = None,
) -> CareStatus:
    """
    Evaluate an interval rule against the last completed care.

    Args:
        rule: Interval to evaluate
        last_completion: Timestamp/date of the most recent completion, or None
        today: Reference day
        tz: Timezone used to place aware timestamps on a calendar day

    Returns:
        CareStatus. With no completion on record the plant is due now.

    Example:
        >>> compute_care_status(IntervalDays(7), date(2025, 8, 25), date(2025, 8, 28))
        CareStatus(days_until_due=4, overdue_days=0, status='good')
    """
    last_day = to_day(last_completion, tz)
    if last_day is None:
        return CareStatus(days_until_due=0, overdue_days=0, status=STATUS_NEEDS_CARE)

    # A completion dated after today counts as done today
    days_since = max(0, days_between(last_day, today))
    days_until_due = max(0, rule.days - days_since)
    overdue_days = max(0, days_since - rule.days)

    return CareStatus(
        days_until_due=days_until_due,
        overdue_days=overdue_days,
        status=status_for_days_until_due(days_until_due),
    )


def is_due_on(rule: AnchorRule, today: date) -> bool:
    """Whether a calendar-anchored rule falls on ``today``."""
    if isinstance(rule, WeeklyOnWeekday):
        # isoweekday(): Monday=1 .. Sunday=7, stored weekdays are Sunday=0 .. Saturday=6
        return today.isoweekday() % 7 == rule.weekday
    if isinstance(rule, MonthlyOnDayOfMonth):
        return today.day == rule.day
    return False


# ============================================================================
# Task log helpers
# ============================================================================

def latest_completion(logs: Iterable[Dict[str, Any]], task_type: str) -> Optional[datetime]:
    """
    Most recent completion_date among logs of one type.

    Args:
        logs: Task log rows (type, completion_date)
        task_type: watering, sunlight, other

    Returns:
        datetime of the latest completion, or None if there is none
    """
    latest = None
    for log in logs or []:
        if log.get("type") != task_type:
            continue
        completed = parse_datetime(log.get("completion_date"))
        if completed is None:
            continue
        if latest is None or as_utc(completed) > as_utc(latest):
            latest = completed
    return latest


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def plant_ref(plant: Dict[str, Any]) -> Dict[str, Any]:
    """Identity fields used wherever a plant is embedded in a response."""
    return {
        "id": plant.get("id"),
        "name": plant.get("name"),
        "variety": plant.get("variety"),
    }


def watering_status(
    plant: Dict[str, Any],
    logs: Iterable[Dict[str, Any]],
    today: date,
    tz: Optional[tzinfo] = None,
) -> CareStatus:
    """Interval-based watering status for one plant."""
    rule = interval_rule_for_plant(plant)
    return compute_care_status(rule, latest_completion(logs, TASK_WATERING), today, tz)


# ============================================================================
# Plant summaries
# ============================================================================

def get_plant_statuses(
    plants: List[Dict[str, Any]],
    task_logs_by_plant: Dict[Any, List[Dict[str, Any]]],
    today: date,
    tz: Optional[tzinfo] = None,
    default_sunlight: str = DEFAULT_SUNLIGHT_NEEDS,
) -> List[Dict[str, Any]]:
    """
    Watering status for each of a user's plants, in input order.

    Returns:
        List of dicts with id, name, variety, img_url, status,
        daysUntilWatering, overdueDays, lastWatered, wateringCycle,
        sunlightNeeds
    """
    statuses = []
    for plant in plants:
        logs = task_logs_by_plant.get(plant.get("id"), [])
        last_watered = latest_completion(logs, TASK_WATERING)
        care = compute_care_status(interval_rule_for_plant(plant), last_watered, today, tz)

        statuses.append({
            **plant_ref(plant),
            "img_url": plant.get("img_url") or "",
            "status": care.status,
            "daysUntilWatering": care.days_until_due,
            "overdueDays": care.overdue_days,
            "lastWatered": _isoformat(last_watered),
            "wateringCycle": describe_cycle(plant),
            "sunlightNeeds": plant.get("sunlight_needs") or default_sunlight,
        })
    return statuses


def compute_care_stats(
    plants: List[Dict[str, Any]],
    task_logs_by_plant: Dict[Any, List[Dict[str, Any]]],
    today: date,
    lookback_days: int = 30,
    tz: Optional[tzinfo] = None,
    default_sunlight: str = DEFAULT_SUNLIGHT_NEEDS,
) -> List[Dict[str, Any]]:
    """
    Per-plant care activity over the last ``lookback_days`` days.

    Logs outside the window are ignored, including for the due-date
    calculation, so a plant whose last watering predates the window reads
    as due now.
    """
    window_start = today - timedelta(days=lookback_days)
    stats = []

    for plant in plants:
        logs = [
            log for log in task_logs_by_plant.get(plant.get("id"), [])
            if (to_day(log.get("completion_date"), tz) or date.min) >= window_start
        ]
        last_watered = latest_completion(logs, TASK_WATERING)
        care = compute_care_status(interval_rule_for_plant(plant), last_watered, today, tz)

        stats.append({
            **plant_ref(plant),
            "img_url": plant.get("img_url") or "",
            "daysUntilWatering": care.days_until_due,
            "lastWatered": _isoformat(last_watered),
            "wateringCycle": describe_cycle(plant),
            "sunlightNeeds": plant.get("sunlight_needs") or default_sunlight,
            "careCount": len(logs),
            "wateringCount": sum(1 for log in logs if log.get("type") == TASK_WATERING),
        })
    return stats


def plants_due_by_anchor(plants: List[Dict[str, Any]], today: date) -> Dict[str, Any]:
    """
    Plants whose calendar anchor (weekday or day of month) is today.

    Anchored schedules have no notion of lateness, so daysOverdue is
    always 0.
    """
    due = []
    for plant in plants:
        rule = anchor_rule_for_plant(plant)
        if rule is None or not is_due_on(rule, today):
            continue
        due.append({
            **plant_ref(plant),
            "img_url": plant.get("img_url") or "",
            "wateringCycle": describe_cycle(plant),
            "daysOverdue": 0,
        })

    return {"totalCount": len(due), "plants": due}


def compute_plant_care_info(
    plant: Dict[str, Any],
    last_watering,
    today: date,
    tz: Optional[tzinfo] = None,
    default_sunlight: str = DEFAULT_SUNLIGHT_NEEDS,
) -> Dict[str, Any]:
    """
    Care summary for a single plant (diary write screen).

    Args:
        plant: Plant row
        last_watering: completion_date of the latest watering log, or None
    """
    last_watered = parse_datetime(last_watering)
    care = compute_care_status(interval_rule_for_plant(plant), last_watering, today, tz)

    return {
        "plant_id": plant.get("id"),
        "plant_name": plant.get("name"),
        "wateringCycle": describe_cycle(plant),
        "daysUntilWatering": care.days_until_due,
        "status": care.status,
        "sunlightNeeds": plant.get("sunlight_needs") or default_sunlight,
        "lastWateringDate": _isoformat(last_watered),
    }
