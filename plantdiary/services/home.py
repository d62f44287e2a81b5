"""
Home screen service.

Glue between the routes/CLI and the care and diary calculations: fetches
the user's plants, task logs, and diaries from Supabase, works out the
user's "today", and hands plain snapshots to the pure calculators in
care_schedule, today_tasks, and diary_stats.
"""

from __future__ import annotations
from datetime import date, timedelta, tzinfo
from typing import Optional, Dict, Any, List, Tuple
from flask import current_app

from plantdiary.constants import TASK_WATERING
from plantdiary.services import supabase_client
from plantdiary.services import care_schedule
from plantdiary.services import diary_stats
from plantdiary.services.recurrence import interval_rule_for_plant
from plantdiary.services.today_tasks import compute_today_tasks
from plantdiary.utils.dates import local_today, month_bounds, resolve_timezone


def user_timezone(user_id: str) -> tzinfo:
    """Profile timezone when set, otherwise APP_TIMEZONE."""
    return resolve_timezone(
        supabase_client.get_user_timezone(user_id),
        current_app.config.get("APP_TIMEZONE", "UTC"),
    )


def resolve_user_today(user_id: str, today: Optional[date] = None) -> Tuple[date, tzinfo]:
    """
    The user's timezone and current calendar day.

    An explicit ``today`` (CLI --date, tests) is passed through unchanged.
    """
    tz = user_timezone(user_id)
    return (today or local_today(tz)), tz


def _sunlight_default() -> str:
    return current_app.config.get("DEFAULT_SUNLIGHT_NEEDS")


def _plants_with_logs(user_id: str, task_type: Optional[str] = None, since=None):
    plants = supabase_client.list_plants(user_id)
    logs = supabase_client.list_task_logs([p["id"] for p in plants], task_type=task_type, since=since)
    return plants, logs


def _plants_with_latest_watering(user_id: str, today: date):
    """
    Plants plus enough watering history to find each plant's latest watering.

    Logs are read back to the longest watering interval (plus a day for
    timezone slack). A plant with nothing in that window is overdue or was
    never watered; its latest watering is looked up on its own.
    """
    plants = supabase_client.list_plants(user_id)
    if not plants:
        return plants, {}

    window = max(interval_rule_for_plant(p).days for p in plants) + 1
    logs = supabase_client.list_task_logs(
        [p["id"] for p in plants], task_type=TASK_WATERING, since=today - timedelta(days=window)
    )

    for plant in plants:
        if logs.get(plant["id"]):
            continue
        latest = supabase_client.latest_task_log(plant["id"], TASK_WATERING)
        logs[plant["id"]] = (
            [{"plant_id": plant["id"], "type": TASK_WATERING, "completion_date": latest}] if latest else []
        )
    return plants, logs


# ============================================================================
# Plants & tasks
# ============================================================================

def get_today_tasks(user_id: str, today: Optional[date] = None) -> Dict[str, Any]:
    """Today's watering and sunlight tasks for all of the user's plants."""
    today, tz = resolve_user_today(user_id, today)
    plants, logs = _plants_with_latest_watering(user_id, today)
    return compute_today_tasks(plants, logs, today, tz)


def get_plant_statuses(user_id: str, today: Optional[date] = None) -> List[Dict[str, Any]]:
    """Watering status card for each of the user's plants."""
    today, tz = resolve_user_today(user_id, today)
    plants, logs = _plants_with_latest_watering(user_id, today)
    return care_schedule.get_plant_statuses(plants, logs, today, tz, _sunlight_default())


def get_care_stats(user_id: str, today: Optional[date] = None) -> List[Dict[str, Any]]:
    """Recent care activity per plant over CARE_STATS_LOOKBACK_DAYS."""
    today, tz = resolve_user_today(user_id, today)
    lookback = current_app.config.get("CARE_STATS_LOOKBACK_DAYS", 30)
    # One extra day so timestamps that fall on the window's first local day are fetched
    plants, logs = _plants_with_logs(user_id, since=today - timedelta(days=lookback + 1))
    return care_schedule.compute_care_stats(plants, logs, today, lookback, tz, _sunlight_default())


def get_plants_watering_today(user_id: str, today: Optional[date] = None) -> Dict[str, Any]:
    """Plants whose weekday/day-of-month watering anchor is today."""
    today, _ = resolve_user_today(user_id, today)
    plants = supabase_client.list_plants(user_id)
    return care_schedule.plants_due_by_anchor(plants, today)


def get_plant_care_info(user_id: str, plant_id: str, today: Optional[date] = None) -> Optional[Dict[str, Any]]:
    """
    Care summary for one plant.

    Returns:
        Care info dict, or None if the plant doesn't exist or isn't the user's
    """
    plant = supabase_client.get_plant_by_id(plant_id, user_id)
    if not plant:
        return None

    today, tz = resolve_user_today(user_id, today)
    last_watering = supabase_client.latest_task_log(plant["id"], TASK_WATERING)
    return care_schedule.compute_plant_care_info(plant, last_watering, today, tz, _sunlight_default())


# ============================================================================
# Diaries
# ============================================================================

def get_weekly_diaries(user_id: str, today: Optional[date] = None) -> Dict[str, Any]:
    """Diary presence for the last week and the current streak."""
    today, tz = resolve_user_today(user_id, today)
    days = current_app.config.get("DIARY_WEEK_WINDOW_DAYS", 7)
    diaries = supabase_client.list_diaries(user_id, today - timedelta(days=days - 1), today)
    return diary_stats.compute_weekly_diaries(diaries, today, days, tz)


def get_monthly_status(user_id: str, year: int, month: int) -> Dict[str, Any]:
    """Diary days and per-day emotion for one month."""
    tz = user_timezone(user_id)
    start, end = month_bounds(year, month)
    diaries = supabase_client.list_diaries(user_id, start, end)
    return diary_stats.compute_monthly_status(year, month, diaries, tz)


def get_diaries_on(user_id: str, day: date) -> List[Dict[str, Any]]:
    """A user's diaries for one calendar day, most recently created first."""
    return supabase_client.list_diaries_on(user_id, day)


def get_last_uploaded(user_id: str, today: Optional[date] = None) -> Dict[str, Any]:
    """Days since the user's last diary and the resulting plant mood."""
    today, tz = resolve_user_today(user_id, today)
    last_diary = supabase_client.get_last_diary(user_id)
    return diary_stats.compute_last_uploaded(last_diary, today, tz)
