"""
Home screen JSON endpoints.

Endpoints:
- /home/my-plants: Watering status card per plant
- /home/today-tasks: Today's watering and sunlight tasks
- /home/weekly-diaries: Last 7 days of diary presence and the streak
- /home/diaries/<date>: Diaries written on one day
"""

from __future__ import annotations
from flask import Blueprint
from plantdiary.services import home
from plantdiary.utils.auth import require_auth, get_current_user_id
from plantdiary.utils.errors import error_response, sanitize_error, success_response, log_info
from plantdiary.utils.validation import parse_iso_date

home_bp = Blueprint("home", __name__, url_prefix="/home")


@home_bp.route("/my-plants")
@require_auth
def my_plants():
    """Watering status for each of the user's plants."""
    user_id = get_current_user_id()
    try:
        return success_response(home.get_plant_statuses(user_id))
    except Exception as e:
        return error_response(sanitize_error(e, "database", "Failed to build plant statuses"))


@home_bp.route("/today-tasks")
@require_auth
def today_tasks():
    """
    Today's care tasks.

    Returns:
        {
            "success": true,
            "data": {"wateringCount", "sunlightCount", "totalTasks", "tasks": [...]}
        }
    """
    user_id = get_current_user_id()
    try:
        tasks = home.get_today_tasks(user_id)
    except Exception as e:
        return error_response(sanitize_error(e, "database", "Failed to build today tasks"))

    log_info("Today tasks built", user_id=user_id, total_tasks=tasks["totalTasks"])
    return success_response(tasks)


@home_bp.route("/weekly-diaries")
@require_auth
def weekly_diaries():
    """Diary presence for the last week and the current streak."""
    user_id = get_current_user_id()
    try:
        return success_response(home.get_weekly_diaries(user_id))
    except Exception as e:
        return error_response(sanitize_error(e, "database", "Failed to build weekly diaries"))


@home_bp.route("/diaries/<day>")
@require_auth
def diaries_by_date(day):
    """Diaries written on one calendar day (YYYY-MM-DD)."""
    parsed, error = parse_iso_date(day)
    if error:
        return error_response(error, "validation")

    user_id = get_current_user_id()
    try:
        return success_response(home.get_diaries_on(user_id, parsed))
    except Exception as e:
        return error_response(sanitize_error(e, "database", "Failed to fetch diaries by date"))
