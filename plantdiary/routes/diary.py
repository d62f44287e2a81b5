"""
Diary summary JSON endpoints.

Endpoints:
- /diaries/last-uploaded: Days since the last diary and the plant mood
- /diaries/monthly/<year>/<month>: Diary days and emotions for a month
- /diaries/date/<date>: Diaries written on one day
- /diaries/plants/<plant_id>/care-info: Care summary for the diary write screen
"""

from __future__ import annotations
from flask import Blueprint
from plantdiary.services import home
from plantdiary.utils.auth import require_auth, get_current_user_id
from plantdiary.utils.errors import GENERIC_MESSAGES, error_response, sanitize_error, success_response, log_warning
from plantdiary.utils.validation import is_valid_uuid, parse_iso_date, parse_year_month

diary_bp = Blueprint("diary", __name__, url_prefix="/diaries")


@diary_bp.route("/last-uploaded")
@require_auth
def last_uploaded():
    """
    Recency of the user's last diary.

    daysSinceLastUpload is null when the user has never written a diary.
    """
    user_id = get_current_user_id()
    try:
        return success_response(home.get_last_uploaded(user_id))
    except Exception as e:
        return error_response(sanitize_error(e, "database", "Failed to fetch last diary"))


@diary_bp.route("/monthly/<year>/<month>")
@require_auth
def monthly_status(year, month):
    """Days of the month with a diary and the emotion shown for each."""
    parsed, error = parse_year_month(year, month)
    if error:
        return error_response(error, "validation")

    user_id = get_current_user_id()
    try:
        return success_response(home.get_monthly_status(user_id, *parsed))
    except Exception as e:
        return error_response(sanitize_error(e, "database", "Failed to build monthly status"))


@diary_bp.route("/date/<day>")
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


@diary_bp.route("/plants/<plant_id>/care-info")
@require_auth
def plant_care_info(plant_id):
    """Watering cycle, days until watering, and last watering for one plant."""
    if not is_valid_uuid(plant_id):
        return error_response("Invalid plant ID.", "validation")

    user_id = get_current_user_id()
    try:
        info = home.get_plant_care_info(user_id, plant_id)
    except Exception as e:
        return error_response(sanitize_error(e, "database", "Failed to build plant care info"))

    if info is None:
        log_warning("Care info requested for missing plant", user_id=user_id, plant_id=plant_id)
        return error_response(GENERIC_MESSAGES["not_found"], "not_found")
    return success_response(info)
