"""
Plant care JSON endpoints.

Endpoints:
- /plants/watering/today: Plants whose weekday/day-of-month anchor is today
- /plants/care-stats: Recent care activity per plant
"""

from __future__ import annotations
from flask import Blueprint
from plantdiary.services import home
from plantdiary.utils.auth import require_auth, get_current_user_id
from plantdiary.utils.errors import error_response, sanitize_error, success_response

plants_bp = Blueprint("plants", __name__, url_prefix="/plants")


@plants_bp.route("/watering/today")
@require_auth
def watering_today():
    """Plants scheduled for watering today by calendar anchor."""
    user_id = get_current_user_id()
    try:
        return success_response(home.get_plants_watering_today(user_id))
    except Exception as e:
        return error_response(sanitize_error(e, "database", "Failed to list plants to water today"))


@plants_bp.route("/care-stats")
@require_auth
def care_stats():
    """Care counts and watering status over the lookback window."""
    user_id = get_current_user_id()
    try:
        return success_response(home.get_care_stats(user_id))
    except Exception as e:
        return error_response(sanitize_error(e, "database", "Failed to build care stats"))
