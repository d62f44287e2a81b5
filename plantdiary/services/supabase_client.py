"""
Supabase client initialization and read helpers.

Provides centralized access to Supabase for:
- Session verification (Supabase Auth)
- Profile lookups (timezone)
- Plant, task log, and diary reads feeding the care/diary calculations

Reads never raise: failures are logged and an empty result is returned,
so a storage outage shows up as "no data" rather than a 500.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, List, Iterable
from datetime import date, datetime
import logging
from flask import current_app, has_app_context
from supabase import create_client, Client

logger = logging.getLogger(__name__)


def _safe_log_error(message: str) -> None:
    """
    Log an error via the Flask logger when an app context exists.

    Falls back to the module logger so functions can be called from
    tests and CLI commands without an app context.
    """
    if has_app_context():
        current_app.logger.error(message)
    else:
        logger.error(message)


# Global client instances (initialized once per app)
_supabase_client: Optional[Client] = None  # User client (anon key)
_supabase_admin: Optional[Client] = None   # Admin client (service role key)


def init_supabase(app) -> None:
    """
    Initialize Supabase clients with app config.
    Creates two clients:
    - Regular client with anon key (for session verification)
    - Admin client with service role key (for server-side reads filtered by user)

    Call this from the Flask app factory.
    """
    global _supabase_client, _supabase_admin

    url = app.config.get("SUPABASE_URL", "")
    anon_key = app.config.get("SUPABASE_ANON_KEY", "")
    service_key = app.config.get("SUPABASE_SERVICE_ROLE_KEY", "")

    if not url or not anon_key:
        app.logger.warning("Supabase URL or ANON_KEY not configured. Supabase features will be disabled.")
        _supabase_client = None
        _supabase_admin = None
        return

    try:
        _supabase_client = create_client(url, anon_key)
        app.logger.info("Supabase client initialized successfully")

        if service_key:
            _supabase_admin = create_client(url, service_key)
            app.logger.info("Supabase admin client initialized successfully")
        else:
            app.logger.warning("SUPABASE_SERVICE_ROLE_KEY not configured. Plant and diary reads will be disabled.")

    except Exception as e:
        app.logger.error(f"Failed to initialize Supabase client: {e}")
        _supabase_client = None
        _supabase_admin = None


def get_admin_client() -> Optional[Client]:
    """Get the admin Supabase client instance (admin client with service role key)."""
    return _supabase_admin


def is_configured() -> bool:
    """Check if Supabase is properly configured."""
    return _supabase_admin is not None


def _iso(value) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


# ============================================================================
# Auth & Profile
# ============================================================================

def verify_session(access_token: str, refresh_token: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """
    Verify a user session token and return user data.

    Args:
        access_token: JWT access token from Supabase Auth
        refresh_token: Optional refresh token

    Returns:
        User dict with id, email, etc. or None if invalid
    """
    if not _supabase_client:
        return None

    try:
        session_response = _supabase_client.auth.set_session(
            access_token=access_token,
            refresh_token=refresh_token or ""
        )

        if session_response and session_response.user:
            return session_response.user.model_dump()
        return None

    except Exception as e:
        _safe_log_error(f"Error verifying session: {e}")
        return None


def get_user_profile(user_id: str) -> Optional[Dict[str, Any]]:
    """
    Get user profile by user ID.

    Returns:
        Profile dict (including timezone) or None if not found
    """
    supabase = get_admin_client()
    if not supabase:
        return None

    try:
        response = supabase.table("profiles").select("*").eq("id", user_id).maybe_single().execute()
        return response.data if response else None
    except Exception as e:
        _safe_log_error(f"Error fetching user profile: {e}")
        return None


def get_user_timezone(user_id: str) -> Optional[str]:
    """IANA timezone name stored on the user's profile, if any."""
    profile = get_user_profile(user_id)
    return (profile or {}).get("timezone") or None


# ============================================================================
# Plants
# ============================================================================

def list_plants(user_id: str) -> List[Dict[str, Any]]:
    """
    Get all plants for a user, oldest first.

    Returns:
        List of plant dictionaries, empty list if error
    """
    supabase = get_admin_client()
    if not supabase:
        return []

    try:
        response = (supabase
                    .table("plants")
                    .select("*")
                    .eq("user_id", user_id)
                    .order("created_at")
                    .execute())
        return response.data or []
    except Exception as e:
        _safe_log_error(f"Error listing plants: {e}")
        return []


def get_plant_by_id(plant_id: str, user_id: str) -> Optional[Dict[str, Any]]:
    """
    Get a single plant by ID, verifying ownership.

    Returns:
        Plant dictionary if found and owned by user, None otherwise
    """
    supabase = get_admin_client()
    if not supabase:
        return None

    try:
        response = (supabase
                    .table("plants")
                    .select("*")
                    .eq("id", plant_id)
                    .eq("user_id", user_id)
                    .maybe_single()
                    .execute())
        return response.data if response else None
    except Exception as e:
        _safe_log_error(f"Error getting plant {plant_id}: {e}")
        return None


# ============================================================================
# Task Logs
# ============================================================================

def list_task_logs(
    plant_ids: Iterable[str],
    task_type: Optional[str] = None,
    since=None,
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Get task logs for several plants in a single query (avoids N+1 queries).

    Args:
        plant_ids: Plant UUIDs (already ownership-checked by the caller)
        task_type: Optional type filter (watering, sunlight, other)
        since: Optional date/datetime lower bound on completion_date

    Returns:
        Dict mapping plant_id -> list of logs, most recent first
    """
    plant_ids = list(plant_ids)
    if not plant_ids:
        return {}

    supabase = get_admin_client()
    if not supabase:
        return {}

    try:
        query = (supabase
                 .table("task_logs")
                 .select("id, plant_id, type, completion_date")
                 .in_("plant_id", plant_ids))

        if task_type:
            query = query.eq("type", task_type)
        if since is not None:
            query = query.gte("completion_date", _iso(since))

        response = query.order("completion_date", desc=True).execute()

        result: Dict[str, List[Dict[str, Any]]] = {pid: [] for pid in plant_ids}
        for log in response.data or []:
            pid = log.get("plant_id")
            if pid in result:
                result[pid].append(log)
        return result

    except Exception as e:
        _safe_log_error(f"Error fetching task logs: {e}")
        return {}


def latest_task_log(plant_id: str, task_type: str) -> Optional[str]:
    """
    completion_date of the most recent log of one type for a plant.

    Returns:
        ISO timestamp string, or None if the plant has no such log
    """
    supabase = get_admin_client()
    if not supabase:
        return None

    try:
        response = (supabase
                    .table("task_logs")
                    .select("completion_date")
                    .eq("plant_id", plant_id)
                    .eq("type", task_type)
                    .order("completion_date", desc=True)
                    .limit(1)
                    .execute())

        if response.data:
            return response.data[0].get("completion_date")
        return None

    except Exception as e:
        _safe_log_error(f"Error fetching latest task log: {e}")
        return None


# ============================================================================
# Diaries
# ============================================================================

_DIARY_FIELDS = "id, user_id, plant_id, date, emotion, created_at"


def list_diaries(user_id: str, start: date, end: date) -> List[Dict[str, Any]]:
    """
    Get a user's diaries dated between start and end (inclusive).

    Returns:
        List of diary dictionaries, most recently created first
    """
    supabase = get_admin_client()
    if not supabase:
        return []

    try:
        response = (supabase
                    .table("diaries")
                    .select(_DIARY_FIELDS)
                    .eq("user_id", user_id)
                    .gte("date", _iso(start))
                    .lte("date", _iso(end))
                    .order("created_at", desc=True)
                    .execute())
        return response.data or []
    except Exception as e:
        _safe_log_error(f"Error listing diaries: {e}")
        return []


def list_diaries_on(user_id: str, day: date) -> List[Dict[str, Any]]:
    """Get a user's diaries for one calendar day."""
    return list_diaries(user_id, day, day)


def get_last_diary(user_id: str) -> Optional[Dict[str, Any]]:
    """
    Get the user's most recent diary by date.

    Diaries without a date are skipped; Postgres sorts NULL first on a
    descending order.

    Returns:
        Diary dictionary, or None if the user has never written one
    """
    supabase = get_admin_client()
    if not supabase:
        return None

    try:
        response = (supabase
                    .table("diaries")
                    .select(_DIARY_FIELDS)
                    .eq("user_id", user_id)
                    .not_.is_("date", "null")
                    .order("date", desc=True)
                    .order("created_at", desc=True)
                    .limit(1)
                    .execute())

        if response.data:
            return response.data[0]
        return None

    except Exception as e:
        _safe_log_error(f"Error fetching last diary: {e}")
        return None
