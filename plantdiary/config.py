"""
Centralized configuration for all environments.

Select a config by setting:
  APP_CONFIG=plantdiary.config.DevConfig      # local dev
  APP_CONFIG=plantdiary.config.ProdConfig     # production (default if unset)
  APP_CONFIG=plantdiary.config.TestConfig     # pytest

Notes:
- SECRET_KEY is read from FLASK_SECRET_KEY
- Rate limiting uses Flask-Limiter v3 keys (RATELIMIT_*).
"""

from __future__ import annotations
import os
import secrets
from datetime import timedelta

from plantdiary.constants import DEFAULT_SUNLIGHT_NEEDS, STREAK_WINDOW_DAYS


class BaseConfig:
    # Random key when FLASK_SECRET_KEY is missing; production requires a real one at startup
    SECRET_KEY = os.getenv("FLASK_SECRET_KEY") or secrets.token_hex(32)
    DEBUG = False
    TESTING = False

    # Session configuration
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    SESSION_COOKIE_SECURE = True  # Only send cookies over HTTPS (overridden in dev)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"

    # Supabase (Database + Auth)
    SUPABASE_URL = os.getenv("SUPABASE_URL", "")
    SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
    SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")

    # Flask-Limiter v3
    RATELIMIT_ENABLED = os.getenv("RATELIMIT_ENABLED", "true").lower() == "true"
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "60 per minute; 3000 per day")

    # Care & diary summaries
    APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Asia/Seoul")  # Used when a profile has no timezone
    CARE_STATS_LOOKBACK_DAYS = int(os.getenv("CARE_STATS_LOOKBACK_DAYS", "30"))
    DIARY_WEEK_WINDOW_DAYS = STREAK_WINDOW_DAYS
    DEFAULT_SUNLIGHT_NEEDS = os.getenv("DEFAULT_SUNLIGHT_NEEDS", DEFAULT_SUNLIGHT_NEEDS)

    # Misc
    PREFERRED_URL_SCHEME = os.getenv("PREFERRED_URL_SCHEME", "https")
    JSON_SORT_KEYS = False


class ProdConfig(BaseConfig):
    """Production settings (selected by default if APP_CONFIG is unset)."""
    pass


class DevConfig(BaseConfig):
    """Developer-friendly settings."""
    ENV = "development"
    DEBUG = True
    PREFERRED_URL_SCHEME = "http"
    # Allow cookies over HTTP in dev
    SESSION_COOKIE_SECURE = False


class TestConfig(BaseConfig):
    """CI/pytest settings."""
    TESTING = True
    DEBUG = True
    # Usually disable the limiter in tests to avoid flakiness
    RATELIMIT_ENABLED = False
    APP_TIMEZONE = "UTC"
    SUPABASE_URL = ""
    SUPABASE_ANON_KEY = ""
    SUPABASE_SERVICE_ROLE_KEY = ""
