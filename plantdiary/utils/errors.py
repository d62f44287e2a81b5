"""
Error handling utilities for sanitizing user-facing messages and logging.

Provides consistent error handling across the application:
- Sanitizes error messages to prevent information leakage
- Logs detailed error information for debugging
- Builds the JSON error envelope returned by the API routes
"""

from __future__ import annotations
from flask import current_app, jsonify

# User-friendly generic error messages
GENERIC_MESSAGES = {
    "database": "We're experiencing technical difficulties. Please try again.",
    "validation": "The information provided is invalid. Please check and try again.",
    "permission": "You don't have permission to perform this action.",
    "not_found": "The requested item was not found.",
}

# HTTP status per error type
ERROR_STATUS = {
    "database": 500,
    "validation": 400,
    "permission": 403,
    "not_found": 404,
}


def sanitize_error(
    error: Exception,
    error_type: str = "database",
    log_prefix: str = ""
) -> str:
    """
    Sanitize error message for user display and log full details.

    Args:
        error: The exception that occurred
        error_type: Type of error (database, validation, permission, not_found)
        log_prefix: Optional prefix for log message context

    Returns:
        User-friendly error message

    Examples:
        >>> try:
        ...     tasks = home.get_today_tasks(user_id)
        ... except Exception as e:
        ...     return error_response(sanitize_error(e, "database", "Failed to build tasks"))
    """
    error_message = str(error)
    log_message = f"{log_prefix}: {error_message}" if log_prefix else error_message

    if error_type in ["validation", "not_found"]:
        # These are expected errors (user mistakes), log as info
        current_app.logger.info(f"Expected error - {log_message}")
    else:
        current_app.logger.error(f"Unexpected error - {log_message}", exc_info=True)

    return GENERIC_MESSAGES.get(error_type, GENERIC_MESSAGES["database"])


def error_response(message: str, error_type: str = "database"):
    """JSON error envelope with the status code for ``error_type``."""
    return jsonify({"success": False, "error": message}), ERROR_STATUS.get(error_type, 500)


def success_response(data):
    """JSON success envelope."""
    return jsonify({"success": True, "data": data}), 200


def log_warning(message: str, **context) -> None:
    """
    Log a warning with optional context.

    Examples:
        >>> log_warning("Unknown timezone on profile", user_id="123", timezone="Mars/Base")
    """
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        message = f"{message} | Context: {context_str}"

    current_app.logger.warning(message)


def log_info(message: str, **context) -> None:
    """
    Log an info message with optional context.

    Examples:
        >>> log_info("Today tasks built", user_id="123", total_tasks=4)
    """
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        message = f"{message} | Context: {context_str}"

    current_app.logger.info(message)
