"""
Production error handling & logging utilities.
Classifies failures into user-safe messages and logs the technical details.
"""
import streamlit as st
import logging
import traceback
from datetime import datetime
from functools import wraps

from api.client import ApiError

logger = logging.getLogger("TicketOps")

# User-safe error messages (hide technical details)
USER_SAFE_MESSAGES = {
    "backend": "Unable to reach the ticketing service. Please try again later or contact support.",
    "network": "Network connection issue. Please check your connection and try again.",
    "session": "Your session has expired. Please sign in again.",
    "permission": "You don't have permission to perform this action.",
    "validation": "The data provided is invalid. Please check your input.",
    "timeout": "The operation took too long. Please try again.",
    "not_found": "The requested resource was not found.",
    "conflict": "This operation conflicts with the current state of the record.",
    "default": "An unexpected error occurred. Please try again or contact support."
}

_STATUS_CATEGORIES = {
    400: "validation",
    401: "session",
    403: "permission",
    404: "not_found",
    409: "conflict",
    422: "validation",
}


def get_error_id() -> str:
    """Generate unique error ID for support reference."""
    import hashlib
    timestamp = datetime.now().isoformat()
    return hashlib.md5(timestamp.encode()).hexdigest()[:8].upper()


def _current_role() -> str:
    session = st.session_state.get("session")
    return getattr(session, "role", None) or "unknown"


def log_error(error: Exception, context: str = "", user_role: str = None) -> str:
    """
    Log technical error details to file and return error ID for user reference.

    Args:
        error: The exception that occurred
        context: Additional context about what was being attempted
        user_role: Current user's role for audit purposes

    Returns:
        Error ID for user reference
    """
    error_id = get_error_id()
    st.session_state["error_count"] = st.session_state.get("error_count", 0) + 1

    logger.error(
        f"ERROR_ID={error_id} | "
        f"CONTEXT={context} | "
        f"ROLE={user_role or 'unknown'} | "
        f"TYPE={type(error).__name__} | "
        f"STATUS={getattr(error, 'status_code', None) or '-'} | "
        f"MESSAGE={str(error)} | "
        f"TRACE={traceback.format_exc()}"
    )

    return error_id


def classify_error(error: Exception) -> str:
    """Classify error type to determine user-safe message."""
    status = getattr(error, "status_code", None)
    if status in _STATUS_CATEGORIES:
        return _STATUS_CATEGORIES[status]
    if status and status >= 500:
        return "backend"

    error_str = str(error).lower()
    error_type = type(error).__name__.lower()

    # Transport errors
    if isinstance(error, TimeoutError) or 'timeout' in error_type or 'timed out' in error_str:
        return "timeout"
    if any(x in error_str for x in ['connection refused', 'network', 'unreachable']):
        return "network"
    if 'connection' in error_type:
        return "network"

    # Permission errors
    if any(x in error_str for x in ['permission', 'denied', 'unauthorized', 'forbidden']):
        return "permission"

    # Validation errors
    if isinstance(error, ValueError) or any(x in error_str for x in ['invalid', 'validation', 'required', 'missing']):
        return "validation"

    # Not found errors
    if any(x in error_str for x in ['not found', 'does not exist']):
        return "not_found"

    return "default"


def user_message_for(error: Exception) -> str:
    """API errors carry the server message or a per-call fallback and are shown as-is."""
    if isinstance(error, ApiError) and error.message:
        return error.message
    return USER_SAFE_MESSAGES.get(classify_error(error), USER_SAFE_MESSAGES["default"])


def safe_execute(func=None, context: str = "", fallback=None, show_error: bool = True):
    """
    Decorator/function for safe execution with error handling.

    Can be used as decorator:
        @safe_execute(context="Loading tickets")
        def load_tickets(): ...

    Or wrap a callable and call the result:
        sites = safe_execute(lambda: load_sites(api, uid), context="load_sites", fallback=list)()
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except Exception as e:
                error_id = log_error(e, context or f.__name__, _current_role())

                if show_error:
                    st.error(f"{user_message_for(e)} (Ref: {error_id})")

                return fallback() if callable(fallback) else fallback
        return wrapper

    # Allow use as @safe_execute or @safe_execute(context="...")
    if func is not None:
        return decorator(func)
    return decorator


def handle_api_error(error: Exception, operation: str) -> tuple:
    """
    Handle backend errors consistently.
    Returns (success: bool, user_message: str, error_id: str)
    """
    error_id = log_error(error, f"API:{operation}", _current_role())
    return False, f"{user_message_for(error)} (Ref: {error_id})", error_id
