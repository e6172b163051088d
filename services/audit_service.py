"""
Activity logging for console actions.
Every event becomes one structured log line; callers may also keep a bounded
in-session list of entries for display.
"""

import hashlib
import logging
import os
from datetime import datetime, timezone

from config.constants import CRITICAL_ACTIONS

logger = logging.getLogger("TicketOps")

MAX_SESSION_ENTRIES = 500
RECENT_ENTRIES_KEPT = 300

_SEVERITY_LEVELS = {
    "low": logging.INFO,
    "medium": logging.INFO,
    "high": logging.WARNING,
    "critical": logging.WARNING,
}


def generate_audit_id() -> str:
    """Generate a unique, immutable audit ID for each log entry."""
    timestamp = datetime.now().isoformat()
    random_part = os.urandom(8).hex()
    raw = f"{timestamp}-{random_part}"
    return f"AUD-{hashlib.sha256(raw.encode()).hexdigest()[:12].upper()}"


def log_activity_event(
    action_type: str,
    category: str,
    user_role: str,
    description: str,
    success: bool = True,
    performed_by: str = None,
    entity_id: str = None,
    old_value: str = None,
    new_value: str = None,
    error_message: str = None,
    metadata: dict = None,
    activity_log: list = None,
) -> dict:
    """
    Log an activity event.

    Args:
        action_type: Key of CRITICAL_ACTIONS (unknown types log as low severity)
        category: Area of the console, e.g. "authentication", "rights", "ticket"
        user_role: Role of the acting user
        description: Human-readable summary
        activity_log: Optional list (usually in session state) the entry is appended to

    Returns:
        The log entry dict
    """
    severity = CRITICAL_ACTIONS.get(action_type, {"severity": "low"})["severity"]
    is_critical = severity in ("high", "critical")
    timestamp = datetime.now(timezone.utc)

    entry = {
        "audit_id": generate_audit_id(),
        "timestamp": timestamp.isoformat(),
        "action_type": action_type,
        "category": category,
        "description": description,
        "performed_by": performed_by,
        "user_role": user_role,
        "entity_id": entity_id,
        "old_value": old_value,
        "new_value": new_value,
        "severity": severity,
        "is_critical": is_critical,
        "success": success,
        "error_message": error_message,
        "metadata": dict(metadata or {}),
    }

    level = _SEVERITY_LEVELS.get(severity, logging.INFO)
    if not success:
        level = max(level, logging.WARNING)
    logger.log(
        level,
        f"AUDIT_ID={entry['audit_id']} | ACTION={action_type} | CATEGORY={category} | "
        f"SEVERITY={severity} | ROLE={user_role or 'unknown'} | USER={performed_by or 'unknown'} | "
        f"ENTITY={entity_id or '-'} | SUCCESS={success} | {description}"
        + (f" | ERROR={error_message}" if error_message else "")
    )

    if activity_log is not None:
        activity_log.append(entry)
        _trim(activity_log)

    return entry


def _trim(activity_log: list):
    """Keep critical entries plus the most recent ones once the log grows large."""
    if len(activity_log) <= MAX_SESSION_ENTRIES:
        return
    critical_entries = [e for e in activity_log if e.get("is_critical", False)]
    recent_entries = activity_log[-RECENT_ENTRIES_KEPT:]
    seen = set()
    merged = []
    for entry in critical_entries + recent_entries:
        aid = entry.get("audit_id")
        if aid not in seen:
            seen.add(aid)
            merged.append(entry)
    activity_log[:] = merged
