"""
Notification feed state for the notifications page.

The feed keeps the pages loaded so far ("load more" appends the next page)
and applies read/delete changes locally once the backend has accepted them.
"""
import logging
from dataclasses import replace
from datetime import datetime, timezone

from config.constants import NOTIFICATION_PAGE_SIZE, NOTIFICATION_PREVIEW_CHARS, NOTIFICATION_TYPES

logger = logging.getLogger("TicketOps")


def notification_style(notification_type) -> dict:
    return NOTIFICATION_TYPES.get(notification_type, NOTIFICATION_TYPES["info"])


def preview_message(message, expanded: bool = False, limit: int = NOTIFICATION_PREVIEW_CHARS) -> str:
    """Truncate long messages to `limit` characters unless expanded."""
    message = message or ""
    if expanded or len(message) <= limit:
        return message
    return message[:limit] + "..."


def is_truncated(message, limit: int = NOTIFICATION_PREVIEW_CHARS) -> bool:
    return len(message or "") > limit


def relative_time(created_at: str, now: datetime = None) -> str:
    """Format an ISO timestamp as "5 minutes ago"; unparseable values pass through."""
    if not created_at:
        return ""
    try:
        created = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    except ValueError:
        return created_at
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)

    seconds = max(int((now - created).total_seconds()), 0)
    if seconds < 60:
        return "just now"
    unit, size = next((u, s) for u, s in (("day", 86400), ("hour", 3600), ("minute", 60)) if seconds >= s)
    count = seconds // size
    return f"{count} {unit}{'s' if count != 1 else ''} ago"


class NotificationFeed:
    """
    Args:
        api: TicketOpsApi (or anything with the notification methods)
        page_size: Notifications fetched per page
    """

    def __init__(self, api, page_size: int = NOTIFICATION_PAGE_SIZE):
        self.api = api
        self.page_size = page_size
        self.items = []
        self.page = 0
        self.has_more = False
        self.expanded = set()

    def load_first(self):
        """Replace the feed with page 1. Raises ApiError on failure."""
        items, pagination, _ = self.api.list_notifications(page=1, limit=self.page_size)
        self.items = list(items)
        self.page = 1
        self.has_more = pagination.page < pagination.pages
        self.expanded.clear()

    def load_more(self):
        """Append the next page. The page counter only moves once the fetch succeeds."""
        next_page = self.page + 1
        items, pagination, _ = self.api.list_notifications(page=next_page, limit=self.page_size)
        known = {n.id for n in self.items}
        self.items.extend(n for n in items if n.id not in known)
        self.page = next_page
        self.has_more = next_page < pagination.pages

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.items if not n.is_read)

    def mark_read(self, notification_id: str):
        self.api.mark_notification_read(notification_id)
        self.items = [replace(n, is_read=True) if n.id == notification_id else n for n in self.items]

    def mark_all_read(self):
        self.api.mark_all_notifications_read()
        self.items = [replace(n, is_read=True) for n in self.items]
        logger.info("All notifications marked as read")

    def delete(self, notification_id: str):
        self.api.delete_notification(notification_id)
        self.items = [n for n in self.items if n.id != notification_id]
        self.expanded.discard(notification_id)

    def toggle_expanded(self, notification_id: str):
        self.expanded ^= {notification_id}
