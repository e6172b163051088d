from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from api.client import ApiError
from api.models import Notification, Pagination
from services.notification_service import (
    NotificationFeed,
    is_truncated,
    notification_style,
    preview_message,
    relative_time,
)


def note(nid, is_read=False, message="Hello"):
    return Notification(id=nid, title=f"Title {nid}", message=message, is_read=is_read)


@pytest.fixture
def notifications_api():
    api = MagicMock()
    api.list_notifications.side_effect = [
        ([note("n-1"), note("n-2", is_read=True)], Pagination(page=1, pages=2, total=3), 1),
        ([note("n-3")], Pagination(page=2, pages=2, total=3), 2),
    ]
    return api


@pytest.fixture
def feed(notifications_api):
    feed = NotificationFeed(notifications_api, page_size=2)
    feed.load_first()
    return feed


def ids(feed):
    return [n.id for n in feed.items]


def test_load_more_appends_until_last_page(feed, notifications_api):
    assert ids(feed) == ["n-1", "n-2"]
    assert feed.has_more

    feed.load_more()

    assert ids(feed) == ["n-1", "n-2", "n-3"]
    assert not feed.has_more
    assert notifications_api.list_notifications.call_args.kwargs == {"page": 2, "limit": 2}


def test_failed_load_more_keeps_page(feed, notifications_api):
    notifications_api.list_notifications.side_effect = ApiError("Failed to load notifications")
    with pytest.raises(ApiError):
        feed.load_more()
    assert feed.page == 1
    assert ids(feed) == ["n-1", "n-2"]


def test_mark_read_and_unread_count(feed, notifications_api):
    assert feed.unread_count == 1
    feed.mark_read("n-1")
    notifications_api.mark_notification_read.assert_called_once_with("n-1")
    assert feed.unread_count == 0


def test_mark_read_failure_leaves_item_unread(feed, notifications_api):
    notifications_api.mark_notification_read.side_effect = ApiError("Notification not found", 404)
    with pytest.raises(ApiError):
        feed.mark_read("n-1")
    assert feed.unread_count == 1


def test_mark_all_read(feed):
    feed.load_more()
    feed.mark_all_read()
    assert all(n.is_read for n in feed.items)


def test_delete(feed, notifications_api):
    feed.toggle_expanded("n-2")
    feed.delete("n-2")
    notifications_api.delete_notification.assert_called_once_with("n-2")
    assert ids(feed) == ["n-1"]
    assert "n-2" not in feed.expanded


def test_preview_truncates_long_messages():
    long_message = "x" * 150
    assert preview_message(long_message) == "x" * 100 + "..."
    assert preview_message(long_message, expanded=True) == long_message
    assert is_truncated(long_message)
    assert not is_truncated("short")
    assert preview_message(None) == ""


def test_unknown_type_uses_info_style():
    assert notification_style("mystery") == notification_style("info")


@pytest.mark.parametrize("created_at, expected", [
    ("2026-03-01T11:59:30.000Z", "just now"),
    ("2026-03-01T11:55:00.000Z", "5 minutes ago"),
    ("2026-03-01T11:00:00Z", "1 hour ago"),
    ("2026-02-27T12:00:00Z", "2 days ago"),
    ("not a date", "not a date"),
    ("", ""),
])
def test_relative_time(created_at, expected):
    now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
    assert relative_time(created_at, now=now) == expected
