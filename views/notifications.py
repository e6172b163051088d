"""Notifications page: the signed-in user's notifications with read/delete actions."""

import html

import streamlit as st

from api.client import ApiError
from components.empty_states import render_empty_state
from components.feedback import render_error_state
from core.data import safe_rerun
from core.errors import handle_api_error
from services.notification_service import (
    NotificationFeed,
    is_truncated,
    notification_style,
    preview_message,
    relative_time,
)
from views.context import AppContext


def _get_feed(ctx: AppContext) -> NotificationFeed:
    feed = st.session_state.get("notification_feed")
    if feed is None:
        feed = NotificationFeed(ctx.api)
        feed.load_first()
        st.session_state.notification_feed = feed
    return feed


def _run(action, context: str) -> bool:
    """Run a feed action; shows the error and returns False when the backend refuses it."""
    try:
        action()
    except ApiError as e:
        _, message, _ = handle_api_error(e, context)
        st.error(message)
        return False
    return True


def _render_card(feed: NotificationFeed, notification):
    style = notification_style(notification.type)
    expanded = notification.id in feed.expanded
    unread = "" if notification.is_read else " unread"
    sender = f" · {html.escape(notification.created_by)}" if notification.created_by else ""

    body, actions = st.columns([6, 1])
    with body:
        st.markdown(f"""
        <div class="record-card{unread}">
            <div class="record-title"><span style="color: {style['color']};">{style['icon']}</span>
                {html.escape(notification.title)}</div>
            <div class="record-meta">{relative_time(notification.created_at)}{sender}</div>
            <div class="record-body">{html.escape(preview_message(notification.message, expanded))}</div>
        </div>
        """, unsafe_allow_html=True)
        if is_truncated(notification.message):
            st.button("Show Less" if expanded else "Read More", key=f"notif_expand_{notification.id}",
                      on_click=feed.toggle_expanded, args=(notification.id,))
        if notification.link:
            st.caption(f"Link: {notification.link}")
    with actions:
        if not notification.is_read:
            if st.button("✓", key=f"notif_read_{notification.id}", help="Mark as read"):
                if _run(lambda: feed.mark_read(notification.id), "mark_notification_read"):
                    safe_rerun()
        if st.button("✕", key=f"notif_delete_{notification.id}", help="Delete"):
            if _run(lambda: feed.delete(notification.id), "delete_notification"):
                st.session_state.notification_notice = "Notification deleted"
                safe_rerun()


def render(ctx: AppContext) -> None:
    """Render this page."""
    st.markdown('<p class="page-header-title">My Notifications</p>', unsafe_allow_html=True)

    if st.session_state.pop("retry_notifications", False):
        st.session_state.notification_feed = None

    try:
        feed = _get_feed(ctx)
    except ApiError as e:
        _, message, _ = handle_api_error(e, "load_notifications")
        render_error_state(message, error_type="backend", retry_key="retry_notifications")
        return

    notice = st.session_state.pop("notification_notice", None)
    if notice:
        st.success(notice)

    count = len(feed.items)
    col1, col2, col3 = st.columns([3, 1, 1])
    with col1:
        st.caption(f"{count} notification{'s' if count != 1 else ''} · {feed.unread_count} unread")
    with col2:
        if feed.unread_count and st.button("Mark all read", key="notif_read_all"):
            if _run(feed.mark_all_read, "mark_all_notifications_read"):
                st.session_state.notification_notice = "All notifications marked as read"
                safe_rerun()
    with col3:
        if st.button("Refresh", key="notif_refresh"):
            if _run(feed.load_first, "load_notifications"):
                safe_rerun()

    if not feed.items:
        render_empty_state("no_notifications")
        return

    for notification in list(feed.items):
        _render_card(feed, notification)

    if feed.has_more:
        if st.button("Load more", key="notif_load_more", width="stretch"):
            if _run(feed.load_more, "load_more_notifications"):
                safe_rerun()
