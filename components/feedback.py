"""
Status badges, error states and action feedback components.
"""

import os

import streamlit as st

from config.constants import USER_ROLES
from config.permissions import required_roles_for
from core.data import safe_rerun
from services.priority_service import get_priority_color
from services.status_catalog import StatusDisplay, asset_label_for, label_for


def badge_html(display: StatusDisplay) -> str:
    """Inline badge for a catalog entry (lifecycle or asset status)."""
    return f"""<span class="status-badge badge-{display.color.value}" style="
        display: inline-flex;
        align-items: center;
        gap: 4px;
        padding: 2px 8px;
        border-radius: 4px;
        font-size: 0.75rem;
        font-weight: 500;
        background: {display.hex}20;
        color: {display.hex};
    " data-icon="{display.icon}">{display.label}</span>"""


def status_badge(status) -> str:
    return badge_html(label_for(status))


def asset_status_badge(status) -> str:
    return badge_html(asset_label_for(status))


def priority_badge(priority: str) -> str:
    color = get_priority_color(priority)
    return f"""<span class="priority-badge priority-{(priority or '').lower()}" style="
        padding: 2px 8px;
        border-radius: 4px;
        font-size: 0.75rem;
        font-weight: 600;
        background: {color}20;
        color: {color};
    ">{priority}</span>"""


def render_error_state(
    error_message: str,
    error_type: str = "general",
    show_retry: bool = True,
    retry_key: str = None,
    technical_details: str = None,
    error_id: str = None
):
    """
    Render an error panel with optional retry.
    Shows the error reference ID instead of technical details outside debug mode.

    Args:
        error_message: User-friendly error message
        error_type: general, connection, backend, permission or timeout
        show_retry: Whether to show retry button
        retry_key: Unique key for retry button
        technical_details: Technical error details (only shown in debug mode)
        error_id: Error reference ID for support
    """
    error_configs = {
        "general": {"icon": "⚠️", "color": "#ef4444", "bg": "#fef2f2", "border": "#fecaca"},
        "connection": {"icon": "🔌", "color": "#f59e0b", "bg": "#fffbeb", "border": "#fde68a"},
        "backend": {"icon": "🛰️", "color": "#f59e0b", "bg": "#fffbeb", "border": "#fde68a"},
        "permission": {"icon": "🔒", "color": "#8b5cf6", "bg": "#f5f3ff", "border": "#ddd6fe"},
        "timeout": {"icon": "⏱️", "color": "#6366f1", "bg": "#eef2ff", "border": "#c7d2fe"}
    }

    config = error_configs.get(error_type, error_configs["general"])
    ref_text = f"<br><small style='color: #9ca3af;'>Reference: {error_id}</small>" if error_id else ""

    st.markdown(f"""
    <div style="
        background: {config['bg']};
        border: 1px solid {config['border']};
        border-left: 4px solid {config['color']};
        border-radius: 8px;
        padding: 20px;
        margin: 15px 0;
    ">
        <div style="display: flex; align-items: flex-start; gap: 12px;">
            <div style="font-size: 1.5rem;">{config['icon']}</div>
            <div style="flex: 1;">
                <div style="font-weight: 600; color: {config['color']}; margin-bottom: 5px;">
                    Something went wrong
                </div>
                <div style="color: #374151; font-size: 0.95rem;">
                    {error_message}{ref_text}
                </div>
            </div>
        </div>
    </div>
    """, unsafe_allow_html=True)

    if technical_details and os.getenv("DEBUG", "false").lower() == "true":
        with st.expander("Technical Details (Debug Mode)", expanded=False):
            st.code(technical_details, language="text")

    if show_retry and retry_key:
        col1, col2, col3 = st.columns([1, 2, 1])
        with col2:
            if st.button("Try Again", key=f"btn_{retry_key}"):
                st.session_state[retry_key] = True
                safe_rerun()


def render_inline_error(message: str):
    st.markdown(f"""
    <div class="inline-message inline-error">⚠️ {message}</div>
    """, unsafe_allow_html=True)


def render_access_denied(page_name: str, session=None):
    """Full-page notice for a page the session may not open."""
    roles = ", ".join(USER_ROLES.get(r, {}).get("name", r) for r in required_roles_for(page_name))
    role_name = USER_ROLES.get(getattr(session, "role", ""), {}).get("name", "Unknown")
    st.markdown(f"""
    <div class="access-denied">
        <h3>Access Restricted</h3>
        <p>The <strong>{page_name}</strong> page is not available for your role ({role_name}).</p>
        <p class="access-denied-hint">Required: {roles or 'an administrator-granted right'}</p>
    </div>
    """, unsafe_allow_html=True)


def render_upload_summary(summary):
    """Toast-style result of the attachment upload loop."""
    if summary.failed:
        st.warning(summary.message)
        with st.expander("Files that failed to upload"):
            for name in summary.failed_names:
                st.markdown(f"- {name}")
    else:
        st.success(summary.message)
