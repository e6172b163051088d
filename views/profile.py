"""Profile page: account information and password change."""

import streamlit as st

from api.client import ApiError
from config.constants import MIN_PASSWORD_LENGTH, USER_ROLES
from core.data import safe_rerun
from core.errors import handle_api_error
from services.audit_service import log_activity_event
from services.profile_service import (
    get_initials,
    password_error_fields,
    profile_fields,
    validate_password_change,
)
from views.context import AppContext

PASSWORD_KEYS = ("pw_current", "pw_new", "pw_confirm")


def _load_profile(ctx: AppContext) -> dict:
    """Fresh `/auth/me` data, or the signed-in session's identity when the call fails."""
    fallback = {
        "fullName": ctx.session.full_name,
        "username": ctx.session.username,
        "role": ctx.session.role,
    }
    try:
        return profile_fields(ctx.api.get_profile(), fallback)
    except ApiError as e:
        handle_api_error(e, "load_profile")
        st.caption("Showing cached account details; the profile service is unavailable.")
        return profile_fields(None, fallback)


def _render_info(info: dict):
    role_name = USER_ROLES.get(info["role"], {}).get("name", info["role"])
    site = f" · {info['site_name']}" if info["site_name"] else ""
    st.markdown(f"""
    <div class="record-card">
        <div class="record-title">{get_initials(info['full_name'])} · {info['full_name']}</div>
        <div class="record-meta">{role_name}{site}</div>
    </div>
    """, unsafe_allow_html=True)

    col1, col2 = st.columns(2)
    with col1:
        st.text_input("Full Name", value=info["full_name"], disabled=True)
        st.text_input("Email", value=info["email"], disabled=True)
        st.text_input("Member Since", value=info["created_on"][:10], disabled=True)
    with col2:
        st.text_input("Username", value=info["username"], disabled=True)
        st.text_input("Mobile", value=info["mobile"], disabled=True)
        st.text_input("Last Login", value=info["last_login_on"][:16].replace("T", " "), disabled=True)


def _render_password_form(ctx: AppContext):
    errors = st.session_state.get("password_errors", {})

    with st.form("change_password"):
        current = st.text_input("Current Password", type="password", key="pw_current")
        if errors.get("current_password"):
            st.error(errors["current_password"])
        new = st.text_input("New Password", type="password", key="pw_new",
                            help=f"At least {MIN_PASSWORD_LENGTH} characters")
        if errors.get("new_password"):
            st.error(errors["new_password"])
        confirm = st.text_input("Confirm New Password", type="password", key="pw_confirm")
        if errors.get("confirm_password"):
            st.error(errors["confirm_password"])
        submitted = st.form_submit_button("Change Password", type="primary")

    if not submitted:
        return

    errors = validate_password_change(current, new, confirm)
    if errors:
        st.session_state.password_errors = errors
        safe_rerun()

    try:
        ctx.api.change_password(current, new)
    except ApiError as e:
        _, message, _ = handle_api_error(e, "change_password")
        st.session_state.password_errors = password_error_fields(e.message)
        log_activity_event(
            action_type="PASSWORD_CHANGED",
            category="authentication",
            user_role=ctx.session.role,
            performed_by=ctx.session.username,
            description="Password change rejected",
            success=False,
            error_message=e.message,
            activity_log=st.session_state.activity_log,
        )
        st.error(message)
        return

    log_activity_event(
        action_type="PASSWORD_CHANGED",
        category="authentication",
        user_role=ctx.session.role,
        performed_by=ctx.session.username,
        description="Password changed",
        activity_log=st.session_state.activity_log,
    )
    st.session_state.password_errors = {}
    for key in PASSWORD_KEYS:
        st.session_state.pop(key, None)
    st.session_state.profile_notice = "Password changed successfully"
    safe_rerun()


def render(ctx: AppContext) -> None:
    """Render this page."""
    st.markdown('<p class="page-header-title">My Profile</p>', unsafe_allow_html=True)

    notice = st.session_state.pop("profile_notice", None)
    if notice:
        st.success(notice)

    info_tab, security_tab = st.tabs(["Account Info", "Security"])
    with info_tab:
        _render_info(_load_profile(ctx))
    with security_tab:
        _render_password_form(ctx)
