"""Users page: searchable, filterable user directory (admin only)."""

import pandas as pd
import streamlit as st

from api.client import ApiError
from components.empty_states import render_empty_state
from components.feedback import render_access_denied, render_error_state
from config.constants import USER_ROLES
from config.permissions import check_page_access
from core.errors import handle_api_error
from services.list_filter import users_query
from views.context import AppContext

SORT_LABELS = {"name-asc": "Name (A-Z)", "role": "Role, then name"}


def render(ctx: AppContext) -> None:
    """Render this page."""
    if not check_page_access("Users", ctx.session):
        render_access_denied("Users", ctx.session)
        st.stop()

    st.markdown('<p class="page-header-title">Users</p>', unsafe_allow_html=True)

    try:
        users, _ = ctx.api.list_users({"limit": 500})
    except ApiError as e:
        _, message, _ = handle_api_error(e, "load_users")
        render_error_state(message, error_type="backend", retry_key="retry_users")
        return

    total = len(users)
    active = sum(1 for u in users if u.get("isActive", True))
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Total Users", total)
    with col2:
        st.metric("Active", active)
    with col3:
        st.metric("Inactive", total - active)

    query = users_query()
    col1, col2, col3, col4 = st.columns([3, 1.5, 1.5, 1.5])
    with col1:
        query.set_search(st.text_input("Search", placeholder="Name, email or username",
                                       key="users_search", label_visibility="collapsed"))
    with col2:
        query.set_filter("role", st.selectbox("Role", [""] + list(USER_ROLES),
                                              format_func=lambda r: USER_ROLES[r]["name"] if r else "All Roles",
                                              key="users_role", label_visibility="collapsed"))
    with col3:
        query.set_filter("active", st.selectbox("State", ["", "active", "inactive"],
                                                format_func=lambda v: v.title() if v else "Any State",
                                                key="users_active", label_visibility="collapsed"))
    with col4:
        query.set_sort(st.selectbox("Sort", list(SORT_LABELS), format_func=SORT_LABELS.get,
                                    key="users_sort", label_visibility="collapsed"))

    visible = query.apply(users)
    if not visible:
        render_empty_state("no_users")
        return

    rows = [{
        "Name": u.get("fullName", ""),
        "Username": u.get("username", ""),
        "Email": u.get("email", ""),
        "Role": USER_ROLES.get(u.get("role"), {}).get("name", u.get("role", "")),
        "Active": "Yes" if u.get("isActive", True) else "No",
        "Last Login": str(u.get("lastLogin") or "Never")[:16],
    } for u in visible]
    st.dataframe(pd.DataFrame(rows), hide_index=True, width="stretch")
    st.caption(f"Showing {len(visible)} of {total} users")
