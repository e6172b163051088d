"""
Sidebar navigation & footer for the TicketOps console.
Renders the sidebar with role/right based menus, user info, and logout.
"""
import logging
from datetime import datetime

import streamlit as st

from config.constants import USER_ROLES
from config.permissions import check_page_access
from core.auth import get_session, logout_user
from core.data import safe_rerun
from services.audit_service import log_activity_event

logger = logging.getLogger("TicketOps")

# Navigation menu structure with groups; visibility comes from PAGE_ACCESS_CONTROL
MENU_GROUPS = {
    "MAIN": [
        {"name": "Dashboard", "icon": "▣", "key": "dashboard"},
    ],
    "TICKETS": [
        {"name": "Tickets", "icon": "☰", "key": "tickets"},
        {"name": "Create Ticket", "icon": "＋", "key": "create_ticket"},
    ],
    "ASSETS": [
        {"name": "RMA Records", "icon": "⟲", "key": "rma_records"},
        {"name": "Asset View", "icon": "▢", "key": "asset_view"},
        {"name": "Requisitions", "icon": "⇄", "key": "requisitions"},
    ],
    "ADMIN": [
        {"name": "Users", "icon": "◉", "key": "users"},
        {"name": "User Rights", "icon": "⚿", "key": "user_rights"},
    ],
    "ACCOUNT": [
        {"name": "Notifications", "icon": "✉", "key": "notifications"},
        {"name": "Profile", "icon": "☺", "key": "profile"},
    ],
}


def get_visible_menu_items(session):
    """Filter menu items to the pages the session may open."""
    visible_groups = {}
    for group_name, items in MENU_GROUPS.items():
        visible_items = [item for item in items if check_page_access(item["name"], session)]
        if visible_items:
            visible_groups[group_name] = visible_items
    return visible_groups


def render_sidebar(backend_ok: bool) -> str:
    """
    Render the full sidebar: brand, nav buttons, user info, logout.
    Returns the current page name after navigation handling.
    """
    st.sidebar.markdown("""
    <div class="sidebar-brand">
        <p class="sidebar-brand-title">TicketOps</p>
        <p>Ticket &amp; RMA Console</p>
    </div>
    """, unsafe_allow_html=True)

    session = get_session()
    nav_clicked = None
    visible_menu = get_visible_menu_items(session)

    for group_name, items in visible_menu.items():
        st.sidebar.markdown(f'<div class="nav-section-header">{group_name}</div>', unsafe_allow_html=True)

        for item in items:
            is_active = st.session_state.current_page == item["name"]
            if st.sidebar.button(
                f"{item['icon']}  {item['name']}",
                key=f"nav_{item['key']}",
                type="primary" if is_active else "secondary",
            ):
                nav_clicked = item["name"]

    # ============================================
    # USER INFO SECTION
    # ============================================
    st.sidebar.markdown('<div style="margin-top: 20px;"></div>', unsafe_allow_html=True)

    role_config = USER_ROLES.get(session.role, {"name": session.role, "description": ""})
    connection_html = """<span class="connection-status status-connected">● Online</span>""" if backend_ok else """<span class="connection-status status-disconnected">○ Offline</span>"""

    st.sidebar.markdown(f"""
    <div class="user-info-card">
        <div style="display: flex; justify-content: space-between; align-items: flex-start; margin-bottom: 8px;">
            <div>
                <div class="user-name">{session.display_name}</div>
                <div class="user-role">{role_config['description']}</div>
            </div>
            <span class="role-badge-compact">{role_config['name']}</span>
        </div>
        <div style="display: flex; justify-content: space-between; align-items: center;">
            {connection_html}
        </div>
    </div>
    """, unsafe_allow_html=True)

    if st.sidebar.button("Sign Out", key="logout_btn", width="stretch"):
        log_activity_event(
            action_type="USER_LOGOUT",
            category="authentication",
            user_role=session.role,
            performed_by=session.username,
            description=f"User signed out: {session.username}",
            activity_log=st.session_state.activity_log,
        )
        logout_user()
        safe_rerun()

    if nav_clicked and nav_clicked != st.session_state.current_page:
        # Leaving the dashboard stops its poller
        if st.session_state.current_page == "Dashboard" and st.session_state.get("dashboard_poller"):
            st.session_state.dashboard_poller.close()
            st.session_state.dashboard_poller = None
        st.session_state.current_page = nav_clicked

    page = st.session_state.current_page

    # Pages reached without menu access (stale page after a rights change) redirect home
    if not check_page_access(page, session):
        log_activity_event(
            action_type="ACCESS_DENIED",
            category="navigation",
            user_role=session.role,
            performed_by=session.username,
            description=f"Access denied to '{page}', redirected to Dashboard",
            success=False,
            metadata={"attempted_page": page, "at": datetime.now().isoformat()},
            activity_log=st.session_state.activity_log,
        )
        st.session_state.access_warning = f"Access denied to '{page}'. You have been redirected to Dashboard."
        st.session_state.current_page = "Dashboard"
        page = "Dashboard"
        safe_rerun()

    if st.session_state.get('access_warning'):
        st.warning(st.session_state.access_warning)
        st.session_state.access_warning = None

    return page


def render_footer():
    """Render the sidebar footer with version info."""
    st.sidebar.markdown("""
    <div class="sidebar-footer">
        <div class="version">TicketOps Console v1.0</div>
        <div class="tech">Streamlit + REST API</div>
    </div>
    """, unsafe_allow_html=True)
