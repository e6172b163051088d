"""
Empty state and success state components.
Consistent UI for lists with nothing to show.
"""

import streamlit as st

from core.data import safe_rerun


# Centralized empty state messages with suggested actions (no emojis)
EMPTY_STATES = {
    "no_tickets": {
        "icon": "inbox",
        "title": "No Tickets Found",
        "message": "No tickets match the current filters.",
        "action": "Create Ticket",
        "action_page": "Create Ticket",
        "color": "#3b82f6"
    },
    "no_ongoing_rma": {
        "icon": "check",
        "title": "No Ongoing RMAs",
        "message": "Every RMA request has been installed, rejected or discarded.",
        "action": None,
        "action_page": None,
        "color": "#10b981"
    },
    "no_completed_rma": {
        "icon": "clipboard",
        "title": "No Completed RMAs",
        "message": "Completed RMA requests will appear here once they are closed out.",
        "action": None,
        "action_page": None,
        "color": "#64748b"
    },
    "no_requisitions": {
        "icon": "box",
        "title": "No Requisitions",
        "message": "There are no requisitions with this status.",
        "action": None,
        "action_page": None,
        "color": "#f59e0b"
    },
    "no_users": {
        "icon": "users",
        "title": "No Users Match",
        "message": "Try a different search or clear the filters.",
        "action": None,
        "action_page": None,
        "color": "#8b5cf6"
    },
    "no_history": {
        "icon": "activity",
        "title": "No Replacement History",
        "message": "This asset has never been replaced.",
        "action": None,
        "action_page": None,
        "color": "#64748b"
    },
    "no_notifications": {
        "icon": "bell",
        "title": "No Notifications",
        "message": "You're all caught up!",
        "action": None,
        "action_page": None,
        "color": "#3b82f6"
    },
    "no_data": {
        "icon": "folder",
        "title": "No Data Available",
        "message": "Unable to load data. Check your connection or try refreshing.",
        "action": None,
        "action_page": None,
        "color": "#64748b"
    }
}


# SVG icon paths for empty states (no emojis)
EMPTY_STATE_ICONS = {
    "box": '<path d="M21 16V8a2 2 0 0 0-1-1.73l-7-4a2 2 0 0 0-2 0l-7 4A2 2 0 0 0 3 8v8a2 2 0 0 0 1 1.73l7 4a2 2 0 0 0 2 0l7-4A2 2 0 0 0 21 16z"></path><polyline points="3.27 6.96 12 12.01 20.73 6.96"></polyline><line x1="12" y1="22.08" x2="12" y2="12"></line>',
    "check": '<path d="M22 11.08V12a10 10 0 1 1-5.93-9.14"></path><polyline points="22 4 12 14.01 9 11.01"></polyline>',
    "users": '<path d="M17 21v-2a4 4 0 0 0-4-4H5a4 4 0 0 0-4 4v2"></path><circle cx="9" cy="7" r="4"></circle><path d="M23 21v-2a4 4 0 0 0-3-3.87"></path><path d="M16 3.13a4 4 0 0 1 0 7.75"></path>',
    "clipboard": '<path d="M16 4h2a2 2 0 0 1 2 2v14a2 2 0 0 1-2 2H6a2 2 0 0 1-2-2V6a2 2 0 0 1 2-2h2"></path><rect x="8" y="2" width="8" height="4" rx="1" ry="1"></rect>',
    "inbox": '<polyline points="22 12 16 12 14 15 10 15 8 12 2 12"></polyline><path d="M5.45 5.11L2 12v6a2 2 0 0 0 2 2h16a2 2 0 0 0 2-2v-6l-3.45-6.89A2 2 0 0 0 16.76 4H7.24a2 2 0 0 0-1.79 1.11z"></path>',
    "activity": '<polyline points="22 12 18 12 15 21 9 3 6 12 2 12"></polyline>',
    "bell": '<path d="M18 8A6 6 0 0 0 6 8c0 7-3 9-3 9h18s-3-2-3-9"></path><path d="M13.73 21a2 2 0 0 1-3.46 0"></path>',
    "folder": '<path d="M22 19a2 2 0 0 1-2 2H4a2 2 0 0 1-2-2V5a2 2 0 0 1 2-2h5l2 3h9a2 2 0 0 1 2 2z"></path>'
}


def render_empty_state(state_key: str, custom_message: str = None, show_action: bool = True) -> None:
    """
    Render a consistent empty state UI component.

    Args:
        state_key: Key from EMPTY_STATES config
        custom_message: Optional override for the message
        show_action: Whether to show the action button
    """
    state = EMPTY_STATES.get(state_key, EMPTY_STATES["no_data"])
    message = custom_message or state["message"]
    icon_path = EMPTY_STATE_ICONS.get(state['icon'], EMPTY_STATE_ICONS['folder'])

    st.markdown(f"""
    <div class="empty-state" style="border: 1px dashed {state['color']}40; background: {state['color']}0d;">
        <svg width="48" height="48" viewBox="0 0 24 24" fill="none" stroke="{state['color']}" stroke-width="1.5" stroke-linecap="round" stroke-linejoin="round" style="opacity: 0.7;">
            {icon_path}
        </svg>
        <div class="empty-state-title">{state['title']}</div>
        <div class="empty-state-message">{message}</div>
    </div>
    """, unsafe_allow_html=True)

    if show_action and state["action"] and state["action_page"]:
        col1, col2, col3 = st.columns([1, 2, 1])
        with col2:
            if st.button(state['action'], key=f"empty_action_{state_key}"):
                st.session_state.current_page = state["action_page"]
                safe_rerun()


def render_success_state(title: str, message: str) -> None:
    """Render a success/all-clear state."""
    st.markdown(f"""
    <div class="empty-state success-state">
        <svg width="40" height="40" viewBox="0 0 24 24" fill="none" stroke="#10b981" stroke-width="1.5" stroke-linecap="round" stroke-linejoin="round" style="opacity: 0.8;">
            {EMPTY_STATE_ICONS['check']}
        </svg>
        <div class="empty-state-title" style="color: #065f46;">{title}</div>
        <div class="empty-state-message" style="color: #047857;">{message}</div>
    </div>
    """, unsafe_allow_html=True)
