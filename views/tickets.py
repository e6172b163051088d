"""Tickets page: server-paged ticket list with status/priority filters."""

import pandas as pd
import streamlit as st

from api.client import ApiError
from components.empty_states import render_empty_state
from components.feedback import render_error_state
from config.constants import PAGINATION_CONFIG, PRIORITY_BANDS, LOWEST_PRIORITY
from config.permissions import validate_action
from core.data import get_pagination_state, render_page_navigation, reset_pagination, safe_rerun
from core.errors import handle_api_error
from services.status_catalog import TicketStatus, criticality_for, label_for
from services.ticket_form import check_ticket_editable
from views.context import AppContext

PRIORITY_OPTIONS = [band for _, band in PRIORITY_BANDS] + [LOWEST_PRIORITY]


def _ticket_rows(tickets: list) -> pd.DataFrame:
    rows = []
    for t in tickets:
        asset = t.get("assetId") if isinstance(t.get("assetId"), dict) else {}
        site = t.get("siteId") if isinstance(t.get("siteId"), dict) else {}
        assignee = t.get("assignedTo") if isinstance(t.get("assignedTo"), dict) else {}
        rows.append({
            "Ticket": t.get("ticketId") or t.get("ticketNumber", ""),
            "Title": t.get("title", ""),
            "Site": site.get("siteName", ""),
            "Asset": asset.get("assetCode", ""),
            "Criticality": criticality_for(asset.get("criticality"))["label"] if asset else "",
            "Priority": t.get("priority", ""),
            "Status": label_for(t.get("status")).label,
            "Assigned To": assignee.get("fullName", "Unassigned"),
            "Created": str(t.get("createdAt", ""))[:10],
        })
    return pd.DataFrame(rows)


def render(ctx: AppContext) -> None:
    """Render this page."""
    st.markdown('<p class="page-header-title">Tickets</p>', unsafe_allow_html=True)

    # ============================================
    # FILTERS
    # ============================================
    col1, col2, col3 = st.columns([3, 1.5, 1.5])
    with col1:
        search = st.text_input("Search", placeholder="Ticket number or title",
                               key="tickets_search", label_visibility="collapsed")
    with col2:
        status = st.selectbox("Status", ["All"] + [s.value for s in TicketStatus],
                              format_func=lambda v: v if v == "All" else label_for(v).label,
                              key="tickets_status")
    with col3:
        priority = st.selectbox("Priority", ["All"] + PRIORITY_OPTIONS, key="tickets_priority")

    filters = (search.strip(), status, priority)
    if st.session_state.get("tickets_filters") != filters:
        st.session_state.tickets_filters = filters
        reset_pagination("tickets")

    state = get_pagination_state("tickets")
    params = {
        "page": state["page"],
        "limit": PAGINATION_CONFIG["default_page_size"],
        "search": filters[0],
        "status": None if status == "All" else status,
        "priority": None if priority == "All" else priority,
    }

    try:
        with st.spinner("Loading tickets..."):
            tickets, pagination = ctx.api.list_tickets(params)
    except ApiError as e:
        _, message, _ = handle_api_error(e, "load_tickets")
        render_error_state(message, error_type="backend", retry_key="retry_tickets")
        return

    if not tickets:
        render_empty_state("no_tickets", show_action=validate_action("create_ticket", ctx.session).success)
        return

    st.dataframe(_ticket_rows(tickets), hide_index=True, width="stretch")
    render_page_navigation("tickets", pagination)

    # ============================================
    # EDIT
    # ============================================
    if not validate_action("edit_ticket", ctx.session):
        return

    st.markdown('<div class="section-title"><span class="section-title-icon"></span>Edit Ticket</div>',
                unsafe_allow_html=True)
    options = {t.get("_id") or t.get("id"): t for t in tickets}
    selected = st.selectbox(
        "Ticket",
        options=list(options),
        format_func=lambda tid: f"{options[tid].get('ticketId', '')} · {options[tid].get('title', '')}",
        key="tickets_edit_select",
    )
    if st.button("Edit Ticket", key="tickets_edit_btn"):
        editable = check_ticket_editable(options[selected].get("status"))
        if not editable:
            st.error(editable.message)
        else:
            st.session_state.edit_ticket_id = selected
            st.session_state.ticket_form = None
            st.session_state.current_page = "Create Ticket"
            safe_rerun()
