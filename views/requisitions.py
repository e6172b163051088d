"""Requisitions page: stock requests and transfers by type, with approve / reject."""

import streamlit as st

from api.client import ApiError
from components.empty_states import render_empty_state
from components.feedback import render_access_denied, render_error_state
from config.constants import DEFAULT_REQUISITION_STATUS, REQUISITION_STATUSES, REQUISITION_TYPES
from config.permissions import check_page_access, validate_action
from core.data import get_pagination_state, render_page_navigation, reset_pagination, safe_rerun
from core.errors import handle_api_error
from services.audit_service import log_activity_event
from services.requisition_service import (
    build_requisition_params,
    can_review,
    direction_label,
    requisition_badge_class,
    requisition_type_label,
    status_label,
    type_tab_count,
    validate_rejection,
)
from views.context import AppContext


def _log_review(ctx: AppContext, action_type: str, requisition, reason: str = None):
    log_activity_event(
        action_type=action_type,
        category="stock",
        user_role=ctx.session.role,
        performed_by=ctx.session.username,
        entity_id=requisition.id,
        description=f"{action_type.split('_')[1].title()} requisition {requisition.requisition_number}",
        metadata={"reason": reason} if reason else None,
        activity_log=st.session_state.activity_log,
    )


def _approve(ctx: AppContext, requisition):
    try:
        ctx.api.approve_requisition(requisition.id)
    except ApiError as e:
        _, message, _ = handle_api_error(e, "approve_requisition")
        st.error(message)
        return
    _log_review(ctx, "REQUISITION_APPROVED", requisition)
    st.session_state.requisition_flash = f"Requisition {requisition.requisition_number} approved"
    safe_rerun()


def _reject(ctx: AppContext, requisition, reason):
    result = validate_rejection(reason)
    if not result:
        st.warning(result.message)
        return
    try:
        ctx.api.reject_requisition(requisition.id, result.data["reason"])
    except ApiError as e:
        _, message, _ = handle_api_error(e, "reject_requisition")
        st.error(message)
        return
    _log_review(ctx, "REQUISITION_REJECTED", requisition, result.data["reason"])
    st.session_state.requisition_flash = f"Requisition {requisition.requisition_number} rejected"
    safe_rerun()


def _render_card(ctx: AppContext, requisition):
    asset_label = requisition.asset_code or requisition.asset_type or "-"
    st.markdown(f"""
    <div class="record-card">
        <div style="display: flex; justify-content: space-between; align-items: center;">
            <div class="record-title">{requisition.requisition_number or 'Requisition'}</div>
            <span class="requisition-badge {requisition_badge_class(requisition.requisition_type)}">
                {requisition_type_label(requisition.requisition_type)}
            </span>
        </div>
        <div class="record-meta">
            {requisition.source_site.name or 'HO'} → {requisition.destination_site.name or 'HO'}
            · Direction: {direction_label(requisition)} · Status: {status_label(requisition.status)}
        </div>
        <div class="record-meta">
            Asset: {asset_label} · Qty {requisition.quantity}
            · RMA {requisition.rma_number or '-'} · Ticket {requisition.ticket_number or '-'}
            · Requested by {requisition.requested_by or '-'}
        </div>
    </div>
    """, unsafe_allow_html=True)

    if not can_review(requisition):
        return
    if not validate_action("manage_stock", ctx.session, requisition.destination_site.id):
        return

    col1, col2 = st.columns([1, 3])
    with col1:
        if st.button("Approve", key=f"req_approve_{requisition.id}", type="primary"):
            _approve(ctx, requisition)
    with col2:
        with st.expander("Reject"):
            reason = st.text_area("Reason", key=f"req_reason_{requisition.id}")
            confirm_col, cancel_col = st.columns(2)
            with confirm_col:
                if st.button("Confirm Reject", key=f"req_reject_{requisition.id}"):
                    _reject(ctx, requisition, reason)
            with cancel_col:
                if st.button("Cancel", key=f"req_cancel_{requisition.id}"):
                    _reject(ctx, requisition, None)


def render(ctx: AppContext) -> None:
    """Render this page."""
    if not check_page_access("Requisitions", ctx.session):
        render_access_denied("Requisitions", ctx.session)
        st.stop()

    st.markdown('<p class="page-header-title">Requisitions</p>', unsafe_allow_html=True)

    flash = st.session_state.pop("requisition_flash", None)
    if flash:
        st.success(flash)

    col1, col2 = st.columns([3, 1])
    with col2:
        status = st.selectbox("Status", REQUISITION_STATUSES,
                              index=REQUISITION_STATUSES.index(DEFAULT_REQUISITION_STATUS),
                              format_func=status_label, key="req_status")

    type_counts = st.session_state.get("requisition_type_counts", {})
    with col1:
        requisition_type = st.radio(
            "Type",
            options=list(REQUISITION_TYPES),
            format_func=lambda t: f"{REQUISITION_TYPES[t]['label']} ({type_tab_count(type_counts, t)})",
            horizontal=True,
            key="req_type",
            label_visibility="collapsed",
        )

    if st.session_state.get("requisition_filters") != (status, requisition_type):
        st.session_state.requisition_filters = (status, requisition_type)
        reset_pagination("requisitions")

    state = get_pagination_state("requisitions")
    params = build_requisition_params(status, requisition_type, page=state["page"])

    try:
        with st.spinner("Loading requisitions..."):
            requisitions, pagination, counts = ctx.api.list_requisitions(params)
    except ApiError as e:
        _, message, _ = handle_api_error(e, "load_requisitions")
        render_error_state(message, error_type="backend", retry_key="retry_requisitions")
        return

    # Tab counts come with the list; refresh the labels when they changed
    if counts != type_counts:
        st.session_state.requisition_type_counts = counts
        safe_rerun()

    if not requisitions:
        render_empty_state("no_requisitions")
        return

    for requisition in requisitions:
        _render_card(ctx, requisition)

    render_page_navigation("requisitions", pagination)
