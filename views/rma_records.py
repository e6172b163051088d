"""RMA Records page: ongoing/completed tabs, timeline previews and Excel export."""

from datetime import datetime

import streamlit as st

from api.client import ApiError
from components.empty_states import render_empty_state
from components.feedback import render_access_denied, render_error_state, status_badge
from config.constants import PAGINATION_CONFIG
from config.permissions import check_page_access
from core.data import get_pagination_state, load_sites, render_page_navigation, reset_pagination
from core.errors import handle_api_error, safe_execute
from services.export_service import MASK, export_rma_to_excel
from services.list_filter import rma_query
from services.status_catalog import RmaStatus, label_for
from services.timeline_service import partition_records, preview_timeline
from views.context import AppContext


def _masked(value: str, visible: bool) -> str:
    if not value:
        return "-"
    return value if visible else MASK


def _render_record(record, session):
    """One RMA card with its last timeline steps."""
    site_id = record.site.id
    show_ip = session.has_right("VIEW_IP", site_id) or session.has_role("Admin")
    show_serial = session.has_right("VIEW_SERIAL", site_id) or session.has_role("Admin")
    asset = record.original_asset

    steps_html = "".join(
        f'<span class="timeline-step{" latest" if marker.is_latest else ""}" '
        f'title="{marker.step.changed_by} · {(marker.step.timestamp or "")[:16]}">{marker.display.label}</span>'
        for marker in preview_timeline(record.timeline)
    )

    st.markdown(f"""
    <div class="record-card">
        <div style="display: flex; justify-content: space-between; align-items: center;">
            <div class="record-title">{record.rma_number or 'RMA'} · Ticket {record.ticket_number or '-'}</div>
            {status_badge(record.status)}
        </div>
        <div class="record-meta">
            {record.site.name or 'Unknown site'} · {asset.asset_code or '-'} ·
            IP {_masked(asset.ip_address, show_ip)} · S/N {_masked(asset.serial_number, show_serial)}
        </div>
        <div class="record-meta">
            Source: {record.replacement_source} · Installation: {record.installation_status}
            · Faulty item: {record.faulty_item_action}
        </div>
        <div class="timeline">{steps_html}</div>
    </div>
    """, unsafe_allow_html=True)


def _clear_filters(query):
    query.clear_all()
    for key in ("rma_search", "rma_status", "rma_site"):
        st.session_state.pop(key, None)
    reset_pagination("rma")


def render(ctx: AppContext) -> None:
    """Render this page."""
    if not check_page_access("RMA Records", ctx.session):
        render_access_denied("RMA Records", ctx.session)
        st.stop()

    st.markdown('<p class="page-header-title">RMA Records</p>', unsafe_allow_html=True)

    query = st.session_state.get("rma_query")
    if query is None:
        query = st.session_state.rma_query = rma_query()

    sites = safe_execute(lambda: load_sites(ctx.api, ctx.user_id), context="load_sites", fallback=list)()
    site_names = {site.id: site.name for site in sites}

    col1, col2, col3, col4 = st.columns([3, 1.5, 1.5, 1])
    with col1:
        query.set_search(st.text_input("Search", placeholder="Ticket, asset code, IP or site",
                                       key="rma_search", label_visibility="collapsed"))
    with col2:
        status = st.selectbox("Status", [""] + [s.value for s in RmaStatus],
                              format_func=lambda v: label_for(v).label if v else "All Statuses",
                              key="rma_status", label_visibility="collapsed")
    with col3:
        site = st.selectbox("Site", [""] + list(site_names),
                            format_func=lambda v: site_names.get(v, "All Sites"),
                            key="rma_site", label_visibility="collapsed")
    with col4:
        st.button("Clear", key="rma_clear", width="stretch", on_click=_clear_filters, args=(query,))

    if (status or None, site or None) != (query.values["status"], query.values["site"]):
        reset_pagination("rma")
    query.set_filter("status", status)
    query.set_filter("site", site)

    state = get_pagination_state("rma")
    params = {
        "page": state["page"],
        "limit": PAGINATION_CONFIG["rma_page_size"],
        "status": status or None,
        "siteId": site or None,
    }

    try:
        with st.spinner("Loading RMA records..."):
            records, pagination = ctx.api.list_rma(params)
    except ApiError as e:
        _, message, _ = handle_api_error(e, "load_rma_records")
        render_error_state(message, error_type="backend", retry_key="retry_rma")
        return

    visible = query.apply(records)
    partition = partition_records(visible)

    # ============================================
    # EXPORT
    # ============================================
    include_sensitive = ctx.session.has_role("Admin") or ctx.session.has_right_for_any_site("EXPORT_SENSITIVE")
    if visible:
        st.download_button(
            "Export to Excel",
            data=export_rma_to_excel(visible, include_sensitive=include_sensitive),
            file_name=f"rma_records_{datetime.now().strftime('%Y%m%d_%H%M')}.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            key="rma_export",
        )
        if not include_sensitive:
            st.caption("IP addresses and serial numbers are masked in the export.")

    ongoing_tab, completed_tab = st.tabs([
        f"Ongoing ({len(partition.ongoing)})",
        f"Completed ({len(partition.completed)})",
    ])
    with ongoing_tab:
        if not partition.ongoing:
            render_empty_state("no_ongoing_rma")
        for record in partition.ongoing:
            _render_record(record, ctx.session)
    with completed_tab:
        if not partition.completed:
            render_empty_state("no_completed_rma")
        for record in partition.completed:
            _render_record(record, ctx.session)

    render_page_navigation("rma", pagination)
