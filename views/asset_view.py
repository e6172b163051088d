"""Asset View page: one asset's details, its RMA history and its replacement history."""

import pandas as pd
import streamlit as st

from api.client import ApiError
from components.empty_states import render_empty_state
from components.feedback import asset_status_badge, render_error_state
from core.errors import handle_api_error
from services.dashboard_service import dashboard_asset_status
from services.list_filter import replacement_history_query
from services.status_catalog import criticality_for, label_for
from views.context import AppContext


def _detail(label: str, value):
    st.markdown(f"**{label}:** {value or '-'}")


def _render_details(asset: dict, session):
    site = asset.get("siteId") if isinstance(asset.get("siteId"), dict) else {}
    site_id = site.get("_id") or asset.get("siteId")
    crit = criticality_for(asset.get("criticality"))

    st.markdown(f"""
    <div class="record-card">
        <div style="display: flex; justify-content: space-between; align-items: center;">
            <div class="record-title">{asset.get('assetCode', '')}</div>
            {asset_status_badge(asset.get('status'))}
        </div>
        <div class="record-meta">
            {site.get('siteName', '')} · {asset.get('locationName') or asset.get('locationDescription') or ''}
            · Dashboard: {dashboard_asset_status(asset.get('status'))} · Criticality {crit['label']}
        </div>
    </div>
    """, unsafe_allow_html=True)

    col1, col2, col3 = st.columns(3)
    with col1:
        _detail("Asset Type", asset.get("assetType"))
        _detail("Device Type", asset.get("deviceType"))
        _detail("Make", asset.get("make"))
    with col2:
        _detail("Model", asset.get("model"))
        _detail("Serial Number", asset.get("serialNumber") if session.has_right("VIEW_SERIAL", site_id) else "••••")
        _detail("MAC", asset.get("mac") if session.has_right("VIEW_MAC", site_id) else "••••")
    with col3:
        _detail("IP Address", asset.get("ipAddress") if session.has_right("VIEW_IP", site_id) else "••••")
        _detail("Installed", str(asset.get("installationDate") or "")[:10])
        _detail("Vendor", asset.get("vendor"))


def _render_rma_history(records):
    if not records:
        st.caption("No RMA requests for this asset.")
        return
    rows = [{
        "RMA": r.rma_number,
        "Ticket": r.ticket_number,
        "Status": label_for(r.status).label,
        "Reason": r.request_reason,
        "Replacement": r.replacement_details.serial_number or "-",
        "Created": (r.created_at or "")[:10],
    } for r in records]
    st.dataframe(pd.DataFrame(rows), hide_index=True, width="stretch")


def _render_replacement_history(events):
    query = st.session_state.get("replacement_query")
    if query is None:
        query = st.session_state.replacement_query = replacement_history_query()

    types = sorted({e.type for e in events if e.type})
    col1, col2 = st.columns([3, 1])
    with col1:
        query.set_search(st.text_input("Search history", placeholder="Ticket, serial number or engineer",
                                       key="replacement_search"))
    with col2:
        query.set_filter("type", st.selectbox("Type", [""] + types,
                                              format_func=lambda v: v or "All Types",
                                              key="replacement_type"))

    visible = query.apply(events)
    if not visible:
        render_empty_state("no_history", custom_message=None if not events else "No entries match the search.")
        return

    rows = [{
        "Date": (e.date or "")[:10],
        "Type": e.type,
        "Ticket": e.ticket_number,
        "Old Serial": e.old_details.serial_number,
        "New Serial": e.new_details.serial_number,
        "Performed By": e.performed_by,
        "Remarks": e.remarks,
    } for e in visible]
    st.dataframe(pd.DataFrame(rows), hide_index=True, width="stretch")


def render(ctx: AppContext) -> None:
    """Render this page."""
    st.markdown('<p class="page-header-title">Asset View</p>', unsafe_allow_html=True)

    search = st.text_input("Find asset", placeholder="Asset code, serial number or IP", key="asset_view_search")
    if not search.strip():
        st.caption("Search for an asset to see its details and history.")
        return

    try:
        assets, _ = ctx.api.list_assets({"search": search.strip(), "limit": 20})
    except ApiError as e:
        _, message, _ = handle_api_error(e, "search_assets")
        render_error_state(message, error_type="backend", show_retry=False)
        return

    if not assets:
        st.info("No assets match that search.")
        return

    options = {a.get("_id") or a.get("id"): a for a in assets}
    asset_id = st.selectbox(
        "Asset",
        options=list(options),
        format_func=lambda aid: f"{options[aid].get('assetCode', '')} ({options[aid].get('assetType', '')})",
        key="asset_view_select",
    )

    try:
        asset = ctx.api.get_asset(asset_id) or options[asset_id]
        rma_history = ctx.api.get_rma_history(asset_id)
        replacements = ctx.api.get_replacement_history(asset_id)
    except ApiError as e:
        _, message, _ = handle_api_error(e, "load_asset_history")
        render_error_state(message, error_type="backend", show_retry=False)
        return

    _render_details(asset, ctx.session)

    rma_tab, replacement_tab = st.tabs([f"RMA History ({len(rma_history)})",
                                        f"Replacement History ({len(replacements)})"])
    with rma_tab:
        _render_rma_history(rma_history)
    with replacement_tab:
        _render_replacement_history(replacements)
