"""Dashboard page: ticket KPIs, charts, recent tickets and ongoing RMAs."""

from datetime import datetime

import pandas as pd
import streamlit as st

from components.charts import category_chart, priority_chart, status_chart
from components.empty_states import render_empty_state, render_success_state
from components.feedback import render_error_state, render_inline_error
from components.loading import render_skeleton_chart, render_skeleton_metrics
from config.constants import DASHBOARD_POLL_SECONDS
from core.data import load_sites
from core.errors import safe_execute
from services.dashboard_service import DashboardPoller, get_greeting, load_concurrently
from services.status_catalog import label_for
from services.timeline_service import partition_records
from views.context import AppContext


def _metric_card(label: str, value, accent: str, hint: str = ""):
    st.markdown(f"""
    <div class="metric-card" style="--accent: {accent};">
        <div class="metric-label">{label}</div>
        <div class="metric-value">{value}</div>
        <div class="metric-hint">{hint}</div>
    </div>
    """, unsafe_allow_html=True)


def _get_poller(ctx: AppContext, site_id: str) -> DashboardPoller:
    """One poller per selected site; switching site closes the previous one."""
    poller = st.session_state.get("dashboard_poller")
    if poller is not None and st.session_state.get("dashboard_site") == site_id and not poller.closed:
        return poller
    if poller is not None:
        poller.close()

    def store_stats(stats):
        st.session_state.dashboard_stats = stats
        st.session_state.dashboard_updated = datetime.now()

    st.session_state.dashboard_stats = None
    st.session_state.dashboard_site = site_id
    st.session_state.dashboard_poller = DashboardPoller(
        fetch=lambda: ctx.api.get_dashboard_stats(site_id),
        apply=store_stats,
    )
    return st.session_state.dashboard_poller


@st.fragment(run_every=DASHBOARD_POLL_SECONDS)
def _stats_panel(ctx: AppContext, site_id: str):
    poller = _get_poller(ctx, site_id)
    poller.tick(force=st.session_state.pop("retry_dashboard_stats", False))

    stats = st.session_state.get("dashboard_stats")
    if stats is None:
        if poller.last_run is None:
            render_skeleton_metrics()
            render_skeleton_chart()
        else:
            render_error_state("Unable to load dashboard statistics.", error_type="backend",
                               retry_key="retry_dashboard_stats")
        return

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        _metric_card("Open Tickets", stats.open_tickets, "#3b82f6", f"{stats.total_tickets} total")
    with col2:
        _metric_card("In Progress", stats.in_progress_tickets, "#8b5cf6", f"{stats.escalated_tickets} escalated")
    with col3:
        _metric_card("SLA Breached", stats.sla_breached, "#ef4444", f"{stats.sla_at_risk} at risk")
    with col4:
        _metric_card("SLA Compliance", f"{stats.sla_compliance_percent:.0f}%", "#10b981",
                     f"{stats.resolved_tickets} resolved today")

    st.markdown('<div class="section-title"><span class="section-title-icon"></span>Ticket Breakdown</div>',
                unsafe_allow_html=True)
    chart_col1, chart_col2 = st.columns(2)
    with chart_col1:
        if stats.tickets_by_priority:
            st.plotly_chart(priority_chart(stats), width="stretch", key="chart_priority")
        else:
            st.caption("No priority data")
    with chart_col2:
        if stats.tickets_by_status:
            st.plotly_chart(status_chart(stats), width="stretch", key="chart_status")
        else:
            st.caption("No status data")
    if stats.tickets_by_category:
        st.plotly_chart(category_chart(stats), width="stretch", key="chart_category")

    updated = st.session_state.get("dashboard_updated")
    if updated:
        st.caption(f"Updated {updated.strftime('%H:%M:%S')} · refreshes every {DASHBOARD_POLL_SECONDS}s")


def render(ctx: AppContext) -> None:
    """Render this page."""
    session = ctx.session
    greeting = get_greeting(datetime.now().hour)

    st.markdown(f'<p class="page-header-title">{greeting}, {session.display_name}</p>', unsafe_allow_html=True)
    st.markdown('<p class="page-header-subtitle">Here is what is happening across your sites.</p>',
                unsafe_allow_html=True)

    sites = safe_execute(lambda: load_sites(ctx.api, ctx.user_id), context="load_sites", fallback=list,
                         show_error=False)() if ctx.backend_ok else []
    site_options = {"": "All Sites"}
    site_options.update({site.id: site.name for site in sites})
    site_id = st.selectbox(
        "Site",
        options=list(site_options),
        format_func=lambda value: site_options[value],
        key="dashboard_site_filter",
        label_visibility="collapsed",
    ) or None

    _stats_panel(ctx, site_id)

    # Recent activity is read once per page run, both requests in parallel
    results = load_concurrently({
        "tickets": lambda: ctx.api.list_tickets({"siteId": site_id, "limit": 5, "sortBy": "createdAt", "sortOrder": "desc"}),
        "rma": lambda: ctx.api.list_rma({"siteId": site_id, "limit": 20}),
    })

    left, right = st.columns(2)
    with left:
        st.markdown('<div class="section-title"><span class="section-title-icon"></span>Recent Tickets</div>',
                    unsafe_allow_html=True)
        tickets = results["tickets"]
        if tickets.error:
            render_inline_error(tickets.error)
        elif not tickets.value[0]:
            render_empty_state("no_tickets")
        else:
            rows = [{
                "Ticket": t.get("ticketId") or t.get("ticketNumber", ""),
                "Title": t.get("title", ""),
                "Priority": t.get("priority", ""),
                "Status": label_for(t.get("status")).label,
            } for t in tickets.value[0]]
            st.dataframe(pd.DataFrame(rows), hide_index=True, width="stretch")

    with right:
        st.markdown('<div class="section-title"><span class="section-title-icon"></span>Ongoing RMAs</div>',
                    unsafe_allow_html=True)
        rma = results["rma"]
        if rma.error:
            render_inline_error(rma.error)
        else:
            ongoing = partition_records(rma.value[0]).ongoing
            if not ongoing:
                render_success_state("All Clear", "No RMA requests are in progress.")
            else:
                rows = [{
                    "RMA": r.rma_number,
                    "Ticket": r.ticket_number,
                    "Site": r.site.name if r.site else "",
                    "Status": label_for(r.status).label,
                } for r in ongoing[:5]]
                st.dataframe(pd.DataFrame(rows), hide_index=True, width="stretch")
