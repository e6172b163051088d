"""Create / edit ticket page with the asset cascade, SLA preview and attachments."""

import streamlit as st

from api.client import ApiError
from components.feedback import (
    priority_badge,
    render_access_denied,
    render_error_state,
    render_upload_summary,
)
from config.constants import (
    DEFAULT_IMPACT,
    DEFAULT_URGENCY,
    IMPACT_RANGE,
    MANAGER_ROLES,
    TICKET_CATEGORIES,
    URGENCY_RANGE,
)
from config.permissions import check_page_access, validate_action
from core.data import load_categories, load_engineers, load_sites, load_sla_policies, safe_rerun
from core.errors import handle_api_error, safe_execute
from services.attachment_service import (
    AttachmentFile,
    format_file_size,
    upload_attachments,
    validate_attachments,
)
from services.audit_service import log_activity_event
from services.priority_service import calculate_sla_targets
from services.status_catalog import criticality_for
from services.ticket_form import (
    TicketForm,
    check_ticket_editable,
    filter_asset_options,
    selected_criticality,
)
from views.context import AppContext


def _lookup_values(items) -> list:
    """Lookup endpoints answer with plain strings or {value, label} pairs."""
    values = []
    for item in items or []:
        value = item.get("value") if isinstance(item, dict) else item
        if value and value not in values:
            values.append(value)
    return values


def _cascade_select(label: str, options: list, current, key: str, format_func=str):
    if current and current not in options:
        options = [current] + options
    return st.selectbox(
        label,
        options=options,
        index=options.index(current) if current in options else None,
        format_func=format_func,
        placeholder=f"Select {label.lower()}",
        key=key,
    )


def _get_form(ctx: AppContext):
    """The form lives in session state; an edit form hydrates from the saved ticket once."""
    edit_id = st.session_state.get("edit_ticket_id")
    form = st.session_state.get("ticket_form")
    if form is not None:
        return form, edit_id

    form = TicketForm(editing=bool(edit_id))
    if edit_id:
        ticket = ctx.api.get_ticket(edit_id)
        editable = check_ticket_editable(ticket.get("status"))
        if not editable:
            st.session_state.edit_ticket_id = None
            raise PermissionError(editable.message)
        form.hydrate(ticket)
        form.finish_hydration()
    st.session_state.ticket_form = form
    return form, edit_id


def _reset_form():
    st.session_state.ticket_form = None
    st.session_state.edit_ticket_id = None
    st.session_state.ticket_form_nonce = st.session_state.get("ticket_form_nonce", 0) + 1


def _render_asset_cascade(ctx: AppContext, form: TicketForm, nonce: int):
    draft = form.draft
    sites = load_sites(ctx.api, ctx.user_id)
    site_names = {site.id: site.name for site in sites}

    col1, col2 = st.columns(2)
    with col1:
        form.set_site(_cascade_select("Site *", list(site_names), draft.site_id, f"ct_site_{nonce}",
                                      format_func=lambda sid: site_names.get(sid, sid)))
    with col2:
        locations = _lookup_values(ctx.api.get_location_names(draft.site_id)) if draft.site_id else []
        form.set_location(_cascade_select("Location", locations, draft.location_name,
                                          f"ct_location_{nonce}_{draft.site_id}"))

    col3, col4 = st.columns(2)
    with col3:
        asset_types = _lookup_values(
            ctx.api.get_asset_types(draft.site_id, draft.location_name)) if draft.site_id else []
        form.set_asset_type(_cascade_select("Asset Type", asset_types, draft.asset_type,
                                            f"ct_asset_type_{nonce}_{draft.site_id}_{draft.location_name}"))
    with col4:
        device_types = _lookup_values(ctx.api.get_device_types(
            draft.site_id, draft.location_name, draft.asset_type)) if draft.asset_type else []
        form.set_device_type(_cascade_select(
            "Device Type", device_types, draft.device_type,
            f"ct_device_type_{nonce}_{draft.site_id}_{draft.location_name}_{draft.asset_type}"))

    assets = ctx.api.get_assets_dropdown(draft.site_id, draft.asset_type) if draft.site_id else []
    options = filter_asset_options(assets, draft.location_name, draft.device_type)
    labels = {o["value"]: o["label"] for o in options}
    form.set_asset(_cascade_select(
        "Asset", list(labels), draft.asset_id,
        f"ct_asset_{nonce}_{draft.site_id}_{draft.location_name}_{draft.asset_type}_{draft.device_type}",
        format_func=lambda aid: labels.get(aid, aid)))
    return options


def _render_sla_preview(ctx: AppContext, form: TicketForm, asset_options: list):
    criticality = selected_criticality(asset_options, form.draft.asset_id)
    targets = calculate_sla_targets(
        form.draft.impact, form.draft.urgency, criticality,
        policies=safe_execute(lambda: load_sla_policies(ctx.api, ctx.user_id), context="load_sla_policies",
                              fallback=list, show_error=False)(),
    )
    crit = criticality_for(criticality)
    response = targets.response_due.strftime("%d %b %H:%M") if targets.response_due else "No SLA policy"
    resolution = targets.resolution_due.strftime("%d %b %H:%M") if targets.resolution_due else "No SLA policy"
    st.markdown(f"""
    <div class="record-card">
        <div class="record-title">Priority {priority_badge(targets.priority)}</div>
        <div class="record-meta">Score {targets.score} · Asset criticality {crit['label']}</div>
        <div class="record-meta">Response due: {response} · Resolution due: {resolution}</div>
    </div>
    """, unsafe_allow_html=True)


def render(ctx: AppContext) -> None:
    """Render this page."""
    if not check_page_access("Create Ticket", ctx.session):
        render_access_denied("Create Ticket", ctx.session)
        st.stop()

    try:
        form, edit_id = _get_form(ctx)
    except PermissionError as e:
        st.error(str(e))
        return
    except ApiError as e:
        _, message, _ = handle_api_error(e, "load_ticket_for_edit")
        render_error_state(message, error_type="backend", show_retry=False)
        st.session_state.edit_ticket_id = None
        return

    nonce = st.session_state.get("ticket_form_nonce", 0)
    is_site_client = ctx.is_site_client
    draft = form.draft

    title = "Edit Ticket" if edit_id else "Create Ticket"
    st.markdown(f'<p class="page-header-title">{title}</p>', unsafe_allow_html=True)
    if edit_id and st.button("Cancel Edit", key="ct_cancel_edit"):
        _reset_form()
        safe_rerun()

    # ============================================
    # ASSET SELECTION
    # ============================================
    asset_options = []
    if not is_site_client:
        st.markdown('<div class="section-title"><span class="section-title-icon"></span>Asset</div>',
                    unsafe_allow_html=True)
        try:
            asset_options = _render_asset_cascade(ctx, form, nonce)
        except ApiError as e:
            _, message, _ = handle_api_error(e, "load_asset_cascade")
            render_error_state(message, error_type="backend", show_retry=False)

    # ============================================
    # DETAILS
    # ============================================
    st.markdown('<div class="section-title"><span class="section-title-icon"></span>Details</div>',
                unsafe_allow_html=True)
    categories = _lookup_values(safe_execute(lambda: load_categories(ctx.api, ctx.user_id), context="load_categories",
                                             fallback=list, show_error=False)()) or TICKET_CATEGORIES
    col1, col2 = st.columns(2)
    with col1:
        form.set_field("category", _cascade_select("Category *", categories, draft.category or None,
                                                   f"ct_category_{nonce}") or "")
    with col2:
        form.set_field("sub_category", st.text_input("Sub Category", value=draft.sub_category,
                                                     key=f"ct_sub_category_{nonce}"))

    form.set_field("title", st.text_input("Title *", value=draft.title, key=f"ct_title_{nonce}"))
    form.set_field("description", st.text_area("Description", value=draft.description,
                                               key=f"ct_description_{nonce}"))

    if not is_site_client:
        col3, col4 = st.columns(2)
        with col3:
            form.set_field("impact", st.slider("Impact", *IMPACT_RANGE, value=draft.impact or DEFAULT_IMPACT,
                                               key=f"ct_impact_{nonce}"))
        with col4:
            form.set_field("urgency", st.slider("Urgency", *URGENCY_RANGE, value=draft.urgency or DEFAULT_URGENCY,
                                                key=f"ct_urgency_{nonce}"))
        _render_sla_preview(ctx, form, asset_options)

    if ctx.session.has_role(MANAGER_ROLES):
        loaded = safe_execute(lambda: load_engineers(ctx.api, ctx.user_id), context="load_engineers", fallback=list)()
        engineers = {e.id: e.full_name or e.username for e in loaded}
        form.set_field("assigned_to", _cascade_select("Assign To", list(engineers), draft.assigned_to,
                                                      f"ct_assignee_{nonce}",
                                                      format_func=lambda uid: engineers.get(uid, uid)))

    form.set_field("tags", st.text_input("Tags", value=draft.tags, placeholder="Comma separated",
                                         key=f"ct_tags_{nonce}"))

    # ============================================
    # ATTACHMENTS (new tickets only)
    # ============================================
    accepted = []
    if not edit_id:
        picked = st.file_uploader("Attachments", accept_multiple_files=True, key=f"ct_files_{nonce}")
        files = [AttachmentFile(f.name, f.size, f.getvalue(), f.type) for f in picked or []]
        accepted, errors = validate_attachments(files)
        for message in errors:
            st.error(message)
        for f in accepted:
            st.caption(f"📎 {f.name} ({format_file_size(f.size)})")

    # ============================================
    # SUBMIT
    # ============================================
    if not st.button("Update Ticket" if edit_id else "Create Ticket", type="primary", key="ct_submit"):
        return

    action = "edit_ticket" if edit_id else "create_ticket"
    permitted = validate_action(action, ctx.session, draft.site_id)
    if not permitted:
        st.error(permitted.message)
        return

    result = form.validate(is_site_client)
    if not result:
        st.error(result.message)
        return

    fallback_site = ctx.session.assigned_site_ids[0] if ctx.session.assigned_site_ids else None
    payload = form.to_payload(is_site_client, fallback_site_id=fallback_site)

    try:
        with st.spinner("Saving ticket..."):
            if edit_id:
                saved = ctx.api.update_ticket(edit_id, payload)
            else:
                saved = ctx.api.create_ticket(payload)
    except ApiError as e:
        _, message, _ = handle_api_error(e, action)
        st.error(message)
        return

    ticket_id = saved.get("_id") or saved.get("id")
    log_activity_event(
        action_type="TICKET_UPDATED" if edit_id else "TICKET_CREATED",
        category="tickets",
        user_role=ctx.session.role,
        performed_by=ctx.session.username,
        entity_id=ticket_id,
        description=f"{'Updated' if edit_id else 'Created'} ticket {saved.get('ticketId', ticket_id)}",
        new_value=payload,
        activity_log=st.session_state.activity_log,
    )

    if accepted and ticket_id:
        summary = upload_attachments(ticket_id, accepted, ctx.api.upload_attachment)
        if summary.failed:
            log_activity_event(
                action_type="ATTACHMENT_UPLOAD_FAILED",
                category="tickets",
                user_role=ctx.session.role,
                performed_by=ctx.session.username,
                entity_id=ticket_id,
                description=f"{summary.failed} attachment(s) failed to upload",
                success=False,
                metadata={"files": summary.failed_names},
                activity_log=st.session_state.activity_log,
            )
        render_upload_summary(summary)
    else:
        st.success("Ticket updated successfully" if edit_id else "Ticket created successfully")

    _reset_form()
