"""User Rights page: per-user, per-scope permission editing (admin only)."""

import streamlit as st

from api.client import ApiError
from components.empty_states import render_empty_state
from components.feedback import render_access_denied, render_error_state
from config.constants import GLOBAL_SCOPE, PERMISSION_LABELS, USER_ROLES
from config.permissions import check_page_access, validate_action
from core.data import clear_cache, load_sites, safe_rerun
from core.errors import handle_api_error, safe_execute
from services.audit_service import log_activity_event
from services.list_filter import (
    RIGHTS_FILTER_LABELS,
    USER_RIGHTS_SORT_LABELS,
    count_rights,
    user_rights_query,
)
from services.rights_editor import RightsEditor
from views.context import AppContext

FILTER_KEYS = ("rights_search", "rights_role", "rights_has", "rights_sort")


def _get_editor(ctx: AppContext) -> RightsEditor:
    editor = st.session_state.get("rights_editor")
    if editor is None:
        records = ctx.api.list_user_rights()
        editor = st.session_state.rights_editor = RightsEditor(records, ctx.api.update_rights, session=ctx.session)
    return editor


def _clear_filters(query):
    query.clear_all()
    for key in FILTER_KEYS:
        st.session_state.pop(key, None)


def _select_user(editor: RightsEditor, record):
    """Select a user and drop the scope and checkbox widget values left from earlier edits."""
    st.session_state.pop(f"rights_scope_{record.user.id}", None)
    stale = [k for k in st.session_state if str(k).startswith(f"right_{record.user.id}_")]
    for key in stale:
        del st.session_state[key]
    editor.select_user(record)


def _render_user_list(editor: RightsEditor):
    query = st.session_state.get("rights_query")
    if query is None:
        query = st.session_state.rights_query = user_rights_query()

    query.set_search(st.text_input("Search", placeholder="Name, email or role", key="rights_search"))
    col1, col2 = st.columns(2)
    with col1:
        query.set_filter("role", st.selectbox("Role", [""] + list(USER_ROLES),
                                              format_func=lambda r: USER_ROLES[r]["name"] if r else "All Roles",
                                              key="rights_role"))
    with col2:
        query.set_filter("rights", st.selectbox("Rights", [""] + list(RIGHTS_FILTER_LABELS),
                                                format_func=lambda v: RIGHTS_FILTER_LABELS.get(v, "Any"),
                                                key="rights_has"))
    query.set_sort(st.selectbox("Sort", list(USER_RIGHTS_SORT_LABELS),
                                format_func=USER_RIGHTS_SORT_LABELS.get, key="rights_sort"))

    if query.active_filter_count:
        st.button(f"Clear filters ({query.active_filter_count})", key="rights_clear",
                  on_click=_clear_filters, args=(query,))

    visible = query.apply(editor.records)
    if not visible:
        render_empty_state("no_users")
        return

    for record in visible:
        selected = editor.selected_user is not None and editor.selected_user.user.id == record.user.id
        if st.button(
            f"{record.user.full_name or record.user.username} · {count_rights(record)} rights",
            key=f"rights_user_{record.user.id}",
            type="primary" if selected else "secondary",
            width="stretch",
        ):
            _select_user(editor, record)
            safe_rerun()


def _render_scope_editor(ctx: AppContext, editor: RightsEditor):
    record = editor.selected_user
    if record is None:
        st.info("Select a user to edit their rights.")
        return

    user = record.user
    st.markdown(f"""
    <div class="record-card">
        <div class="record-title">{user.full_name or user.username}</div>
        <div class="record-meta">{user.email} · {USER_ROLES.get(user.role, {}).get('name', user.role)}</div>
    </div>
    """, unsafe_allow_html=True)

    sites = safe_execute(lambda: load_sites(ctx.api, ctx.user_id), context="load_sites", fallback=list)()
    scopes = {GLOBAL_SCOPE: "Global (all sites)"}
    scopes.update({site.id: site.name for site in sites})
    scope = st.selectbox("Scope", list(scopes), index=list(scopes).index(editor.selected_scope)
                         if editor.selected_scope in scopes else 0,
                         format_func=scopes.get, key=f"rights_scope_{user.id}")
    if scope != editor.selected_scope:
        editor.select_scope(scope)

    cols = st.columns(3)
    for i, (code, label) in enumerate(PERMISSION_LABELS.items()):
        with cols[i % 3]:
            st.checkbox(
                label,
                value=code in editor.edited_rights,
                key=f"right_{user.id}_{editor.selected_scope}_{code}",
                on_change=editor.toggle_right,
                args=(code,),
            )

    if st.button("Save Rights", type="primary", key="rights_save", disabled=not editor.is_dirty):
        permitted = validate_action("edit_rights", ctx.session)
        if not permitted:
            st.error(permitted.message)
            return
        old_rights = sorted(record.rights_for_scope(editor.selected_scope))
        result = editor.save()
        log_activity_event(
            action_type="RIGHTS_UPDATED",
            category="user_rights",
            user_role=ctx.session.role,
            performed_by=ctx.session.username,
            entity_id=user.id,
            description=f"Rights for {user.full_name or user.username} in scope {scopes.get(editor.selected_scope)}",
            success=result.success,
            old_value=old_rights,
            new_value=sorted(editor.edited_rights),
            error_message=None if result else result.message,
            activity_log=st.session_state.activity_log,
        )
        if result:
            st.success(result.message)
        else:
            st.error(result.message)


def render(ctx: AppContext) -> None:
    """Render this page."""
    if not check_page_access("User Rights", ctx.session):
        render_access_denied("User Rights", ctx.session)
        st.stop()

    st.markdown('<p class="page-header-title">User Rights</p>', unsafe_allow_html=True)

    try:
        editor = _get_editor(ctx)
    except ApiError as e:
        _, message, _ = handle_api_error(e, "load_user_rights")
        render_error_state(message, error_type="backend", retry_key="retry_rights")
        return

    if st.button("Reload", key="rights_reload"):
        st.session_state.rights_editor = None
        clear_cache()
        safe_rerun()

    left, right = st.columns([1, 2])
    with left:
        _render_user_list(editor)
    with right:
        _render_scope_editor(ctx, editor)
