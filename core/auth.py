"""
Authentication & session management for the TicketOps console.
Handles login, logout, session validation and timeout checks against the REST backend.
"""
import logging
from datetime import datetime

import streamlit as st

from api.client import ApiError, TicketOpsApi
from config.constants import SESSION_TIMEOUT_HOURS, INACTIVITY_TIMEOUT_MINUTES
from config.styles import get_login_css
from core.data import safe_rerun
from core.session import SessionContext
from services.audit_service import log_activity_event

logger = logging.getLogger("TicketOps")

# Re-check the profile with the backend at most this often
VALIDATION_INTERVAL_SECONDS = 300

PAGE_STATE_KEYS = (
    "rights_editor", "rights_query", "ticket_form", "edit_ticket_id",
    "rma_query", "replacement_query", "dashboard_stats", "dashboard_site",
    "requisition_type_counts", "notification_feed", "password_errors",
)


def init_auth_session():
    """Initialize authentication session state with security defaults"""
    defaults = {
        'authenticated': False,
        'session': None,
        'api': None,
        'login_time': None,
        'last_activity': None,
        'login_error': None,
        'login_processing': False,
        'last_session_validation': None,
        'activity_log': [],
    }
    for key, default_value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default_value


def get_api() -> TicketOpsApi:
    """The per-browser-session API client, carrying the signed-in user's tokens."""
    if st.session_state.get('api') is None:
        st.session_state.api = TicketOpsApi(on_token_refresh=_store_refreshed_token)
    return st.session_state.api


def get_session() -> SessionContext:
    return st.session_state.get('session')


def _store_refreshed_token(token: str):
    session = st.session_state.get('session')
    if session is not None:
        session.access_token = token


def check_session_timeout():
    """
    Check if session has timed out (absolute or inactivity).
    Returns True if session was invalidated.
    """
    if not st.session_state.authenticated:
        return False

    now = datetime.now()

    # Absolute session timeout
    if st.session_state.login_time:
        elapsed = now - st.session_state.login_time
        if elapsed.total_seconds() > (SESSION_TIMEOUT_HOURS * 3600):
            logout_user(reason="session_expired")
            return True

    # Inactivity timeout
    if st.session_state.last_activity:
        inactive = now - st.session_state.last_activity
        if inactive.total_seconds() > (INACTIVITY_TIMEOUT_MINUTES * 60):
            logout_user(reason="inactivity")
            return True

    st.session_state.last_activity = now
    return False


def validate_current_session():
    """
    Re-read the signed-in profile so role changes made by an admin take effect.
    Only a 401 logs the user out; transient backend errors keep the session.
    """
    if not st.session_state.authenticated:
        return False

    session = get_session()
    if session is None or not session.access_token:
        logout_user(reason="session_invalidated")
        return False

    now = datetime.now()
    last_validation = st.session_state.get('last_session_validation')
    if last_validation and (now - last_validation).total_seconds() < VALIDATION_INTERVAL_SECONDS:
        return True

    try:
        profile = get_api().get_profile()
    except ApiError as e:
        if e.status_code == 401:
            logout_user(reason="session_invalidated")
            return False
        logger.warning(f"Session validation skipped: {e.message}")
        return True

    if profile:
        session.role = profile.get('role', session.role)
        if profile.get('rights') is not None:
            session.rights = profile['rights']
        if profile.get('assignedSites') is not None:
            session.assigned_sites = list(profile['assignedSites'])

    st.session_state.last_session_validation = now
    return True


def login_user(session: SessionContext):
    """Set session state after successful login."""
    st.session_state.authenticated = True
    st.session_state.session = session
    st.session_state.login_time = datetime.now()
    st.session_state.last_activity = datetime.now()
    st.session_state.last_session_validation = datetime.now()
    st.session_state.login_error = None
    st.session_state.login_processing = False


def logout_user(reason: str = None):
    """Clear session state on logout and revoke the backend session."""
    api = st.session_state.get('api')
    if api is not None and api.access_token:
        try:
            api.logout()
        except ApiError as e:
            logger.info(f"Backend logout failed, clearing local session anyway: {e.message}")

    poller = st.session_state.get('dashboard_poller')
    if poller is not None:
        poller.close()

    st.session_state.authenticated = False
    st.session_state.session = None
    st.session_state.api = None
    st.session_state.dashboard_poller = None
    st.session_state.login_time = None
    st.session_state.last_activity = None
    st.session_state.login_processing = False

    # Page working state belongs to the signed-out user
    for key in PAGE_STATE_KEYS:
        st.session_state.pop(key, None)

    if reason == "session_expired":
        st.session_state.login_error = "Your session has expired. Please sign in again."
    elif reason == "inactivity":
        st.session_state.login_error = "You were logged out due to inactivity."
    elif reason == "session_invalidated":
        st.session_state.login_error = "Your session is no longer valid. Please sign in again."


def authenticate(username: str, password: str) -> tuple:
    """
    Sign in against the backend.

    Returns:
        (success, SessionContext or None, message)
    """
    api = get_api()
    try:
        data = api.login(username, password)
    except ApiError as e:
        logger.warning(f"Login failed for {username}: {e.message}")
        return False, None, e.message or "Login failed"

    session = SessionContext.from_login(data)
    if not session.user_id or not session.access_token:
        return False, None, "Login failed"
    return True, session, "Signed in"


def render_login_page():
    """Render the sign-in card."""
    st.markdown(get_login_css(), unsafe_allow_html=True)

    st.markdown("<div style='height: 4vh;'></div>", unsafe_allow_html=True)

    st.markdown("""
    <div class="login-brand">
        <p class="login-brand-title">TicketOps</p>
        <p class="login-brand-tagline">Ticket, RMA &amp; Stock Console</p>
    </div>
    """, unsafe_allow_html=True)

    col1, col2, col3 = st.columns([1, 2, 1])

    with col2:
        if st.session_state.login_error:
            st.markdown(f"""
            <div class="session-warning">
                <p>{st.session_state.login_error}</p>
            </div>
            """, unsafe_allow_html=True)
            st.session_state.login_error = None

        with st.form("login_form", clear_on_submit=False):
            st.markdown("""
            <div class="login-card-header">
                <h2>SIGN IN</h2>
            </div>
            """, unsafe_allow_html=True)

            username = st.text_input(
                "Username",
                placeholder="Enter your username",
                key="login_username",
                disabled=st.session_state.login_processing
            )

            password = st.text_input(
                "Password",
                type="password",
                placeholder="Enter your password",
                key="login_password",
                disabled=st.session_state.login_processing
            )

            button_text = "Log In" if not st.session_state.login_processing else "Logging in..."
            submit = st.form_submit_button(
                button_text,
                width="stretch",
                type="primary",
                disabled=st.session_state.login_processing
            )

            if submit and not st.session_state.login_processing:
                username_clean = username.strip() if username else ""

                if not username_clean or not password:
                    st.error("Please enter your credentials")
                elif len(username_clean) < 2:
                    st.error("Please enter a valid username")
                else:
                    st.session_state.login_processing = True
                    success, session, message = authenticate(username_clean, password)
                    if success:
                        login_user(session)
                        log_activity_event(
                            action_type="USER_LOGIN",
                            category="authentication",
                            user_role=session.role,
                            performed_by=session.username,
                            description=f"User signed in: {session.username}",
                            activity_log=st.session_state.activity_log,
                        )
                        safe_rerun()
                    else:
                        st.session_state.login_processing = False
                        st.error(message)
