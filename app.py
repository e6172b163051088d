"""
TicketOps Console
A Streamlit console for the ticketing, RMA and stock backend.
Role and right based navigation, per-page error handling, file logging.
"""

import logging
import os

import streamlit as st
from dotenv import load_dotenv

from api.config import validate_api_config
from config.styles import get_anti_flicker_css, get_dashboard_css
from core.auth import (
    check_session_timeout,
    get_api,
    get_session,
    init_auth_session,
    render_login_page,
    validate_current_session,
)
from core.navigation import render_footer, render_sidebar
from views import PAGE_REGISTRY
from views.context import AppContext

# Load environment variables
load_dotenv()

# ============================================
# PRODUCTION ERROR HANDLING & LOGGING
# ============================================
# Technical errors go to file, not UI
LOG_DIR = os.getenv("LOG_DIR", "logs")
os.makedirs(LOG_DIR, exist_ok=True)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s | %(levelname)s | %(name)s | %(message)s',
    handlers=[
        logging.FileHandler(os.path.join(LOG_DIR, "app.log"), encoding='utf-8'),
        logging.StreamHandler() if os.getenv("DEBUG", "false").lower() == "true" else logging.NullHandler()
    ]
)
logger = logging.getLogger("TicketOps")

if 'error_count' not in st.session_state:
    st.session_state.error_count = 0


@st.cache_data(ttl=60, show_spinner=False)
def check_backend(base_url: str) -> bool:
    """Health check, cached per backend URL for a minute."""
    return get_api().ping()


# Page configuration
st.set_page_config(
    page_title="TicketOps Console",
    page_icon="🎫",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Hide everything until the auth decision below
st.markdown(get_anti_flicker_css(), unsafe_allow_html=True)

# ============================================
# EARLY AUTH CHECK - BEFORE ANY UI RENDERING
# ============================================
init_auth_session()

if not st.session_state.authenticated:
    render_login_page()
    st.stop()

# Session security checks: absolute/inactivity timeout, then periodic profile re-validation
if not check_session_timeout():
    validate_current_session()

if not st.session_state.authenticated:
    render_login_page()
    st.stop()

st.markdown(get_dashboard_css(), unsafe_allow_html=True)

if "current_page" not in st.session_state:
    st.session_state.current_page = "Dashboard"

config_status = validate_api_config()
if not config_status["valid"]:
    for issue in config_status["issues"]:
        logger.warning(f"API configuration: {issue}")

api = get_api()
backend_ok = config_status["valid"] and check_backend(api.base_url)

# ============================================
# SIDEBAR & PAGE DISPATCH
# ============================================
page = render_sidebar(backend_ok)

if not backend_ok:
    st.warning("The TicketOps backend is not reachable. Data may be missing until it is back.")

ctx = AppContext(api=api, session=get_session(), backend_ok=backend_ok)

page_renderer = PAGE_REGISTRY.get(page)
if page_renderer:
    page_renderer(ctx)
else:
    st.error(f"Unknown page: {page}")

render_footer()
