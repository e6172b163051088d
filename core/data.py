"""
Data access, caching, and pagination utilities.
Lookup data is cached per signed-in user; lists are paged by the backend.
"""
import streamlit as st

from api.models import Pagination
from config.constants import PAGINATION_CONFIG, CACHE_CONFIG


# ============================================
# RERUN
# ============================================
def safe_rerun():
    """Rerun the whole app, including from inside a fragment."""
    st.rerun(scope="app")


# ============================================
# PAGINATION (server-side pages)
# ============================================
def get_pagination_state(key: str) -> dict:
    """Get or initialize pagination state for a specific list."""
    state_key = f"pagination_{key}"
    if state_key not in st.session_state:
        st.session_state[state_key] = {
            "page": 1,
            "page_size": PAGINATION_CONFIG["default_page_size"],
        }
    return st.session_state[state_key]


def page_numbers_for(current_page: int, total_pages: int) -> list:
    """
    Page buttons to show, 1-based, with -1 marking a gap.
    Small page counts list every page.
    """
    if total_pages <= 7:
        return list(range(1, total_pages + 1))

    numbers = [1]
    start = max(2, current_page - 1)
    end = min(total_pages - 1, current_page + 1)
    if start > 2:
        numbers.append(-1)
    numbers.extend(range(start, end + 1))
    if end < total_pages - 1:
        numbers.append(-1)
    numbers.append(total_pages)
    return numbers


def render_page_navigation(key: str, pagination: Pagination):
    """Render Prev / page numbers / Next below a server-paged list."""
    state = get_pagination_state(key)
    total_pages = max(1, pagination.pages)
    current_page = min(state["page"], total_pages)

    if total_pages <= 1:
        return

    def go_to_page(page_num):
        get_pagination_state(key)["page"] = page_num

    numbers = page_numbers_for(current_page, total_pages)
    cols = st.columns([1.5, 1] + [0.6] * len(numbers) + [1, 2, 1.5])

    with cols[1]:
        st.button(
            "◀ Prev",
            key=f"pg_prev_{key}",
            on_click=go_to_page,
            args=(max(1, current_page - 1),),
            disabled=(current_page == 1),
            width="stretch"
        )

    for i, page_num in enumerate(numbers):
        with cols[i + 2]:
            if page_num < 0:
                st.markdown("<div style='text-align: center; padding: 8px; color: #9ca3af; font-weight: 500;'>...</div>", unsafe_allow_html=True)
            else:
                st.button(
                    str(page_num),
                    key=f"pg_{key}_{i}_{page_num}",
                    on_click=go_to_page,
                    args=(page_num,),
                    type="primary" if page_num == current_page else "secondary",
                    width="stretch"
                )

    with cols[len(numbers) + 2]:
        st.button(
            "Next ▶",
            key=f"pg_next_{key}",
            on_click=go_to_page,
            args=(min(total_pages, current_page + 1),),
            disabled=(current_page >= total_pages),
            width="stretch"
        )

    with cols[len(numbers) + 3]:
        st.markdown(f"<div style='text-align: center; padding: 8px 0; color: #6b7280; font-size: 13px; white-space: nowrap;'>Page {current_page} of {total_pages} · {pagination.total} total</div>", unsafe_allow_html=True)


def reset_pagination(key: str = None):
    """Reset pagination state. If key is None, reset all pagination."""
    if key:
        state_key = f"pagination_{key}"
        if state_key in st.session_state:
            st.session_state[state_key]["page"] = 1
    else:
        for k in list(st.session_state.keys()):
            if k.startswith("pagination_"):
                st.session_state[k]["page"] = 1


# ============================================
# CACHED LOOKUPS
# ============================================
# The leading underscore keeps the client out of Streamlit's cache key;
# user_id scopes entries because the backend filters lookups per user.

@st.cache_data(ttl=CACHE_CONFIG["ttl_lookups"], show_spinner=False)
def load_sites(_api, user_id: str) -> list:
    return _api.get_sites_dropdown()


@st.cache_data(ttl=CACHE_CONFIG["ttl_lookups"], show_spinner=False)
def load_categories(_api, user_id: str) -> list:
    return _api.get_categories()


@st.cache_data(ttl=CACHE_CONFIG["ttl_lookups"], show_spinner=False)
def load_sla_policies(_api, user_id: str) -> list:
    return _api.get_sla_policies()


@st.cache_data(ttl=CACHE_CONFIG["ttl_lookups"], show_spinner=False)
def load_engineers(_api, user_id: str) -> list:
    return _api.get_engineers()


def clear_cache():
    """Drop every cached lookup, e.g. after an admin edits sites or users."""
    for loader in (load_sites, load_categories, load_sla_policies, load_engineers):
        loader.clear()
