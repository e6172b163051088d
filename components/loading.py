"""
Skeleton placeholders shown while data loads.
"""

import streamlit as st

_SHIMMER_CSS = """
<style>
    .skeleton-block {
        background: linear-gradient(90deg, #f1f5f9 25%, #e2e8f0 50%, #f1f5f9 75%);
        background-size: 200% 100%;
        animation: shimmer 1.5s infinite;
        border-radius: 6px;
    }
    @keyframes shimmer {
        0% { background-position: 200% 0; }
        100% { background-position: -200% 0; }
    }
</style>
"""


def render_skeleton_metrics(count: int = 4, height: str = "100px"):
    """Row of placeholder metric cards shown while dashboard stats load."""
    st.markdown(_SHIMMER_CSS, unsafe_allow_html=True)
    for col in st.columns(count):
        with col:
            st.markdown(f'<div class="skeleton-block" style="height: {height};"></div>', unsafe_allow_html=True)


def render_skeleton_chart(height: str = "300px"):
    st.markdown(_SHIMMER_CSS, unsafe_allow_html=True)
    st.markdown(f"""
    <div class="skeleton-block" style="height: {height}; display: flex; align-items: center; justify-content: center;">
        <div style="color: #94a3b8; font-size: 0.9rem;">Loading chart...</div>
    </div>
    """, unsafe_allow_html=True)
