"""Market Penetration Index dashboard — Streamlit entry point."""

import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from components.sidebar import render_sidebar
from data.session_store import initialize_session_state
from tabs import (
    tab_summary,
    tab_listing_detail,
    tab_comparison,
    tab_data,
)


def main():
    st.set_page_config(
        page_title="MPI Dashboard",
        page_icon="📈",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    initialize_session_state()
    sidebar_state = render_sidebar()

    tab1, tab2, tab3, tab4 = st.tabs([
        "📊 MPI Summary",
        "🔍 Listing Drilldown",
        "⚖️ Comparison",
        "⚙️ Data",
    ])

    with tab1:
        tab_summary.render(sidebar_state)
    with tab2:
        tab_listing_detail.render(sidebar_state)
    with tab3:
        tab_comparison.render(sidebar_state)
    with tab4:
        tab_data.render(sidebar_state)


if __name__ == "__main__":
    main()
