"""Tab 3: Comparison — precomputed MPI next to independently derived MPI."""

import streamlit as st

from components.charts import comparison_bar
from components.tables import (
    comparison_row_frame, render_comparison_table,
)
from config.defaults import TIMEFRAMES
from data.session_store import get_or_compute_result, is_data_loaded
from engine.pipeline import format_comparison_table


def render(sidebar_state):
    """Render the Comparison tab."""
    st.header("Precomputed vs Derived MPI")

    if not is_data_loaded():
        st.info("No data loaded. Please load listings and market data in the Data tab.")
        return

    if not sidebar_state.compare_mode:
        st.info("Turn on 'Compare precomputed vs derived' in the sidebar to run the comparison.")
        return

    result = get_or_compute_result(
        sidebar_state.grouping_mode, sidebar_state.compare_mode, sidebar_state.reference_date,
    )
    if not result.comparison_summaries:
        st.info("No grouped listings to compare.")
        return

    timeframe = st.radio(
        "Timeframe",
        options=TIMEFRAMES,
        format_func=lambda tf: f"{tf}-day",
        horizontal=True,
        key="comparison_timeframe",
    )
    st.plotly_chart(comparison_bar(result.comparison_summaries, timeframe), use_container_width=True)

    st.subheader("By Group")
    st.dataframe(format_comparison_table(result.comparison_summaries),
                 use_container_width=True, hide_index=True)

    st.subheader("By Listing")
    render_comparison_table(comparison_row_frame(result.comparisons))
