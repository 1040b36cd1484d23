"""Tab 1: MPI Summary — group averages and calculation statistics."""

import streamlit as st

from components.charts import mpi_by_group_bar, tier_breakdown_donut
from components.metrics_cards import render_alert_card, render_statistics_row
from components.tables import render_summary_table
from data.session_store import get_or_compute_result, get_reference_dataset, is_data_loaded
from engine.pipeline import format_summary_table


def render(sidebar_state):
    """Render the MPI Summary tab."""
    st.header("Market Penetration Index (MPI) Summary")

    if not is_data_loaded():
        st.info("No data loaded. Please load listings and market data in the Data tab.")
        return

    result = get_or_compute_result(
        sidebar_state.grouping_mode, sidebar_state.compare_mode, sidebar_state.reference_date,
    )
    stats = result.statistics

    dataset = get_reference_dataset()
    if dataset is not None:
        location = ""
        if dataset.lat is not None and dataset.lng is not None:
            location = f" | Location: {dataset.lat:.4f}, {dataset.lng:.4f}"
        st.caption(
            f"Market data source: {dataset.source or 'unknown'} | "
            f"Categories: {dataset.category_count}{location}"
        )

    # --- Statistics ---
    st.subheader("Calculation Statistics")
    render_statistics_row(stats)

    if stats.skipped_listings:
        render_alert_card(f"{stats.skipped_listings} malformed listing records were skipped.", "warning")
    if stats.ungrouped_listings:
        render_alert_card(
            f"{stats.ungrouped_listings} listings have no value for this grouping and are not in any group.",
            "info",
        )
    if stats.total_resolutions and stats.unavailable == stats.total_resolutions:
        render_alert_card("No MPI could be resolved for any listing. Check the market data.", "error")

    st.divider()

    # --- Charts ---
    col1, col2 = st.columns([3, 2])
    with col1:
        if result.summaries:
            st.plotly_chart(mpi_by_group_bar(result.summaries), use_container_width=True)
    with col2:
        st.plotly_chart(tier_breakdown_donut(stats), use_container_width=True)

    st.divider()

    # --- Table ---
    df = format_summary_table(result.summaries)
    render_summary_table(df, title="Average MPI by Group")
    st.caption(f"Total groups: {len(result.summaries)} | Total listings: {stats.total_listings}")
    st.download_button(
        "Download CSV",
        data=df.to_csv(index=False),
        file_name=f"mpi_summary_{sidebar_state.grouping_mode}.csv",
        mime="text/csv",
    )
