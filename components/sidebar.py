"""Global sidebar controls for grouping, comparison mode and reference date."""

from dataclasses import dataclass
from datetime import date

import streamlit as st

from config.defaults import GROUPING_MODES
from config.settings import settings
from data.session_store import get_listings, get_sources, is_data_loaded

GROUPING_LABELS = {
    "default": "Listing group",
    "city": "City",
    "bedrooms": "Bedrooms",
    "city-bedrooms": "City + Bedrooms",
}


@dataclass
class SidebarState:
    grouping_mode: str
    compare_mode: bool
    reference_date: date


def render_sidebar() -> SidebarState:
    """Render the global sidebar controls and return current state."""
    with st.sidebar:
        st.title("MPI Dashboard")
        st.divider()

        default_mode = settings.DEFAULT_GROUPING if settings.DEFAULT_GROUPING in GROUPING_MODES else "default"
        grouping_mode = st.selectbox(
            "Group by",
            options=GROUPING_MODES,
            format_func=lambda m: GROUPING_LABELS.get(m, m),
            index=GROUPING_MODES.index(default_mode),
            key="sidebar_grouping",
        )

        compare_mode = st.toggle(
            "Compare precomputed vs derived",
            value=False,
            key="sidebar_compare",
        )

        reference_date = st.date_input(
            "Window start",
            value=date.today(),
            key="sidebar_reference_date",
            help="Lookahead windows start on this date.",
        )

        st.divider()

        # Data status indicator
        if is_data_loaded():
            sources = get_sources()
            st.success(f"{len(get_listings())} listings loaded")
            st.caption(f"Listings: {sources['listings']}")
            st.caption(f"Market data: {sources['reference']}")
        else:
            st.warning("No data loaded — go to Data tab")

    return SidebarState(
        grouping_mode=grouping_mode,
        compare_mode=compare_mode,
        reference_date=reference_date,
    )
