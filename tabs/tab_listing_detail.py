"""Tab 2: Listing Drilldown — per-listing resolutions and how each value was obtained."""

import streamlit as st

from components.tables import render_listing_table
from config.defaults import TIMEFRAMES
from data.session_store import get_listings, get_or_compute_result, is_data_loaded
from engine.entity_occupancy import estimate_occupancy, feed_market_occupancy
from engine.timeframes import resolve_range
from models.timeframe import Tier

TIER_BADGES = {
    Tier.PRECOMPUTED: "🟢 precomputed",
    Tier.DERIVED: "🔵 derived",
    Tier.UNAVAILABLE: "🟡 unavailable",
}


def render(sidebar_state):
    """Render the Listing Drilldown tab."""
    st.header("Listing Drilldown")

    if not is_data_loaded():
        st.info("No data loaded. Please load listings and market data in the Data tab.")
        return

    result = get_or_compute_result(
        sidebar_state.grouping_mode, sidebar_state.compare_mode, sidebar_state.reference_date,
    )
    render_listing_table(result.listing_indexes)

    st.divider()

    listing_ids = [li.listing_id for li in result.listing_indexes]
    if not listing_ids:
        return
    selected = st.selectbox("Listing", options=listing_ids, key="detail_listing")
    listing_index = next(li for li in result.listing_indexes if li.listing_id == selected)
    listing = next(item for item in get_listings() if item.listing_id == selected)

    st.caption(f"Group: {listing_index.group_key or 'not grouped'}")
    for tf in TIMEFRAMES:
        resolution = listing_index.resolutions[tf]
        with st.expander(f"{tf}-day: {resolution.value:.2f} — {TIER_BADGES[resolution.tier]}"):
            for step in resolution.explanation_steps:
                st.markdown(f"- {step}")
            start, end = resolve_range(tf, sidebar_state.reference_date)
            feed = feed_market_occupancy(listing, start, end)
            own = estimate_occupancy(listing, start, end)
            st.caption(
                f"Listing occupancy {own:.1%} | Feed market occupancy: "
                + (f"{feed:.1%}" if feed is not None else "not reported")
            )
