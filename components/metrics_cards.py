"""Reusable KPI metric card widgets."""

import streamlit as st

from models.resolution import CalculationStatistics
from models.timeframe import Tier


def render_metric_row(metrics: list[dict]):
    """Render a row of metric cards.

    Each metric dict should have: label, value, and optionally delta, delta_color.
    """
    cols = st.columns(len(metrics))
    for col, m in zip(cols, metrics):
        with col:
            st.metric(
                label=m["label"],
                value=m["value"],
                delta=m.get("delta"),
                delta_color=m.get("delta_color", "normal"),
            )


def render_statistics_row(stats: CalculationStatistics):
    """Tier counts with their share of all calculations."""
    render_metric_row([
        {"label": "Precomputed MPI Used", "value": f"{stats.precomputed_used:,}",
         "delta": f"{stats.share(Tier.PRECOMPUTED):.0%}", "delta_color": "off"},
        {"label": "Market Derived", "value": f"{stats.derived_used:,}",
         "delta": f"{stats.share(Tier.DERIVED):.0%}", "delta_color": "off"},
        {"label": "Unavailable", "value": f"{stats.unavailable:,}",
         "delta": f"{stats.share(Tier.UNAVAILABLE):.0%}",
         "delta_color": "inverse" if stats.unavailable else "off"},
        {"label": "Total Calculations", "value": f"{stats.total_resolutions:,}",
         "delta": f"{stats.total_listings} listings x 5 timeframes", "delta_color": "off"},
    ])


def render_alert_card(message: str, level: str = "warning"):
    """Render an alert card with appropriate styling."""
    if level == "error":
        st.error(message, icon="🔴")
    elif level == "warning":
        st.warning(message, icon="🟡")
    else:
        st.info(message, icon="🔵")
