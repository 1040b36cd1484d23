"""Styled dataframe display helpers."""

from typing import List, Optional

import pandas as pd
import streamlit as st

from config.defaults import MPI_STRONG_THRESHOLD, MPI_WEAK_THRESHOLD, TIMEFRAMES
from models.resolution import ComparisonRow, ListingIndex
from models.timeframe import Tier


def _color_mpi(val):
    try:
        v = float(val)
    except (ValueError, TypeError):
        return ""
    if v >= MPI_STRONG_THRESHOLD:
        return "background-color: #d4edda; color: #155724; font-weight: bold"
    if 0 < v < MPI_WEAK_THRESHOLD:
        return "background-color: #ffcccc; color: #cc0000; font-weight: bold"
    return ""


def _color_tier(val):
    if val == Tier.UNAVAILABLE.value:
        return "background-color: #fff3cd; color: #856404"
    return ""


def render_summary_table(df: pd.DataFrame, title: Optional[str] = None):
    """Group summary table with MPI cells coloured against the market (100)."""
    if title:
        st.subheader(title)
    mpi_columns = [c for c in df.columns if c.startswith("MPI ")]
    styled = df.style.map(_color_mpi, subset=mpi_columns).format("{:.2f}", subset=mpi_columns)
    st.dataframe(styled, use_container_width=True, hide_index=True)


def listing_index_frame(listing_indexes: List[ListingIndex]) -> pd.DataFrame:
    rows = []
    for li in listing_indexes:
        row = {"Listing": li.listing_id, "Group": li.group_key or "—"}
        for tf in TIMEFRAMES:
            row[f"MPI {tf}-day"] = round(li.value(tf), 2)
            row[f"Source {tf}-day"] = li.tier(tf).value
        rows.append(row)
    return pd.DataFrame(rows)


def render_listing_table(listing_indexes: List[ListingIndex]):
    df = listing_index_frame(listing_indexes)
    if df.empty:
        st.info("No listings to show.")
        return
    source_columns = [c for c in df.columns if c.startswith("Source ")]
    mpi_columns = [c for c in df.columns if c.startswith("MPI ")]
    styled = df.style.map(_color_tier, subset=source_columns).map(_color_mpi, subset=mpi_columns)
    st.dataframe(styled, use_container_width=True, hide_index=True)


def comparison_row_frame(rows: List[ComparisonRow]) -> pd.DataFrame:
    records = []
    for r in rows:
        record = {"Listing": r.listing_id, "Group": r.group_key or "—"}
        for tf in TIMEFRAMES:
            pre = r.precomputed[tf]
            record[f"Precomputed {tf}-day"] = round(pre, 2) if pre is not None else None
            record[f"Derived {tf}-day"] = round(r.derived[tf], 2)
            record[f"Difference {tf}-day"] = round(r.derived[tf] - pre, 2) if pre is not None else None
        records.append(record)
    return pd.DataFrame(records)


def render_comparison_table(df: pd.DataFrame):
    """Render a comparison table with positive/negative highlighting."""
    def color_change(val):
        try:
            v = float(val)
            if v > 0:
                return "color: #155724; font-weight: bold"
            elif v < 0:
                return "color: #cc0000; font-weight: bold"
        except (ValueError, TypeError):
            pass
        return ""

    diff_columns = [c for c in df.columns if c.startswith("Difference ")]
    if diff_columns:
        styled = df.style.map(color_change, subset=diff_columns)
        st.dataframe(styled, use_container_width=True, hide_index=True)
    else:
        st.dataframe(df, use_container_width=True, hide_index=True)
