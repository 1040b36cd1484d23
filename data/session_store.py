"""Typed wrapper around st.session_state for application data."""

from datetime import datetime
from typing import List, Optional

import streamlit as st

from models.listing import Listing
from models.reference import ReferenceDataset
from models.resolution import IndexSummaryResult


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    defaults = {
        "listings": [],
        "reference_dataset": None,
        "listings_source": "",
        "reference_source": "",
        "skipped_listings": 0,
        "data_loaded": False,
        "last_result": None,
        "last_run_key": None,
        "last_data_edit": None,
        "rule_config": {},
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


# --- Getters ---

def get_listings() -> List[Listing]:
    return st.session_state.get("listings", [])


def get_reference_dataset() -> Optional[ReferenceDataset]:
    return st.session_state.get("reference_dataset")


def get_sources() -> dict:
    return {
        "listings": st.session_state.get("listings_source", ""),
        "reference": st.session_state.get("reference_source", ""),
    }


def get_skipped_listings() -> int:
    return st.session_state.get("skipped_listings", 0)


def get_rule_config() -> dict:
    return st.session_state.get("rule_config", {})


def get_last_result() -> Optional[IndexSummaryResult]:
    return st.session_state.get("last_result")


def get_last_run_key():
    return st.session_state.get("last_run_key")


def get_last_data_edit() -> Optional[datetime]:
    return st.session_state.get("last_data_edit")


def is_data_loaded() -> bool:
    return st.session_state.get("data_loaded", False)


# --- Setters ---

def set_listings(listings: List[Listing], source: str, skipped: int = 0):
    st.session_state["listings"] = listings
    st.session_state["listings_source"] = source
    st.session_state["skipped_listings"] = skipped
    _mark_data_edit()


def set_reference_dataset(dataset: Optional[ReferenceDataset], source: str):
    st.session_state["reference_dataset"] = dataset
    st.session_state["reference_source"] = source
    _mark_data_edit()


def set_data_loaded(loaded: bool):
    st.session_state["data_loaded"] = loaded


def set_rule_config(config: dict):
    st.session_state["rule_config"] = config
    _mark_data_edit()


def set_last_result(result: IndexSummaryResult, run_key):
    st.session_state["last_result"] = result
    st.session_state["last_run_key"] = run_key


def _mark_data_edit():
    st.session_state["last_data_edit"] = datetime.now()
    st.session_state["last_result"] = None
    st.session_state["last_run_key"] = None


# --- Computation ---

def get_or_compute_result(grouping_mode: str, compare_mode: bool, reference_date) -> Optional[IndexSummaryResult]:
    """Run the MPI pipeline for the current controls, reusing the last result when unchanged."""
    from data.providers import StaticReferenceProvider
    from engine.pipeline import run_index_summaries

    if not is_data_loaded():
        return None
    run_key = (grouping_mode, compare_mode, reference_date)
    result = get_last_result()
    if result is not None and get_last_run_key() == run_key:
        return result

    result = run_index_summaries(
        get_listings(),
        StaticReferenceProvider(get_reference_dataset()),
        grouping_mode=grouping_mode,
        compare_mode=compare_mode,
        reference_date=reference_date,
        rule_config=get_rule_config(),
    )
    result.statistics.skipped_listings += get_skipped_listings()
    set_last_result(result, run_key)
    return result
