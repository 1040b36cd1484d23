"""Tab 4: Data — listings and market data upload, sample data, heuristic settings."""

import json

import streamlit as st

from config.defaults import MIN_REALISTIC_SAMPLES, SAMPLE_SIZE
from config.settings import settings
from data.loader import load_listings_upload, parse_listings, parse_reference
from data.providers import fetch_listings, fetch_reference
from data.sample_data import generate_sample_listings, generate_sample_reference
from data.session_store import (
    get_listings, get_reference_dataset, get_rule_config, set_data_loaded,
    set_listings, set_reference_dataset, set_rule_config,
)
from engine.errors import MalformedInputError


def _show_report(report):
    for e in report.errors:
        st.error(e)
    for w in report.warnings[:20]:
        st.warning(w)
    if len(report.warnings) > 20:
        st.caption(f"... and {len(report.warnings) - 20} more warnings")


def _finish_load():
    listings = get_listings()
    dataset = get_reference_dataset()
    set_data_loaded(bool(listings))
    if listings:
        categories = dataset.category_count if dataset is not None else 0
        st.success(f"Data loaded: {len(listings)} listings, {categories} market categories")


def render(sidebar_state):
    """Render the Data tab."""
    st.header("Data")

    # --- Upload Section ---
    st.subheader("Upload")
    col1, col2 = st.columns(2)
    with col1:
        listings_file = st.file_uploader(
            "Listings (JSON, CSV or XLSX)",
            type=["json", "csv", "xlsx"],
            key="upload_listings",
        )
    with col2:
        reference_file = st.file_uploader(
            "Neighborhood market data (JSON)",
            type=["json"],
            key="upload_reference",
        )

    col_upload, col_files, col_sample = st.columns(3)
    with col_upload:
        if st.button("Upload & Validate", type="primary", key="btn_upload"):
            if not listings_file:
                st.warning("Please upload a listings file.")
            else:
                try:
                    listings, report = load_listings_upload(listings_file)
                    set_listings(listings, listings_file.name, len(report.errors))
                    _show_report(report)
                    if reference_file:
                        dataset, ref_report = parse_reference(json.load(reference_file))
                        set_reference_dataset(dataset, reference_file.name)
                        _show_report(ref_report)
                    _finish_load()
                except (MalformedInputError, json.JSONDecodeError) as e:
                    st.error(f"Error loading file: {e}")

    with col_files:
        if st.button("Load From Files", key="btn_files"):
            listings, report, source = fetch_listings(settings.LISTINGS_PATHS)
            set_listings(listings, source, len(report.errors))
            dataset, ref_report, ref_source = fetch_reference(settings.REFERENCE_PATHS)
            set_reference_dataset(dataset, ref_source)
            _show_report(report)
            _show_report(ref_report)
            _finish_load()

    with col_sample:
        if st.button("Load Sample Data", key="btn_sample"):
            listings, report = parse_listings(generate_sample_listings())
            dataset, ref_report = parse_reference(generate_sample_reference(sidebar_state.reference_date))
            set_listings(listings, "sample", len(report.errors))
            set_reference_dataset(dataset, "sample")
            _finish_load()

    st.divider()

    # --- Heuristic settings ---
    st.subheader("Market Channel Detection")
    st.caption(
        "A category counts as realistic occupancy when enough of its leading values "
        "are fractional percentages. Change these only with evidence from the feed."
    )
    cfg = dict(get_rule_config())
    col1, col2, col3 = st.columns(3)
    with col1:
        sample_size = st.number_input("Values sampled per channel", min_value=5, max_value=200,
                                      value=int(cfg.get("sample_size", SAMPLE_SIZE)))
    with col2:
        min_samples = st.number_input("Realistic values required", min_value=1, max_value=200,
                                      value=int(cfg.get("min_realistic_samples", MIN_REALISTIC_SAMPLES)))
    with col3:
        timeout = st.number_input(
            "Fetch timeout (s)", min_value=0.5, max_value=120.0,
            value=float(cfg.get("fetch_timeout_seconds", settings.FETCH_TIMEOUT_SECONDS)),
        )
    if st.button("Save Settings", key="btn_rules"):
        set_rule_config({
            "sample_size": int(sample_size),
            "min_realistic_samples": int(min_samples),
            "fetch_timeout_seconds": float(timeout),
        })
        st.success("Settings saved. Results will be recomputed.")
