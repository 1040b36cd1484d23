"""File parsing — JSON/CSV/XLSX into typed model lists."""

import json
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd

from config.logger import get_logger
from data.validator import (
    ValidationResult, validate_listing_record, validate_listings_frame,
    validate_listings_payload, validate_reference_payload,
)
from engine.errors import MalformedInputError
from models.listing import Listing
from models.reference import ReferenceDataset

logger = get_logger(__name__)


def parse_listings(payload) -> Tuple[List[Listing], ValidationResult]:
    """Convert a listings payload into Listing objects.

    A malformed payload raises MalformedInputError. Malformed single records
    are skipped and reported in the returned ValidationResult.
    """
    check = validate_listings_payload(payload)
    if not check.is_valid:
        raise MalformedInputError("; ".join(check.errors))

    records = payload.get("listings") if isinstance(payload, dict) else payload
    report = ValidationResult(warnings=list(check.warnings))
    listings = []
    for i, record in enumerate(records):
        row = validate_listing_record(record, i)
        report.warnings.extend(row.warnings)
        if not row.is_valid:
            report.errors.extend(row.errors)
            continue
        listings.append(Listing.from_record(record))

    if report.errors:
        logger.warning("Skipped %d malformed listing records", len(report.errors))
    return listings, report


def _frame_to_records(df: pd.DataFrame) -> List[dict]:
    # NaN cells become None so optional fields stay optional
    return df.astype(object).where(pd.notna(df), None).to_dict("records")


def load_file(uploaded_file) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) into a DataFrame."""
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        return pd.read_csv(uploaded_file)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return pd.read_excel(uploaded_file, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")


def parse_listings_frame(df: pd.DataFrame) -> Tuple[List[Listing], ValidationResult]:
    """Tabular listings (one row per listing, feed field names as columns)."""
    check = validate_listings_frame(df)
    if not check.is_valid:
        raise MalformedInputError("; ".join(check.errors))
    listings, report = parse_listings(_frame_to_records(df))
    report.warnings = check.warnings + report.warnings
    return listings, report


def load_listings_upload(uploaded_file) -> Tuple[List[Listing], ValidationResult]:
    """Dispatch an uploaded listings file by extension."""
    if uploaded_file.name.lower().endswith(".json"):
        return parse_listings(json.load(uploaded_file))
    return parse_listings_frame(load_file(uploaded_file))


def load_listings_json(path: str) -> Tuple[List[Listing], ValidationResult]:
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)
    return parse_listings(payload)


def parse_reference(payload) -> Tuple[Optional[ReferenceDataset], ValidationResult]:
    report = validate_reference_payload(payload)
    dataset = ReferenceDataset.from_payload(payload)
    if dataset is not None:
        dropped = sum(
            b.dropped_channels for cats in dataset.sections.values() for b in cats.values()
        )
        if dropped:
            report.warnings.append(
                f"Reference: Dropped {dropped} channels whose length does not match their dates."
            )
    return dataset, report


def load_reference_json(path) -> Tuple[Optional[ReferenceDataset], ValidationResult]:
    with open(Path(path), encoding="utf-8") as f:
        payload = json.load(f)
    return parse_reference(payload)
