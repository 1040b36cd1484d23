"""Shape validation for listings feeds and reference datasets."""

from dataclasses import dataclass, field
from typing import List

import pandas as pd

from config.defaults import KNOWN_SECTIONS, TIMEFRAMES


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


LISTING_REQUIRED_FIELDS = ["id"]

LISTING_RECOMMENDED_FIELDS = [
    "group",
    "city_name",
    "no_of_bedrooms",
    "adjusted_occupancy_past_30",
    "adjusted_occupancy_past_90",
]

PRECOMPUTED_FIELDS = [f"mpi_next_{tf}" for tf in TIMEFRAMES]


def validate_listings_payload(payload) -> ValidationResult:
    """Top-level check: a list of records, or a mapping with a ``listings`` list."""
    result = ValidationResult()
    records = payload.get("listings") if isinstance(payload, dict) else payload
    if not isinstance(records, list):
        result.is_valid = False
        result.errors.append("Listings: Expected a list of listings or {'listings': [...]}.")
        return result
    if not records:
        result.warnings.append("Listings: Payload contains no listings.")
    return result


def validate_listing_record(record, index: int) -> ValidationResult:
    """Per-record check. Invalid records are skipped, not fatal."""
    result = ValidationResult()
    if not isinstance(record, dict):
        result.is_valid = False
        result.errors.append(f"Listing {index}: Expected an object, got {type(record).__name__}.")
        return result

    missing = [f for f in LISTING_REQUIRED_FIELDS if record.get(f) in (None, "")]
    if missing:
        result.is_valid = False
        result.errors.append(f"Listing {index}: Missing required fields: {', '.join(missing)}")
        return result

    absent = [f for f in LISTING_RECOMMENDED_FIELDS if f not in record]
    if absent:
        result.warnings.append(f"Listing {record['id']}: Missing fields: {', '.join(absent)}")

    for f in PRECOMPUTED_FIELDS:
        value = record.get(f)
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value < 0:
            result.warnings.append(f"Listing {record['id']}: {f} is negative and will be ignored.")
    return result


def validate_listings_frame(df: pd.DataFrame) -> ValidationResult:
    """Tabular (CSV/XLSX) listings upload."""
    result = ValidationResult()
    missing = [col for col in LISTING_REQUIRED_FIELDS if col not in df.columns]
    if missing:
        result.is_valid = False
        result.errors.append(f"Listings: Missing required columns: {', '.join(missing)}")
    if df.empty:
        result.is_valid = False
        result.errors.append("Listings: File contains no data rows.")
    if not result.is_valid:
        return result

    dupes = df.duplicated(subset=["id"], keep=False)
    if dupes.any():
        result.warnings.append(f"Listings: Duplicate ids: {df[dupes]['id'].astype(str).unique().tolist()}")
    return result


def validate_reference_payload(payload) -> ValidationResult:
    """Reference datasets are never fatal; unknown shapes only produce warnings."""
    result = ValidationResult()
    body = payload.get("data", payload) if isinstance(payload, dict) else None
    if not isinstance(body, dict):
        result.warnings.append("Reference: Payload is not an object; derived MPI will be unavailable.")
        return result

    present = [s for s in KNOWN_SECTIONS if s in body]
    if not present:
        result.warnings.append(
            f"Reference: No recognized sections. Expected one of: {KNOWN_SECTIONS}. "
            f"Found: {sorted(k for k, v in body.items() if isinstance(v, dict))}"
        )
    return result
