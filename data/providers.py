"""Listing and reference-data retrieval with file and sample-data fallbacks."""

import asyncio
import json
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple

from config.logger import get_logger
from data.loader import load_listings_json, load_reference_json, parse_listings, parse_reference
from data.sample_data import generate_sample_listings, generate_sample_reference
from data.validator import ValidationResult
from engine.errors import MalformedInputError, ProviderUnavailableError
from models.listing import Listing
from models.reference import ReferenceDataset

logger = get_logger(__name__)

SAMPLE_SOURCE = "sample"


class ReferenceProvider(Protocol):
    async def fetch_reference_dataset(self, listing_id: str) -> Optional[ReferenceDataset]:
        ...


class StaticReferenceProvider:
    """One dataset shared by every listing, an approximation of per-listing data."""

    def __init__(self, dataset: Optional[ReferenceDataset]):
        self.dataset = dataset

    async def fetch_reference_dataset(self, listing_id: str) -> Optional[ReferenceDataset]:
        return self.dataset


def _read_json(path: Path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


class DirectoryReferenceProvider:
    """Per-listing datasets stored as ``<directory>/<listing_id>.json``."""

    def __init__(self, directory, fallback: Optional[ReferenceDataset] = None):
        self.directory = Path(directory)
        self.fallback = fallback

    async def fetch_reference_dataset(self, listing_id: str) -> Optional[ReferenceDataset]:
        path = self.directory / f"{listing_id}.json"
        if not path.exists():
            return self.fallback
        try:
            payload = await asyncio.to_thread(_read_json, path)
        except (OSError, ValueError) as e:
            # ValueError covers bad JSON and undecodable bytes
            raise ProviderUnavailableError(listing_id, str(e)) from e

        dataset, report = parse_reference(payload)
        for w in report.warnings:
            logger.warning("%s (%s)", w, path.name)
        return dataset


def fetch_listings(paths: Sequence[str]) -> Tuple[List[Listing], ValidationResult, str]:
    """Try each cached listings file in order, then fall back to sample listings.

    Returns (listings, validation report, source label).
    """
    for path in paths:
        if not Path(path).exists():
            logger.info("Listings file not found: %s", path)
            continue
        try:
            listings, report = load_listings_json(path)
        except (OSError, json.JSONDecodeError, MalformedInputError) as e:
            logger.warning("Fallback used: %s (reason: %s)", path, e)
            continue
        logger.info("Loaded %d listings from %s", len(listings), path)
        return listings, report, str(path)

    logger.warning("Fallback used: sample listings (reason: no listings file could be loaded)")
    listings, report = parse_listings(generate_sample_listings())
    return listings, report, SAMPLE_SOURCE


def fetch_reference(paths: Sequence[str]) -> Tuple[Optional[ReferenceDataset], ValidationResult, str]:
    """Shared reference dataset from the first readable file, else the sample dataset."""
    for path in paths:
        if not Path(path).exists():
            continue
        try:
            dataset, report = load_reference_json(path)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Fallback used: %s (reason: %s)", path, e)
            continue
        if dataset is not None and dataset.sections:
            logger.info("Loaded reference dataset with %d categories from %s",
                        dataset.category_count, path)
            return dataset, report, str(path)

    logger.warning("Fallback used: sample reference dataset")
    dataset, report = parse_reference(generate_sample_reference())
    return dataset, report, SAMPLE_SOURCE
