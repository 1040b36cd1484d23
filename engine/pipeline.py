"""MPI pipeline entry point: listings + reference provider -> group summaries."""

import asyncio
import time
from datetime import date
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from config.defaults import GROUPING_MODES, TIMEFRAMES
from config.logger import get_logger
from engine.aggregator import (
    aggregate_comparisons, aggregate_groups, build_comparisons,
    collect_statistics, group_key,
)
from engine.errors import MalformedInputError
from engine.index_resolver import resolve_listing
from engine.locator import CategoryMatcher
from models.listing import Listing
from models.resolution import ComparisonSummary, GroupSummary, IndexSummaryResult

logger = get_logger(__name__)


def coerce_listings(entities) -> Tuple[List[Listing], int]:
    """Accept Listing objects or raw records. Bad single records are skipped and counted."""
    if not isinstance(entities, (list, tuple)):
        raise MalformedInputError(
            f"Listings must be a list, got {type(entities).__name__}"
        )

    listings = []
    skipped = 0
    for i, item in enumerate(entities):
        if isinstance(item, Listing):
            listings.append(item)
            continue
        try:
            listings.append(Listing.from_record(item))
        except ValueError as e:
            skipped += 1
            logger.warning("Skipping listing record %d: %s", i, e)
    return listings, skipped


async def compute_index_summaries(
    entities: Sequence,
    reference_provider,
    grouping_mode: str = "default",
    compare_mode: bool = False,
    reference_date: Optional[date] = None,
    matcher: Optional[CategoryMatcher] = None,
    rule_config: Optional[dict] = None,
) -> IndexSummaryResult:
    """Resolve every listing x timeframe, then group, average and count tiers.

    Never raises for missing market data or provider failures; those show up
    as ``unavailable`` resolutions in the statistics.
    """
    started = time.perf_counter()
    if grouping_mode not in GROUPING_MODES:
        logger.warning("Unknown grouping '%s'; using listing group field", grouping_mode)
    reference_date = reference_date or date.today()

    listings, skipped = coerce_listings(entities)
    keys = [group_key(listing, grouping_mode) for listing in listings]

    listing_indexes = await asyncio.gather(*[
        resolve_listing(listing, reference_provider, key, matcher, reference_date, rule_config)
        for listing, key in zip(listings, keys)
    ])

    # Single reduction step after all resolutions are in
    raw = [li.resolutions[tf] for li in listing_indexes for tf in TIMEFRAMES]
    ungrouped = sum(1 for key in keys if key is None)
    statistics = collect_statistics(raw, len(listings), skipped, ungrouped)
    summaries = aggregate_groups(listing_indexes)

    result = IndexSummaryResult(
        summaries=summaries,
        statistics=statistics,
        raw=raw,
        listing_indexes=list(listing_indexes),
        grouping_mode=grouping_mode,
    )

    if compare_mode:
        forced = await asyncio.gather(*[
            resolve_listing(listing, reference_provider, key, matcher, reference_date,
                            rule_config, force_derived=True)
            for listing, key in zip(listings, keys)
        ])
        result.comparisons = build_comparisons(listing_indexes, forced, listings)
        result.comparison_summaries = aggregate_comparisons(result.comparisons)

    logger.info(
        "MPI run: %d listings (%d skipped), %d groups by '%s' | precomputed=%d derived=%d unavailable=%d | %.0fms",
        statistics.total_listings, skipped, len(summaries), grouping_mode,
        statistics.precomputed_used, statistics.derived_used, statistics.unavailable,
        (time.perf_counter() - started) * 1000,
    )
    return result


def run_index_summaries(*args, **kwargs) -> IndexSummaryResult:
    """Blocking wrapper for callers without an event loop (Streamlit, CLI)."""
    return asyncio.run(compute_index_summaries(*args, **kwargs))


def format_summary_table(summaries: List[GroupSummary]) -> pd.DataFrame:
    """Group x timeframe table in display order."""
    columns = ["Group"] + [f"MPI {tf}-day" for tf in TIMEFRAMES] + ["Listings"]
    return pd.DataFrame([s.to_row() for s in summaries], columns=columns)


def format_comparison_table(summaries: List[ComparisonSummary]) -> pd.DataFrame:
    rows = []
    for s in summaries:
        row = {"Group": s.group}
        for tf in TIMEFRAMES:
            row[f"Precomputed {tf}-day"] = s.precomputed_averages[tf]
            row[f"Derived {tf}-day"] = s.derived_averages[tf]
        row["Listings"] = s.listing_count
        rows.append(row)
    return pd.DataFrame(rows)
