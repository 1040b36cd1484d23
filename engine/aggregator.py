"""Group-level MPI averages, tier statistics and comparison summaries."""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from config.defaults import SUMMARY_DECIMALS, TIMEFRAMES
from models.listing import Listing
from models.resolution import (
    CalculationStatistics, ComparisonRow, ComparisonSummary, GroupSummary,
    IndexResolution, ListingIndex,
)
from models.timeframe import Tier


def _bedroom_label(listing: Listing) -> Optional[str]:
    if listing.no_of_bedrooms is None:
        return None
    return f"{listing.no_of_bedrooms} BR"


def group_key(listing: Listing, grouping_mode: str) -> Optional[str]:
    """Key a listing is bucketed under, or None when it has no usable key."""
    if grouping_mode == "city":
        return listing.city_name
    if grouping_mode == "bedrooms":
        return _bedroom_label(listing)
    if grouping_mode == "city-bedrooms":
        bedrooms = _bedroom_label(listing)
        if not listing.city_name or bedrooms is None:
            return None
        return f"{listing.city_name} - {bedrooms}"
    return listing.group


def _mean(values: List[float]) -> float:
    if not values:
        return 0.0
    return round(sum(values) / len(values), SUMMARY_DECIMALS)


def aggregate_groups(listing_indexes: Iterable[ListingIndex]) -> List[GroupSummary]:
    """Average each timeframe over the listings in a group, sorted by group key.

    Listings without a group key are left out.
    """
    buckets: Dict[str, List[ListingIndex]] = defaultdict(list)
    for li in listing_indexes:
        if li.group_key is None:
            continue
        buckets[li.group_key].append(li)

    summaries = []
    for key in sorted(buckets):
        members = buckets[key]
        summaries.append(GroupSummary(
            group=key,
            averages={tf: _mean([m.value(tf) for m in members]) for tf in TIMEFRAMES},
            listing_count=len(members),
        ))
    return summaries


def collect_statistics(
    resolutions: Iterable[IndexResolution],
    total_listings: int,
    skipped_listings: int = 0,
    ungrouped_listings: int = 0,
) -> CalculationStatistics:
    """Tally tiers across all resolutions of a run. Observability only."""
    stats = CalculationStatistics(
        total_listings=total_listings,
        skipped_listings=skipped_listings,
        ungrouped_listings=ungrouped_listings,
    )
    for r in resolutions:
        if r.tier == Tier.PRECOMPUTED:
            stats.precomputed_used += 1
        elif r.tier == Tier.DERIVED:
            stats.derived_used += 1
        else:
            stats.unavailable += 1
    return stats


def build_comparisons(
    selected: Iterable[ListingIndex],
    forced: Iterable[ListingIndex],
    listings: Iterable[Listing],
) -> List[ComparisonRow]:
    """Pair each listing's precomputed values with an independently derived set."""
    listing_map = {listing.listing_id: listing for listing in listings}
    forced_map = {f.listing_id: f for f in forced}

    rows = []
    for li in selected:
        listing = listing_map[li.listing_id]
        derived = forced_map[li.listing_id]
        precomputed = {}
        for tf in TIMEFRAMES:
            r = li.resolutions[tf]
            precomputed[tf] = r.value if r.tier == Tier.PRECOMPUTED else None
        rows.append(ComparisonRow(
            listing_id=listing.listing_id,
            group_key=li.group_key,
            precomputed=precomputed,
            derived={tf: derived.value(tf) for tf in TIMEFRAMES},
            derived_tiers={tf: derived.tier(tf) for tf in TIMEFRAMES},
            selected_tiers={tf: li.tier(tf) for tf in TIMEFRAMES},
        ))
    return rows


def aggregate_comparisons(rows: Iterable[ComparisonRow]) -> List[ComparisonSummary]:
    """Group averages of precomputed and derived values.

    Precomputed averages cover only listings that carry a value; a group
    with none reports 0.0.
    """
    buckets: Dict[str, List[ComparisonRow]] = defaultdict(list)
    for row in rows:
        if row.group_key is None:
            continue
        buckets[row.group_key].append(row)

    summaries = []
    for key in sorted(buckets):
        members = buckets[key]
        summaries.append(ComparisonSummary(
            group=key,
            precomputed_averages={
                tf: _mean([m.precomputed[tf] for m in members if m.precomputed[tf] is not None])
                for tf in TIMEFRAMES
            },
            derived_averages={tf: _mean([m.derived[tf] for m in members]) for tf in TIMEFRAMES},
            listing_count=len(members),
        ))
    return summaries
