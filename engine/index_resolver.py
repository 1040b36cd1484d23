"""Three-tier MPI resolution per listing and timeframe.

Tiers, first success wins:
  1. precomputed - the listing's own mpi_next_<tf>, scaled x100
  2. derived     - listing occupancy / market occupancy x 100
  3. unavailable - 0, tagged so statistics can tell it from a real 0
"""

import asyncio
import inspect
import math
from datetime import date
from typing import Dict, Optional

from config.defaults import DEFAULT_FETCH_TIMEOUT_SECONDS, PRECOMPUTED_SCALE, TIMEFRAMES
from config.logger import get_logger
from engine.entity_occupancy import estimate_occupancy
from engine.errors import ProviderUnavailableError
from engine.explainer import explain_derived, explain_precomputed, explain_unavailable
from engine.locator import CategoryMatcher, FirstCategoryMatcher, locate_channel
from engine.market_occupancy import average_occupancy, select_indices
from engine.timeframes import resolve_range
from models.listing import Listing
from models.reference import ChannelNotFound, ReferenceDataset
from models.resolution import IndexResolution, ListingIndex
from models.timeframe import Tier

logger = get_logger(__name__)

_DEFAULT_MATCHER = FirstCategoryMatcher()


def unavailable(
    listing: Listing,
    timeframe: int,
    reason: str,
    not_found: Optional[ChannelNotFound] = None,
    precomputed_bypassed: bool = False,
) -> IndexResolution:
    return IndexResolution(
        listing_id=listing.listing_id,
        timeframe=int(timeframe),
        value=0.0,
        tier=Tier.UNAVAILABLE,
        explanation_steps=tuple(explain_unavailable(
            timeframe, reason, not_found, precomputed_bypassed,
        )),
    )


def resolve_precomputed(listing: Listing, timeframe: int) -> Optional[IndexResolution]:
    """Use the precomputed MPI when present. Zero is valid data; negatives are absent."""
    raw = listing.precomputed_for(timeframe)
    if raw is None or math.isnan(raw) or raw < 0:
        return None
    value = raw * PRECOMPUTED_SCALE
    return IndexResolution(
        listing_id=listing.listing_id,
        timeframe=int(timeframe),
        value=value,
        tier=Tier.PRECOMPUTED,
        explanation_steps=tuple(explain_precomputed(timeframe, raw, PRECOMPUTED_SCALE, value)),
    )


def resolve_derived(
    listing: Listing,
    timeframe: int,
    dataset: Optional[ReferenceDataset],
    matcher: Optional[CategoryMatcher] = None,
    reference_date: Optional[date] = None,
    rule_config: Optional[dict] = None,
    force_derived: bool = False,
) -> IndexResolution:
    """Derive MPI from the reference dataset. Falls to unavailable, never raises."""
    if dataset is None:
        return unavailable(listing, timeframe, "no reference dataset", precomputed_bypassed=force_derived)

    start, end = resolve_range(timeframe, reference_date)
    category_id = (matcher or _DEFAULT_MATCHER).match_category(listing, dataset)
    location = locate_channel(dataset, category_id, rule_config)
    if isinstance(location, ChannelNotFound):
        return unavailable(listing, timeframe, "no usable market channel", location,
                           precomputed_bypassed=force_derived)

    market = average_occupancy(location, start, end)
    if market <= 0:
        return unavailable(
            listing, timeframe,
            f"no market occupancy between {start.isoformat()} and {end.isoformat()}",
            precomputed_bypassed=force_derived,
        )

    own = estimate_occupancy(listing, start, end)
    value = (own / market) * 100
    matched = len(select_indices(location.dates, start, end))
    logger.debug("MPI derived: listing=%s timeframe=%dd mpi=%.2f",
                 listing.listing_id, timeframe, value)
    return IndexResolution(
        listing_id=listing.listing_id,
        timeframe=int(timeframe),
        value=value,
        tier=Tier.DERIVED,
        explanation_steps=tuple(explain_derived(
            timeframe, start, end, location, matched, market, own, value,
        )),
    )


def resolve_index(
    listing: Listing,
    timeframe: int,
    dataset: Optional[ReferenceDataset],
    matcher: Optional[CategoryMatcher] = None,
    reference_date: Optional[date] = None,
    rule_config: Optional[dict] = None,
) -> IndexResolution:
    """Synchronous tier chain for an already fetched dataset."""
    precomputed = resolve_precomputed(listing, timeframe)
    if precomputed is not None:
        return precomputed
    return resolve_derived(listing, timeframe, dataset, matcher, reference_date, rule_config)


async def fetch_dataset(provider, listing_id: str, timeout: float) -> Optional[ReferenceDataset]:
    """Fetch a reference dataset under ``timeout``, accepting sync or async provider methods.

    Sync providers run in a worker thread so a blocking fetch can time out
    without stalling the event loop.
    """
    method = provider.fetch_reference_dataset
    if inspect.iscoroutinefunction(method):
        pending = method(listing_id)
    else:
        pending = asyncio.to_thread(method, listing_id)
    result = await asyncio.wait_for(pending, timeout=timeout)
    if inspect.isawaitable(result):
        result = await asyncio.wait_for(result, timeout=timeout)
    return result


async def resolve_timeframe(
    listing: Listing,
    timeframe: int,
    provider,
    matcher: Optional[CategoryMatcher] = None,
    reference_date: Optional[date] = None,
    rule_config: Optional[dict] = None,
    force_derived: bool = False,
) -> IndexResolution:
    """Resolve one timeframe, fetching reference data only when it is needed.

    Provider failures and timeouts only affect this timeframe.
    """
    if not force_derived:
        precomputed = resolve_precomputed(listing, timeframe)
        if precomputed is not None:
            return precomputed

    cfg = rule_config or {}
    timeout = cfg.get("fetch_timeout_seconds", DEFAULT_FETCH_TIMEOUT_SECONDS)
    try:
        dataset = await fetch_dataset(provider, listing.listing_id, timeout)
    except asyncio.TimeoutError:
        logger.warning("Fallback used: listing=%s timeframe=%dd (reason: reference fetch timed out after %ss)",
                       listing.listing_id, timeframe, timeout)
        return unavailable(listing, timeframe, "reference fetch timed out",
                           precomputed_bypassed=force_derived)
    except (ProviderUnavailableError, OSError) as e:
        logger.warning("Fallback used: listing=%s timeframe=%dd (reason: %s)",
                       listing.listing_id, timeframe, e)
        return unavailable(listing, timeframe, "reference provider unavailable",
                           precomputed_bypassed=force_derived)
    except Exception as e:
        logger.warning("Fallback used: listing=%s timeframe=%dd (reason: reference fetch failed: %r)",
                       listing.listing_id, timeframe, e)
        return unavailable(listing, timeframe, "reference fetch failed",
                           precomputed_bypassed=force_derived)

    return resolve_derived(listing, timeframe, dataset, matcher, reference_date, rule_config,
                           force_derived)


async def resolve_listing(
    listing: Listing,
    provider,
    group_key: Optional[str] = None,
    matcher: Optional[CategoryMatcher] = None,
    reference_date: Optional[date] = None,
    rule_config: Optional[dict] = None,
    force_derived: bool = False,
) -> ListingIndex:
    """Resolve all five timeframes of a listing concurrently."""
    results = await asyncio.gather(*[
        resolve_timeframe(listing, tf, provider, matcher, reference_date, rule_config, force_derived)
        for tf in TIMEFRAMES
    ])
    resolutions: Dict[int, IndexResolution] = {r.timeframe: r for r in results}
    return ListingIndex(
        listing_id=listing.listing_id,
        group_key=group_key,
        resolutions=resolutions,
    )
