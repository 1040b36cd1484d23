"""Generates human-readable explanations for index resolutions."""

from datetime import date
from typing import List, Optional

from models.reference import ChannelLocation, ChannelNotFound


def explain_precomputed(timeframe: int, raw_value: float, scale: int, value: float) -> List[str]:
    """Explain a value taken from the listing's precomputed MPI."""
    return [
        f"Step 1 - Precomputed: mpi_next_{timeframe} = {raw_value:.2f}",
        f"Step 2 - Scaled: {raw_value:.2f} x {scale} = {value:.2f}",
    ]


def explain_derived(
    timeframe: int,
    start_date: date,
    end_date: date,
    location: ChannelLocation,
    matched_points: int,
    market_occupancy: float,
    listing_occupancy: float,
    value: float,
) -> List[str]:
    """Produce step-by-step explanation for a value derived from market data."""
    steps = []

    steps.append(
        f"Step 1 - Window: next {timeframe} days => {start_date.isoformat()} to {end_date.isoformat()}"
    )

    steps.append(
        f"Step 2 - Market channel: section '{location.section}', category "
        f"'{location.category_id}', channel {location.channel_index} ({location.layout.value})"
    )

    steps.append(
        f"Step 3 - Market occupancy: {matched_points} points in range => average {market_occupancy:.1%}"
    )

    steps.append(
        f"Step 4 - Listing occupancy: most recent comparable observation => {listing_occupancy:.1%}"
    )

    steps.append(
        f"Step 5 - MPI: {listing_occupancy:.1%} / {market_occupancy:.1%} x 100 = {value:.2f}"
    )

    return steps


def explain_unavailable(
    timeframe: int,
    reason: str,
    not_found: Optional[ChannelNotFound] = None,
    precomputed_bypassed: bool = False,
) -> List[str]:
    """Explain why neither tier produced a value."""
    if precomputed_bypassed:
        steps = [f"Precomputed value bypassed (comparison) for mpi_next_{timeframe}"]
    else:
        steps = [f"No precomputed mpi_next_{timeframe}"]
    if not_found is not None:
        detail = f" ({not_found.detail})" if not_found.detail else ""
        steps.append(f"Market channel not found: {not_found.reason}{detail}")
    steps.append(f"Unavailable: {reason}")
    return steps
