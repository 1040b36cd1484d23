"""Listing occupancy proxy for a forward window.

True future occupancy is unknown, so the most recent historical observation
for a comparably sized window stands in for it.
"""

from datetime import date
from typing import Optional

from config.defaults import SHORT_WINDOW_DAYS, LONG_WINDOW_DAYS
from engine.percentage import parse_percentage
from engine.timeframes import span_days
from models.listing import Listing


def select_observation(listing: Listing, start_date: date, end_date: date) -> Optional[str]:
    span = span_days(start_date, end_date)
    if span <= SHORT_WINDOW_DAYS:
        return listing.adjusted_occupancy_past_30
    if span <= LONG_WINDOW_DAYS:
        return listing.adjusted_occupancy_past_90
    # Longer than any observed window: best available is the 90-day figure
    return listing.adjusted_occupancy_past_90


def estimate_occupancy(listing: Listing, start_date: date, end_date: date) -> float:
    return parse_percentage(select_observation(listing, start_date, end_date))


def select_market_observation(listing: Listing, start_date: date, end_date: date) -> Optional[str]:
    """The feed's own market occupancy for the same comparable window."""
    if span_days(start_date, end_date) <= SHORT_WINDOW_DAYS:
        return listing.market_adjusted_occupancy_past_30
    return listing.market_adjusted_occupancy_past_90


def feed_market_occupancy(listing: Listing, start_date: date, end_date: date) -> Optional[float]:
    """Market occupancy as reported by the listings feed, None when it has none."""
    raw = select_market_observation(listing, start_date, end_date)
    value = parse_percentage(raw)
    return value if value > 0 else None
