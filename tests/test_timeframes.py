"""Tests for timeframe windows and the listing occupancy proxy."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date, datetime

import pytest

from config.defaults import TIMEFRAMES
from engine.entity_occupancy import (
    estimate_occupancy, feed_market_occupancy, select_market_observation, select_observation,
)
from engine.timeframes import resolve_range, span_days
from models.listing import Listing
from models.timeframe import Timeframe


def make_listing(past_30="80 %", past_90="60 %"):
    return Listing(
        listing_id="L1",
        adjusted_occupancy_past_30=past_30,
        adjusted_occupancy_past_90=past_90,
    )


class TestResolveRange:
    @pytest.mark.parametrize("tf", TIMEFRAMES)
    def test_window_length_matches_timeframe(self, tf):
        start, end = resolve_range(tf, date(2025, 8, 8))
        assert start == date(2025, 8, 8)
        assert span_days(start, end) == tf

    def test_seven_days(self):
        assert resolve_range(7, date(2025, 8, 8)) == (date(2025, 8, 8), date(2025, 8, 14))

    def test_crosses_year_boundary(self):
        start, end = resolve_range(30, date(2024, 12, 15))
        assert end == date(2025, 1, 13)

    def test_datetime_reference_is_truncated(self):
        start, _ = resolve_range(7, datetime(2025, 8, 8, 17, 30))
        assert start == date(2025, 8, 8)

    def test_defaults_to_today(self):
        start, _ = resolve_range(7)
        assert start == date.today()

    def test_unsupported_timeframe(self):
        with pytest.raises(ValueError):
            resolve_range(14, date(2025, 8, 8))


class TestEntityOccupancy:
    def test_short_window_uses_past_30(self):
        start, end = resolve_range(7, date(2025, 8, 8))
        assert select_observation(make_listing(), start, end) == "80 %"

    def test_thirty_day_window_uses_past_30(self):
        start, end = resolve_range(30, date(2025, 8, 8))
        assert estimate_occupancy(make_listing(), start, end) == pytest.approx(0.8)

    def test_long_window_uses_past_90(self):
        for tf in (60, 90):
            start, end = resolve_range(tf, date(2025, 8, 8))
            assert estimate_occupancy(make_listing(), start, end) == pytest.approx(0.6)

    def test_beyond_ninety_days_uses_past_90(self):
        start, end = resolve_range(120, date(2025, 8, 8))
        assert select_observation(make_listing(), start, end) == "60 %"

    def test_missing_observation_is_zero(self):
        start, end = resolve_range(7, date(2025, 8, 8))
        assert estimate_occupancy(make_listing(past_30=None), start, end) == 0.0
        assert estimate_occupancy(make_listing(past_30="Unavailable"), start, end) == 0.0


class TestTimeframeEnum:
    def test_matches_configured_timeframes(self):
        assert [t.value for t in Timeframe] == TIMEFRAMES

    def test_enum_member_accepted(self):
        assert resolve_range(Timeframe.NEXT_30, date(2025, 8, 8))[1] == date(2025, 9, 6)


class TestFeedMarketOccupancy:
    def make_listing(self, market_30="75 %", market_90="78 %"):
        return Listing(
            listing_id="L1",
            market_adjusted_occupancy_past_30=market_30,
            market_adjusted_occupancy_past_90=market_90,
        )

    def test_short_window_uses_past_30(self):
        start, end = resolve_range(7, date(2025, 8, 8))
        assert select_market_observation(self.make_listing(), start, end) == "75 %"
        assert feed_market_occupancy(self.make_listing(), start, end) == pytest.approx(0.75)

    def test_long_window_uses_past_90(self):
        start, end = resolve_range(120, date(2025, 8, 8))
        assert feed_market_occupancy(self.make_listing(), start, end) == pytest.approx(0.78)

    def test_not_reported(self):
        start, end = resolve_range(30, date(2025, 8, 8))
        assert feed_market_occupancy(self.make_listing(market_30="Unavailable"), start, end) is None
        assert feed_market_occupancy(self.make_listing(market_30=None), start, end) is None
