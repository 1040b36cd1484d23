"""Tests for grouping, averaging, statistics and comparisons."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from config.defaults import TIMEFRAMES
from engine.aggregator import (
    aggregate_comparisons, aggregate_groups, build_comparisons,
    collect_statistics, group_key,
)
from models.listing import Listing
from models.resolution import IndexResolution, ListingIndex
from models.timeframe import Tier


def make_listing(listing_id="L1", group="Colorado", city="Denver", bedrooms=2):
    return Listing(listing_id=listing_id, group=group, city_name=city, no_of_bedrooms=bedrooms)


def make_index(listing_id="L1", key="Denver", values=None, tier=Tier.DERIVED):
    values = values or {tf: 100.0 for tf in TIMEFRAMES}
    return ListingIndex(
        listing_id=listing_id,
        group_key=key,
        resolutions={
            tf: IndexResolution(listing_id, tf, values[tf], tier) for tf in TIMEFRAMES
        },
    )


def flat(value):
    return {tf: value for tf in TIMEFRAMES}


class TestGroupKey:
    def test_city(self):
        assert group_key(make_listing(), "city") == "Denver"

    def test_bedrooms(self):
        assert group_key(make_listing(bedrooms=3), "bedrooms") == "3 BR"

    def test_studio_is_zero_bedrooms(self):
        assert group_key(make_listing(bedrooms=0), "bedrooms") == "0 BR"

    def test_city_bedrooms(self):
        assert group_key(make_listing(), "city-bedrooms") == "Denver - 2 BR"

    def test_default_uses_group_field(self):
        assert group_key(make_listing(), "default") == "Colorado"

    def test_missing_parts(self):
        assert group_key(make_listing(city=None), "city") is None
        assert group_key(make_listing(bedrooms=None), "bedrooms") is None
        assert group_key(make_listing(city=None), "city-bedrooms") is None
        assert group_key(make_listing(bedrooms=None), "city-bedrooms") is None


class TestAggregateGroups:
    def test_two_cities(self):
        indexes = [
            make_index("a", "Denver", flat(110.0)),
            make_index("b", "Denver", flat(90.0)),
            make_index("c", "Miami", flat(120.0)),
        ]
        summaries = aggregate_groups(indexes)
        assert [s.group for s in summaries] == ["Denver", "Miami"]
        denver = summaries[0]
        assert denver.listing_count == 2
        assert denver.averages[7] == 100.0

    def test_rounded_to_two_decimals(self):
        indexes = [
            make_index("a", "Denver", flat(100.0)),
            make_index("b", "Denver", flat(100.0)),
            make_index("c", "Denver", flat(101.0)),
        ]
        assert aggregate_groups(indexes)[0].averages[30] == 100.33

    def test_unavailable_counts_as_zero(self):
        indexes = [
            make_index("a", "Denver", flat(120.0)),
            make_index("b", "Denver", flat(0.0), tier=Tier.UNAVAILABLE),
        ]
        assert aggregate_groups(indexes)[0].averages[90] == 60.0

    def test_ungrouped_left_out(self):
        indexes = [make_index("a", "Denver"), make_index("b", None)]
        summaries = aggregate_groups(indexes)
        assert len(summaries) == 1
        assert summaries[0].listing_count == 1

    def test_sorted_by_key(self):
        indexes = [make_index("a", "b"), make_index("b", "C"), make_index("c", "a")]
        assert [s.group for s in aggregate_groups(indexes)] == ["C", "a", "b"]

    def test_empty(self):
        assert aggregate_groups([]) == []

    def test_row_layout(self):
        row = aggregate_groups([make_index("a", "Denver", flat(95.5))])[0].to_row()
        assert list(row) == ["Group"] + [f"MPI {tf}-day" for tf in TIMEFRAMES] + ["Listings"]


class TestCollectStatistics:
    def test_counts_by_tier(self):
        resolutions = [
            IndexResolution("a", 7, 110.0, Tier.PRECOMPUTED),
            IndexResolution("a", 30, 95.0, Tier.DERIVED),
            IndexResolution("a", 60, 0.0, Tier.UNAVAILABLE),
            IndexResolution("a", 90, 0.0, Tier.PRECOMPUTED),
            IndexResolution("a", 120, 0.0, Tier.UNAVAILABLE),
        ]
        stats = collect_statistics(resolutions, total_listings=1, skipped_listings=2)
        assert (stats.precomputed_used, stats.derived_used, stats.unavailable) == (2, 1, 2)
        assert stats.total_resolutions == 5
        assert stats.skipped_listings == 2
        assert stats.share(Tier.UNAVAILABLE) == pytest.approx(0.4)

    def test_empty_share(self):
        assert collect_statistics([], 0).share(Tier.DERIVED) == 0.0


class TestComparisons:
    def test_precomputed_next_to_derived(self):
        listings = [make_listing("a"), make_listing("b")]
        selected = [
            make_index("a", "Denver", flat(120.0), tier=Tier.PRECOMPUTED),
            make_index("b", "Denver", flat(90.0), tier=Tier.DERIVED),
        ]
        forced = [
            make_index("a", "Denver", flat(100.0)),
            make_index("b", "Denver", flat(90.0)),
        ]
        rows = build_comparisons(selected, forced, listings)
        assert rows[0].precomputed[7] == 120.0
        assert rows[0].derived[7] == 100.0
        assert rows[1].precomputed[7] is None
        assert rows[1].selected_tiers[7] == Tier.DERIVED

        summaries = aggregate_comparisons(rows)
        assert len(summaries) == 1
        assert summaries[0].precomputed_averages[7] == 120.0
        assert summaries[0].derived_averages[7] == 95.0
        assert summaries[0].listing_count == 2

    def test_group_without_precomputed(self):
        listings = [make_listing("a")]
        selected = [make_index("a", "Miami", flat(80.0))]
        rows = build_comparisons(selected, selected, listings)
        summary = aggregate_comparisons(rows)[0]
        assert summary.precomputed_averages[30] == 0.0
        assert summary.derived_averages[30] == 80.0
