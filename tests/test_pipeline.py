"""End-to-end tests for MPI summary computation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import asyncio
from datetime import date

import pytest

from config.defaults import TIMEFRAMES
from data.loader import parse_listings, parse_reference
from data.providers import StaticReferenceProvider
from data.sample_data import generate_sample_listings, generate_sample_reference
from engine.errors import MalformedInputError
from engine.pipeline import (
    coerce_listings, compute_index_summaries, format_comparison_table,
    format_summary_table, run_index_summaries,
)
from models.reference import CategoryBlock, ReferenceDataset
from models.timeframe import Tier

REFERENCE_DATE = date(2025, 8, 8)


def make_record(listing_id, city="Denver", bedrooms=2, mpi=None, past_30="80 %", past_90="75 %"):
    record = {
        "id": listing_id,
        "group": "Colorado" if city == "Denver" else "Florida",
        "city_name": city,
        "no_of_bedrooms": bedrooms,
        "adjusted_occupancy_past_30": past_30,
        "adjusted_occupancy_past_90": past_90,
    }
    for tf, value in (mpi or {}).items():
        record[f"mpi_next_{tf}"] = value
    return record


def make_provider(days=150, value=62.5):
    dates = [date.fromordinal(REFERENCE_DATE.toordinal() + i).isoformat() for i in range(days)]
    block = CategoryBlock(dates=dates, channels=[[value] * days])
    return StaticReferenceProvider(ReferenceDataset(sections={"Future Occ/New/Canc": {"0": block}}))


def sample_inputs():
    listings, _ = parse_listings(generate_sample_listings())
    dataset, _ = parse_reference(generate_sample_reference(REFERENCE_DATE))
    return listings, StaticReferenceProvider(dataset)


class BrokenProvider:
    async def fetch_reference_dataset(self, listing_id):
        raise RuntimeError("upstream 502")


def run(entities, provider, **kwargs):
    kwargs.setdefault("reference_date", REFERENCE_DATE)
    return asyncio.run(compute_index_summaries(entities, provider, **kwargs))


class TestComputeIndexSummaries:
    def test_city_grouping(self):
        entities = [make_record("a"), make_record("b"), make_record("c", city="Miami")]
        result = run(entities, make_provider(), grouping_mode="city")
        assert [s.group for s in result.summaries] == ["Denver", "Miami"]
        assert result.summaries[0].listing_count == 2
        assert result.summaries[1].listing_count == 1

    def test_precomputed_scaled(self):
        result = run([make_record("a", mpi={tf: 1.15 for tf in TIMEFRAMES})], make_provider())
        assert result.summaries[0].averages[7] == 115.0
        assert result.statistics.precomputed_used == 5

    def test_derived_value(self):
        result = run([make_record("a")], make_provider(value=62.5))
        # 80% listing against a 62.5% market
        assert result.summaries[0].averages[7] == 128.0
        assert result.statistics.derived_used == 5

    def test_statistics_invariant(self):
        listings, provider = sample_inputs()
        for mode in ("default", "city", "bedrooms", "city-bedrooms"):
            stats = run(listings, provider, grouping_mode=mode).statistics
            assert stats.total_resolutions == stats.total_listings * len(TIMEFRAMES)
            assert len(run(listings, provider, grouping_mode=mode).raw) == stats.total_resolutions

    def test_group_means_reproduce_from_raw(self):
        listings, provider = sample_inputs()
        result = run(listings, provider, grouping_mode="city")
        by_listing = {li.listing_id: li for li in result.listing_indexes}
        for summary in result.summaries:
            members = [li for li in by_listing.values() if li.group_key == summary.group]
            assert len(members) == summary.listing_count
            for tf in TIMEFRAMES:
                expected = round(sum(m.value(tf) for m in members) / len(members), 2)
                assert summary.averages[tf] == expected

    def test_idempotent(self):
        listings, provider = sample_inputs()
        first = run(listings, provider, grouping_mode="city-bedrooms")
        second = run(listings, provider, grouping_mode="city-bedrooms")
        assert first.summaries == second.summaries
        assert first.statistics == second.statistics
        assert first.raw == second.raw

    def test_sample_covers_every_tier(self):
        listings, provider = sample_inputs()
        stats = run(listings, provider).statistics
        assert stats.precomputed_used > 0
        assert stats.derived_used > 0

    def test_no_reference_data(self):
        result = run([make_record("a")], StaticReferenceProvider(None))
        assert result.statistics.unavailable == 5
        assert result.summaries[0].averages[30] == 0.0
        assert all(r.tier == Tier.UNAVAILABLE for r in result.raw)

    def test_provider_error_does_not_abort_run(self):
        entities = [make_record("a", mpi={7: 1.2}), make_record("b")]
        result = run(entities, BrokenProvider(), grouping_mode="city")
        assert result.statistics.precomputed_used == 1
        assert result.statistics.unavailable == 9
        assert result.summaries[0].averages[7] == 60.0

    def test_malformed_records_skipped_and_counted(self):
        entities = [make_record("a"), "not a listing", {"name": "no id"}]
        result = run(entities, make_provider())
        assert result.statistics.total_listings == 1
        assert result.statistics.skipped_listings == 2

    def test_malformed_payload_raises(self):
        with pytest.raises(MalformedInputError):
            run({"listings": "nope"}, make_provider())

    def test_ungrouped_listings_counted(self):
        entities = [make_record("a"), make_record("b", bedrooms=None)]
        result = run(entities, make_provider(), grouping_mode="bedrooms")
        assert [s.group for s in result.summaries] == ["2 BR"]
        assert result.statistics.ungrouped_listings == 1
        assert result.statistics.total_resolutions == 10

    def test_empty_input(self):
        result = run([], make_provider())
        assert result.summaries == []
        assert result.statistics.total_resolutions == 0

    def test_compare_mode(self):
        entities = [make_record("a", mpi={tf: 1.5 for tf in TIMEFRAMES}), make_record("b")]
        result = run(entities, make_provider(value=62.5), grouping_mode="city", compare_mode=True)
        assert result.statistics.precomputed_used == 5
        row_a = next(r for r in result.comparisons if r.listing_id == "a")
        assert row_a.precomputed[7] == pytest.approx(150.0)
        assert row_a.derived[7] == pytest.approx(128.0)
        assert row_a.derived_tiers[7] == Tier.DERIVED
        summary = result.comparison_summaries[0]
        assert summary.precomputed_averages[7] == 150.0
        assert summary.derived_averages[7] == 128.0

    def test_compare_off_by_default(self):
        result = run([make_record("a")], make_provider())
        assert result.comparisons is None


class TestHelpers:
    def test_coerce_rejects_non_list(self):
        with pytest.raises(MalformedInputError):
            coerce_listings("listings")

    def test_run_wrapper(self):
        result = run_index_summaries([make_record("a")], make_provider(), reference_date=REFERENCE_DATE)
        assert result.statistics.total_listings == 1

    def test_summary_table_columns(self):
        result = run([make_record("a"), make_record("c", city="Miami")], make_provider(), grouping_mode="city")
        df = format_summary_table(result.summaries)
        assert list(df.columns) == ["Group"] + [f"MPI {tf}-day" for tf in TIMEFRAMES] + ["Listings"]
        assert df["Group"].tolist() == ["Denver", "Miami"]

    def test_empty_summary_table(self):
        assert format_summary_table([]).empty

    def test_comparison_table(self):
        result = run([make_record("a")], make_provider(), compare_mode=True)
        df = format_comparison_table(result.comparison_summaries)
        assert "Precomputed 7-day" in df.columns
        assert "Derived 120-day" in df.columns
