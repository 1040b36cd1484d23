"""Console entry point: print MPI group summaries and calculation statistics."""

import argparse
from datetime import date

import pandas as pd

from config.defaults import GROUPING_MODES
from config.settings import settings
from data.loader import load_listings_json
from data.providers import (
    DirectoryReferenceProvider, StaticReferenceProvider, fetch_listings, fetch_reference,
)
from engine.pipeline import format_comparison_table, format_summary_table, run_index_summaries


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Compute Market Penetration Index summaries"
    )

    parser.add_argument(
        "--listings",
        type=str,
        default=None,
        help="Listings JSON file (default: configured paths, then sample data)",
    )

    parser.add_argument(
        "--reference",
        type=str,
        default=None,
        help="Shared neighborhood JSON file (default: configured paths, then sample data)",
    )

    parser.add_argument(
        "--reference-dir",
        type=str,
        default=settings.REFERENCE_DIR,
        help="Directory of per-listing neighborhood files named <listing_id>.json",
    )

    parser.add_argument(
        "--grouping",
        choices=GROUPING_MODES,
        default=settings.DEFAULT_GROUPING if settings.DEFAULT_GROUPING in GROUPING_MODES else "default",
        help="How listings are grouped (default: listing group field)",
    )

    parser.add_argument(
        "--compare",
        action="store_true",
        help="Also compute derived MPI for every listing and compare with precomputed",
    )

    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Window start date (YYYY-MM-DD, default: today)",
    )

    args = parser.parse_args()

    if args.listings:
        listings, report = load_listings_json(args.listings)
    else:
        listings, report, _ = fetch_listings(settings.LISTINGS_PATHS)
    skipped = len(report.errors)

    shared, _, source = fetch_reference([args.reference] if args.reference else settings.REFERENCE_PATHS)
    if args.reference_dir:
        provider = DirectoryReferenceProvider(args.reference_dir, fallback=shared)
    else:
        provider = StaticReferenceProvider(shared)

    result = run_index_summaries(
        listings,
        provider,
        grouping_mode=args.grouping,
        compare_mode=args.compare,
        reference_date=args.date,
        rule_config=settings.rule_config(),
    )
    stats = result.statistics
    stats.skipped_listings += skipped
    skipped = stats.skipped_listings

    with pd.option_context("display.max_columns", None, "display.width", 160):
        print(f"\nMPI Summaries by {args.grouping} (market data: {source})")
        print(format_summary_table(result.summaries).to_string(index=False))

        if args.compare and result.comparison_summaries:
            print("\nPrecomputed vs Derived")
            print(format_comparison_table(result.comparison_summaries).to_string(index=False))

    print(
        f"\nPrecomputed used: {stats.precomputed_used} | Derived: {stats.derived_used} | "
        f"Unavailable: {stats.unavailable} | Total: {stats.total_resolutions} "
        f"({stats.total_listings} listings x 5 timeframes)"
    )
    if skipped or stats.ungrouped_listings:
        print(f"Skipped records: {skipped} | Not grouped: {stats.ungrouped_listings}")


if __name__ == "__main__":
    main()
