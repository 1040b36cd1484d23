from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models.timeframe import Tier


@dataclass(frozen=True)
class IndexResolution:
    """One (listing, timeframe) result. The tier, not the value, marks missing data."""
    listing_id: str
    timeframe: int
    value: float
    tier: Tier
    explanation_steps: tuple = ()

    @property
    def is_available(self) -> bool:
        return self.tier != Tier.UNAVAILABLE


@dataclass
class ListingIndex:
    listing_id: str
    group_key: Optional[str]     # None when the listing has no key for the grouping
    resolutions: Dict[int, IndexResolution] = field(default_factory=dict)

    def value(self, timeframe: int) -> float:
        return self.resolutions[int(timeframe)].value

    def tier(self, timeframe: int) -> Tier:
        return self.resolutions[int(timeframe)].tier


@dataclass
class GroupSummary:
    group: str
    averages: Dict[int, float]   # timeframe -> mean index, 2 decimals
    listing_count: int

    def to_row(self) -> dict:
        row = {"Group": self.group}
        for tf, avg in self.averages.items():
            row[f"MPI {tf}-day"] = avg
        row["Listings"] = self.listing_count
        return row


@dataclass
class CalculationStatistics:
    precomputed_used: int = 0
    derived_used: int = 0
    unavailable: int = 0
    total_listings: int = 0
    skipped_listings: int = 0     # Malformed records dropped at ingestion
    ungrouped_listings: int = 0   # No usable group key for the chosen grouping

    @property
    def total_resolutions(self) -> int:
        return self.precomputed_used + self.derived_used + self.unavailable

    def share(self, tier: Tier) -> float:
        total = self.total_resolutions
        if total == 0:
            return 0.0
        counts = {
            Tier.PRECOMPUTED: self.precomputed_used,
            Tier.DERIVED: self.derived_used,
            Tier.UNAVAILABLE: self.unavailable,
        }
        return counts[tier] / total


@dataclass
class ComparisonRow:
    """Precomputed and independently derived values for one listing."""
    listing_id: str
    group_key: Optional[str]
    precomputed: Dict[int, Optional[float]]
    derived: Dict[int, float]
    derived_tiers: Dict[int, Tier]
    selected_tiers: Dict[int, Tier]


@dataclass
class ComparisonSummary:
    group: str
    precomputed_averages: Dict[int, float]
    derived_averages: Dict[int, float]
    listing_count: int


@dataclass
class IndexSummaryResult:
    summaries: List[GroupSummary]
    statistics: CalculationStatistics
    raw: List[IndexResolution]
    listing_indexes: List[ListingIndex] = field(default_factory=list)
    grouping_mode: str = "default"
    comparisons: Optional[List[ComparisonRow]] = None
    comparison_summaries: Optional[List[ComparisonSummary]] = None
