from models.timeframe import Timeframe, Tier
from models.listing import Listing
from models.reference import (
    CategoryBlock, ReferenceDataset, ChannelLayout, ChannelLocation, ChannelNotFound,
)
from models.resolution import (
    IndexResolution, ListingIndex, GroupSummary, CalculationStatistics,
    ComparisonRow, ComparisonSummary, IndexSummaryResult,
)
