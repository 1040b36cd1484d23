"""Default configuration constants for the MPI dashboard."""

# Lookahead windows (days)
TIMEFRAMES = [7, 30, 60, 90, 120]

# Precomputed MPI arrives as a decimal ratio (1.15); scale to index points (115)
PRECOMPUTED_SCALE = 100

# Reference dataset sections
PRIMARY_SECTION = "Future Occ/New/Canc"
SECONDARY_SECTIONS = ["Future Percentile Prices", "Market KPI"]
KNOWN_SECTIONS = [PRIMARY_SECTION] + SECONDARY_SECTIONS

# Date labels that describe an aggregate window rather than a date
AGGREGATE_LABELS = ["Last 365 Days", "Last 730 Days"]
AGGREGATE_LABEL_PREFIX = "Last "

# Occupancy channel heuristic
SAMPLE_SIZE = 20                  # Leading values inspected per channel
MIN_REALISTIC_SAMPLES = 5         # Non-integer values in (0, 100] required
MANY_CATEGORIES_THRESHOLD = 1     # Scan all categories above this count
OCCUPANCY_MIN_EXCLUSIVE = 0.0
OCCUPANCY_MAX_INCLUSIVE = 100.0

# Entity occupancy proxy selection (inclusive span in days)
SHORT_WINDOW_DAYS = 30
LONG_WINDOW_DAYS = 90

# Grouping modes
GROUPING_MODES = ["default", "city", "bedrooms", "city-bedrooms"]
DEFAULT_GROUPING = "default"
UNKNOWN_GROUP = "Unknown"

# Reference retrieval
DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0

# Rounding for group averages
SUMMARY_DECIMALS = 2

# Dashboard colour thresholds (index points)
MPI_STRONG_THRESHOLD = 110
MPI_WEAK_THRESHOLD = 90

# Listing files tried in order before falling back to sample data
DEFAULT_LISTINGS_PATHS = ["public/listings.json", "mock/listings.json"]
DEFAULT_REFERENCE_PATHS = ["public/neighborhood.json", "mock/neighborhood.json"]
