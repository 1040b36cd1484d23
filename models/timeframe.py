from enum import Enum, IntEnum


class Timeframe(IntEnum):
    """Lookahead windows, in days."""
    NEXT_7 = 7
    NEXT_30 = 30
    NEXT_60 = 60
    NEXT_90 = 90
    NEXT_120 = 120


class Tier(str, Enum):
    """Which source produced an index value."""
    PRECOMPUTED = "precomputed"
    DERIVED = "derived"
    UNAVAILABLE = "unavailable"
