import math
from dataclasses import dataclass, field
from typing import Dict, Optional

from config.defaults import TIMEFRAMES, UNKNOWN_GROUP


def _optional_float(value) -> Optional[float]:
    """Coerce feed values (numbers, numeric strings, NaN, None) to float or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _optional_str(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    text = str(value).strip()
    return text or None


def _optional_int(value) -> Optional[int]:
    number = _optional_float(value)
    if number is None or number < 0:
        return None
    return int(number)


@dataclass
class Listing:
    listing_id: str
    group: str = UNKNOWN_GROUP
    name: Optional[str] = None
    city_name: Optional[str] = None
    no_of_bedrooms: Optional[int] = None
    precomputed_mpi: Dict[int, Optional[float]] = field(default_factory=dict)  # timeframe -> ratio (1.15)
    adjusted_occupancy_past_30: Optional[str] = None    # e.g. "80 %"
    adjusted_occupancy_past_90: Optional[str] = None
    market_adjusted_occupancy_past_30: Optional[str] = None
    market_adjusted_occupancy_past_90: Optional[str] = None

    def precomputed_for(self, timeframe: int) -> Optional[float]:
        return self.precomputed_mpi.get(int(timeframe))

    @classmethod
    def from_record(cls, record: dict) -> "Listing":
        """Build a Listing from a raw feed record.

        Raises ValueError when the record has no usable id. Everything else
        degrades to None or the defaults.
        """
        if not isinstance(record, dict):
            raise ValueError(f"Listing record must be a mapping, got {type(record).__name__}")
        listing_id = _optional_str(record.get("id"))
        if listing_id is None:
            raise ValueError("Listing record is missing an id")

        return cls(
            listing_id=listing_id,
            group=_optional_str(record.get("group")) or UNKNOWN_GROUP,
            name=_optional_str(record.get("name")),
            city_name=_optional_str(record.get("city_name")),
            no_of_bedrooms=_optional_int(record.get("no_of_bedrooms")),
            precomputed_mpi={
                tf: _optional_float(record.get(f"mpi_next_{tf}")) for tf in TIMEFRAMES
            },
            adjusted_occupancy_past_30=_optional_str(record.get("adjusted_occupancy_past_30")),
            adjusted_occupancy_past_90=_optional_str(record.get("adjusted_occupancy_past_90")),
            market_adjusted_occupancy_past_30=_optional_str(record.get("market_adjusted_occupancy_past_30")),
            market_adjusted_occupancy_past_90=_optional_str(record.get("market_adjusted_occupancy_past_90")),
        )
