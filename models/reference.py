from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


def as_number(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


@dataclass
class CategoryBlock:
    """Parallel time series: dates[i] lines up with channels[c][i]."""
    dates: List[str]
    channels: List[list] = field(default_factory=list)
    dropped_channels: int = 0    # Channels discarded for a length mismatch

    @classmethod
    def from_payload(cls, raw) -> Optional["CategoryBlock"]:
        """Parse an ``{"X_values": [...], "Y_values": [[...], ...]}`` block.

        Returns None when the block has no date axis.
        """
        if not isinstance(raw, dict):
            return None
        dates = raw.get("X_values", raw.get("dates"))
        channels = raw.get("Y_values", raw.get("channels"))
        if not isinstance(dates, list) or not dates:
            return None
        if not isinstance(channels, list):
            channels = []
        # A bare list of numbers is a single channel
        if channels and not any(isinstance(c, list) for c in channels):
            channels = [channels]

        kept = [c for c in channels if isinstance(c, list) and len(c) == len(dates)]
        return cls(
            dates=[str(d) for d in dates],
            channels=kept,
            dropped_channels=len(channels) - len(kept),
        )


@dataclass
class ReferenceDataset:
    sections: Dict[str, Dict[str, CategoryBlock]] = field(default_factory=dict)
    listings_used: Optional[int] = None
    currency: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    source: Optional[str] = None

    def section(self, name: str) -> Dict[str, CategoryBlock]:
        return self.sections.get(name, {})

    @property
    def category_count(self) -> int:
        return sum(len(categories) for categories in self.sections.values())

    @classmethod
    def from_payload(cls, payload) -> Optional["ReferenceDataset"]:
        """Parse a neighborhood payload, with or without the ``data`` wrapper.

        Any mapping value that holds a ``Category`` mapping (or looks like a
        category mapping itself) is treated as a section.
        """
        if not isinstance(payload, dict):
            return None
        body = payload.get("data", payload)
        if not isinstance(body, dict):
            return None

        sections: Dict[str, Dict[str, CategoryBlock]] = {}
        for name, raw_section in body.items():
            if not isinstance(raw_section, dict):
                continue
            categories = raw_section.get("Category", raw_section)
            if not isinstance(categories, dict):
                continue
            parsed = {}
            for category_id, raw_block in categories.items():
                block = CategoryBlock.from_payload(raw_block)
                if block is not None:
                    parsed[str(category_id)] = block
            if parsed:
                sections[str(name)] = parsed

        return cls(
            sections=sections,
            listings_used=body.get("Listings Used"),
            currency=body.get("currency"),
            lat=as_number(body.get("lat")),
            lng=as_number(body.get("lng")),
            source=body.get("source"),
        )


class ChannelLayout(str, Enum):
    FLAT = "flat"        # channels[c][i] is the value
    NESTED = "nested"    # channels[c][i] is a list holding the value at [0]


@dataclass(frozen=True)
class ChannelLocation:
    """A located occupancy channel. Layout is fixed when the channel is found."""
    section: str
    category_id: str
    channel_index: int
    layout: ChannelLayout
    block: CategoryBlock

    @property
    def dates(self) -> List[str]:
        return self.block.dates

    def value_at(self, index: int) -> Optional[float]:
        channel = self.block.channels[self.channel_index]
        if index < 0 or index >= len(channel):
            return None
        raw = channel[index]
        if self.layout == ChannelLayout.NESTED:
            if not isinstance(raw, list) or not raw:
                return None
            raw = raw[0]
        return as_number(raw)


@dataclass(frozen=True)
class ChannelNotFound:
    reason: str          # "no_dataset", "no_known_sections", "no_usable_channel"
    detail: str = ""
