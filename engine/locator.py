"""Find the channel in a reference dataset that carries market occupancy.

Reference feeds mix price, booking-count and occupancy series under channel
orderings that are not fixed. The rules below are a best-effort inference
over that untyped data:

1. The primary (daily forward-looking) section wins when it has the
   requested category. When it holds several categories, every category's
   first channel is sampled and the first one that looks like a real
   occupancy series (enough non-integer values in (0, 100]) is preferred.
2. Otherwise each secondary section is searched channel by channel for a
   series whose sampled average lies in (0, 100].
3. Otherwise the result is ``ChannelNotFound``.

The thresholds were tuned against one observed feed shape and may
misclassify others.
"""

from typing import List, Optional, Protocol, Union

from config.defaults import (
    PRIMARY_SECTION, SECONDARY_SECTIONS, KNOWN_SECTIONS,
    SAMPLE_SIZE, MIN_REALISTIC_SAMPLES, MANY_CATEGORIES_THRESHOLD,
    OCCUPANCY_MIN_EXCLUSIVE, OCCUPANCY_MAX_INCLUSIVE,
)
from config.logger import get_logger
from models.listing import Listing
from models.reference import (
    CategoryBlock, ChannelLayout, ChannelLocation, ChannelNotFound,
    ReferenceDataset, as_number,
)

logger = get_logger(__name__)

LocatorResult = Union[ChannelLocation, ChannelNotFound]


class CategoryMatcher(Protocol):
    def match_category(self, listing: Listing, dataset: ReferenceDataset) -> Optional[str]:
        ...


class FirstCategoryMatcher:
    """Placeholder matching: the first category of the first known section.

    Real matching (location, bedroom count, market segment) can replace this
    without touching the rest of the pipeline.
    """

    def match_category(self, listing: Listing, dataset: ReferenceDataset) -> Optional[str]:
        names = [s for s in KNOWN_SECTIONS if s in dataset.sections]
        names += [s for s in dataset.sections if s not in names]
        for name in names:
            categories = dataset.sections[name]
            if categories:
                return next(iter(categories))
        return None


def detect_layout(channel: list) -> ChannelLayout:
    for point in channel:
        if point is None:
            continue
        return ChannelLayout.NESTED if isinstance(point, list) else ChannelLayout.FLAT
    return ChannelLayout.FLAT


def sample_values(channel: list, sample_size: int = SAMPLE_SIZE) -> List[float]:
    """Numeric values among the first ``sample_size`` points of a channel."""
    layout = detect_layout(channel)
    values = []
    for raw in channel[:sample_size]:
        if layout == ChannelLayout.NESTED:
            raw = raw[0] if isinstance(raw, list) and raw else None
        number = as_number(raw)
        if number is not None:
            values.append(number)
    return values


def _in_occupancy_range(value: float) -> bool:
    return OCCUPANCY_MIN_EXCLUSIVE < value <= OCCUPANCY_MAX_INCLUSIVE


def is_realistic_occupancy(channel: list, rule_config: Optional[dict] = None) -> bool:
    """True when enough sampled values are non-integer percentages.

    Round numbers are rejected: booking counts, cancellations and
    placeholder fills are whole numbers, real occupancy averages rarely are.
    """
    cfg = rule_config or {}
    sample_size = cfg.get("sample_size", SAMPLE_SIZE)
    min_samples = cfg.get("min_realistic_samples", MIN_REALISTIC_SAMPLES)

    realistic = [
        v for v in sample_values(channel, sample_size)
        if _in_occupancy_range(v) and not float(v).is_integer()
    ]
    return len(realistic) >= min_samples


def sampled_average(channel: list, rule_config: Optional[dict] = None) -> Optional[float]:
    cfg = rule_config or {}
    values = sample_values(channel, cfg.get("sample_size", SAMPLE_SIZE))
    if not values:
        return None
    return sum(values) / len(values)


def _build_location(section: str, category_id: str, channel_index: int,
                    block: CategoryBlock) -> ChannelLocation:
    layout = detect_layout(block.channels[channel_index])
    return ChannelLocation(
        section=section,
        category_id=category_id,
        channel_index=channel_index,
        layout=layout,
        block=block,
    )


def _locate_in_primary(
    dataset: ReferenceDataset,
    section: str,
    category_id: Optional[str],
    cfg: dict,
) -> Optional[ChannelLocation]:
    categories = dataset.section(section)
    if not categories:
        return None

    chosen = category_id
    if len(categories) > cfg.get("many_categories_threshold", MANY_CATEGORIES_THRESHOLD):
        for cid, block in categories.items():
            if block.channels and is_realistic_occupancy(block.channels[0], cfg):
                chosen = cid
                break
        else:
            logger.debug(
                "No realistic occupancy category among %d in '%s'; keeping '%s'",
                len(categories), section, category_id,
            )

    block = categories.get(chosen) if chosen is not None else None
    if block is None or not block.channels:
        return None
    return _build_location(section, chosen, 0, block)


def _locate_in_secondary(
    dataset: ReferenceDataset,
    section: str,
    category_id: Optional[str],
    cfg: dict,
) -> Optional[ChannelLocation]:
    categories = dataset.section(section)
    if not categories:
        return None

    order = list(categories)
    if category_id in categories:
        order.remove(category_id)
        order.insert(0, category_id)

    for cid in order:
        block = categories[cid]
        for index, channel in enumerate(block.channels):
            avg = sampled_average(channel, cfg)
            if avg is not None and _in_occupancy_range(avg):
                return _build_location(section, cid, index, block)
    return None


def locate_channel(
    dataset: Optional[ReferenceDataset],
    category_id: Optional[str],
    rule_config: Optional[dict] = None,
) -> LocatorResult:
    """Locate the (section, category, channel) holding occupancy percentages."""
    cfg = rule_config or {}
    primary = cfg.get("primary_section", PRIMARY_SECTION)
    secondary = cfg.get("secondary_sections", SECONDARY_SECTIONS)

    if dataset is None:
        return ChannelNotFound("no_dataset")

    present = [s for s in [primary] + list(secondary) if s in dataset.sections]
    if not present:
        return ChannelNotFound(
            "no_known_sections",
            detail=f"sections present: {sorted(dataset.sections)}",
        )

    found = _locate_in_primary(dataset, primary, category_id, cfg)
    if found is not None:
        return found

    for section in secondary:
        found = _locate_in_secondary(dataset, section, category_id, cfg)
        if found is not None:
            logger.debug("Using secondary section '%s' category '%s' channel %d",
                         found.section, found.category_id, found.channel_index)
            return found

    return ChannelNotFound(
        "no_usable_channel",
        detail=f"category '{category_id}' in sections {present}",
    )
