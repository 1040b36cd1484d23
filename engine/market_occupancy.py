"""Average market occupancy of a located channel over a date range."""

import calendar
import re
from datetime import date, datetime
from typing import List, Optional

from config.defaults import AGGREGATE_LABELS, AGGREGATE_LABEL_PREFIX
from models.reference import ChannelLocation

_DAY_LABEL = re.compile(r"^\d{4}-\d{2}-\d{2}")


def is_aggregate_label(label: str) -> bool:
    label = label.strip()
    return label in AGGREGATE_LABELS or label.startswith(AGGREGATE_LABEL_PREFIX)


def is_daily_axis(dates: List[str]) -> bool:
    """Daily axes carry ISO day labels; anything else is read as months."""
    return any(_DAY_LABEL.match(d.strip()) for d in dates if not is_aggregate_label(d))


def parse_day(label: str) -> Optional[date]:
    try:
        return datetime.strptime(label.strip()[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_month(label: str) -> Optional[date]:
    """Parse "Aug 2024" (or "August 2024") to the first of that month."""
    text = label.strip()
    for fmt in ("%b %Y", "%B %Y"):
        try:
            return datetime.strptime(text, fmt).date().replace(day=1)
        except ValueError:
            continue
    return None


def month_end(month_start: date) -> date:
    last_day = calendar.monthrange(month_start.year, month_start.month)[1]
    return month_start.replace(day=last_day)


def select_indices(dates: List[str], start_date: date, end_date: date) -> List[int]:
    """Indices of the date axis that fall in (daily) or overlap (monthly) the range."""
    daily = is_daily_axis(dates)
    selected = []
    for i, label in enumerate(dates):
        if is_aggregate_label(label):
            continue
        if daily:
            day = parse_day(label)
            if day is not None and start_date <= day <= end_date:
                selected.append(i)
        else:
            first = parse_month(label)
            if first is None:
                continue
            if first <= end_date and month_end(first) >= start_date:
                selected.append(i)
    return selected


def average_occupancy(location: ChannelLocation, start_date: date, end_date: date) -> float:
    """Mean occupancy fraction over the range; 0.0 when no sample survives.

    Values of exactly zero are treated as missing samples, not as 0%.
    """
    samples = []
    for i in select_indices(location.dates, start_date, end_date):
        value = location.value_at(i)
        if value is None or value == 0:
            continue
        samples.append(value / 100.0)

    if not samples:
        return 0.0
    return sum(samples) / len(samples)
