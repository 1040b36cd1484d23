"""Timeframe to date-range resolution."""

from datetime import date, datetime, timedelta
from typing import Optional, Tuple

from models.timeframe import Timeframe


def resolve_range(timeframe: int, reference_point: Optional[date] = None) -> Tuple[date, date]:
    """Forward-looking window of exactly ``timeframe`` days starting at ``reference_point``."""
    try:
        days = Timeframe(int(timeframe)).value
    except ValueError:
        raise ValueError(
            f"Unsupported timeframe: {timeframe}. Expected one of {[t.value for t in Timeframe]}."
        ) from None
    start = reference_point or date.today()
    if isinstance(start, datetime):
        start = start.date()
    end = start + timedelta(days=days - 1)
    return start, end


def span_days(start: date, end: date) -> int:
    """Inclusive length of [start, end] in days."""
    return (end - start).days + 1
