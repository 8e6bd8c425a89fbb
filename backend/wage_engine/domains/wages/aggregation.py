from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Protocol, Tuple

SECONDS_PER_HOUR = 3600


class Interval(Protocol):
    worker_id: str
    clock_in: datetime
    clock_out: Optional[datetime]


def as_utc(value: datetime) -> datetime:
    # Naive values only arrive from callers that skip the column type.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """Half-open UTC range ``[start, end)`` covering one calendar month."""
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    if month == 12:
        end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        end = datetime(year, month + 1, 1, tzinfo=timezone.utc)
    return start, end


def hours_between(clock_in: datetime, clock_out: Optional[datetime]) -> float:
    if clock_out is None:
        return 0.0
    seconds = (as_utc(clock_out) - as_utc(clock_in)).total_seconds()
    return max(0.0, seconds / SECONDS_PER_HOUR)


def aggregate_monthly_hours(intervals: Iterable[Interval]) -> Dict[str, float]:
    """Sum worked hours per worker.

    Intervals are attributed wholly to the month of their ``clock_in``; a shift
    that ends after midnight on the last day still counts in full for the month
    it started in. Callers select intervals by ``clock_in`` only.
    """
    totals: Dict[str, float] = {}
    for interval in intervals:
        totals[interval.worker_id] = totals.get(interval.worker_id, 0.0) + hours_between(
            interval.clock_in, interval.clock_out
        )
    return totals
