from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Protocol


class RateEntry(Protocol):
    hourly_rate: Decimal
    effective_from: date
    effective_to: Optional[date]


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def is_applicable(entry: RateEntry, start: date | datetime, end: date | datetime) -> bool:
    """True when the entry overlaps the period.

    ``effective_from`` is compared inclusively against ``end`` (the first day of
    the following month), so a rate starting on that day is still a candidate.
    """
    if entry.effective_from > _as_date(end):
        return False
    return entry.effective_to is None or entry.effective_to > _as_date(start)


def select_rate_entry(
    entries: Iterable[RateEntry], start: date | datetime, end: date | datetime
) -> Optional[RateEntry]:
    candidates = [entry for entry in entries if is_applicable(entry, start, end)]
    if not candidates:
        return None
    # Latest effective_from wins; equal start dates fall back to the highest rate.
    return max(candidates, key=lambda entry: (entry.effective_from, Decimal(entry.hourly_rate)))


def resolve_hourly_rate(
    entries: Iterable[RateEntry],
    start: date | datetime,
    end: date | datetime,
    fallback: Decimal,
) -> Decimal:
    entry = select_rate_entry(entries, start, end)
    if entry is None:
        return Decimal(fallback)
    return Decimal(entry.hourly_rate)
