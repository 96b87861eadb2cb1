"""
Usage-history aggregates: most-used items, the rolling daily trend and its
peak indicator.

Day bucketing uses the UTC calendar date of ``used_at``.  Usage records whose
item no longer exists still count; their name resolves to ``"Unknown"``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from inventory_tracker.models.item import InventoryItem
from inventory_tracker.models.usage import UsageRecord
from inventory_tracker.utils.time_utils import day_key, trailing_window, utc_today

UNKNOWN_ITEM_NAME = "Unknown"


@dataclass(frozen=True)
class TopUsedItem:
    item_id:        int
    name:           str
    total_quantity: int


@dataclass(frozen=True)
class TrendBucket:
    day:   date
    total: int


@dataclass(frozen=True)
class UsagePeak:
    """Peak indicator over a trend window.

    Attributes:
        peak_day:   Day with the highest total (earliest on ties).
        peak_total: That day's total.
        low_day:    Day with the lowest non-zero total (earliest on ties).
        low_total:  That day's total.
        average:    Mean daily total over the whole window, zeros included.
    """

    peak_day:   date
    peak_total: int
    low_day:    date
    low_total:  int
    average:    float


def top_used_items(
    usage: Iterable[UsageRecord],
    items: Iterable[InventoryItem],
    n: int = 5,
) -> list[TopUsedItem]:
    """Items with the largest summed usage quantity.

    Args:
        usage: Usage history.
        items: Current inventory, used only to resolve names.
        n:     Number of entries to return.

    Returns:
        Up to ``n`` entries sorted by descending total; ties keep the order
        in which each item first appears in ``usage``.
    """
    totals: dict[int, int] = {}
    for rec in usage:
        totals[rec.item_id] = totals.get(rec.item_id, 0) + rec.quantity

    names = {i.item_id: i.name for i in items if i.item_id is not None}
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return [
        TopUsedItem(
            item_id=item_id,
            name=names.get(item_id, UNKNOWN_ITEM_NAME),
            total_quantity=qty,
        )
        for item_id, qty in ranked[:n]
    ]


def usage_trend(
    usage: Iterable[UsageRecord],
    window_days: int = 7,
    today: Optional[date] = None,
) -> list[TrendBucket]:
    """Daily usage totals over the ``window_days`` days ending ``today``.

    Days with no usage get a zero bucket.  Records outside the window are
    ignored.  Buckets are ordered oldest first.
    """
    days = trailing_window(today if today is not None else utc_today(), window_days)
    totals: dict[date, int] = {d: 0 for d in days}
    for rec in usage:
        key = day_key(rec.used_at)
        if key in totals:
            totals[key] += rec.quantity
    return [TrendBucket(day=d, total=totals[d]) for d in days]


def usage_peak(trend: Sequence[TrendBucket]) -> Optional[UsagePeak]:
    """Peak, lowest non-zero day and average of a trend; ``None`` if all zero."""
    nonzero = [b for b in trend if b.total > 0]
    if not nonzero:
        return None

    peak = nonzero[0]
    low = nonzero[0]
    for bucket in nonzero[1:]:
        if bucket.total > peak.total:
            peak = bucket
        if bucket.total < low.total:
            low = bucket

    return UsagePeak(
        peak_day=peak.day,
        peak_total=peak.total,
        low_day=low.day,
        low_total=low.total,
        average=sum(b.total for b in trend) / len(trend),
    )
