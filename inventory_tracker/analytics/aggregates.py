"""
Inventory-level aggregates for the dashboard header, attention table and
category chart.  Pure folds over an item collection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from inventory_tracker.forecast.status import classify_status
from inventory_tracker.models.item import InventoryItem
from inventory_tracker.taxonomy.inventory_taxonomy import ItemStatus


@dataclass(frozen=True)
class DashboardTotals:
    """Headline counts.

    Attributes:
        total:           Number of items.
        low:             Items with status Low.
        out_of_stock:    Items with status Out of Stock.
        daily_usage_sum: Sum of ``daily_usage`` across all items.
    """

    total:           int
    low:             int
    out_of_stock:    int
    daily_usage_sum: float

    @property
    def healthy(self) -> int:
        return self.total - self.low - self.out_of_stock


def compute_dashboard_totals(items: Iterable[InventoryItem]) -> DashboardTotals:
    total = low = out = 0
    usage = 0.0
    for item in items:
        total += 1
        usage += item.daily_usage
        status = classify_status(item)
        if status is ItemStatus.LOW:
            low += 1
        elif status is ItemStatus.OUT_OF_STOCK:
            out += 1
    return DashboardTotals(total=total, low=low, out_of_stock=out, daily_usage_sum=usage)


def needs_attention(items: Iterable[InventoryItem], limit: int = 5) -> list[InventoryItem]:
    """First ``limit`` items that are Low or Out of Stock, in input order."""
    flagged: list[InventoryItem] = []
    for item in items:
        if len(flagged) >= limit:
            break
        if classify_status(item) is not ItemStatus.HEALTHY:
            flagged.append(item)
    return flagged


def category_breakdown(items: Iterable[InventoryItem]) -> dict[str, int]:
    """Item count per category, keyed in order of first appearance."""
    counts: dict[str, int] = {}
    for item in items:
        key = str(item.category)
        counts[key] = counts.get(key, 0) + 1
    return counts
