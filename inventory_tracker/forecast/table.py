"""
Forecast table builder.

One ``ForecastRow`` per item, ordered by urgency:

    priority
        high    if days <= high_priority_days      (default 7)
        medium  if days <= medium_priority_days    (default 14)
        low     otherwise, including never-runs-out

    suggested_order_date
        today + max(0, days - lead_time_days)      (default lead time 7)
        None when the item never runs out

Rows are sorted ascending by projection with never-runs-out last.  The sort
is stable, so items with equal projections keep their input order.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from inventory_tracker.forecast.stockout import StockoutProjection, days_until_stockout
from inventory_tracker.models.item import InventoryItem
from inventory_tracker.taxonomy.inventory_taxonomy import ForecastPriority
from inventory_tracker.utils.time_utils import add_days, utc_today

DEFAULT_LEAD_TIME_DAYS = 7
DEFAULT_HIGH_PRIORITY_DAYS = 7
DEFAULT_MEDIUM_PRIORITY_DAYS = 14


@dataclass(frozen=True)
class ForecastRow:
    """One line of the reorder forecast.

    Attributes:
        item:                 The source inventory item.
        projection:           Days until stockout.
        priority:             Reorder urgency bucket.
        suggested_order_date: Date to place the order, or ``None`` if never.
    """

    item:                 InventoryItem
    projection:           StockoutProjection
    priority:             ForecastPriority
    suggested_order_date: Optional[date]


def forecast_priority(
    projection: StockoutProjection,
    high_priority_days: int = DEFAULT_HIGH_PRIORITY_DAYS,
    medium_priority_days: int = DEFAULT_MEDIUM_PRIORITY_DAYS,
) -> ForecastPriority:
    """Bucket a projection into high / medium / low urgency."""
    if projection.within(high_priority_days):
        return ForecastPriority.HIGH
    if projection.within(medium_priority_days):
        return ForecastPriority.MEDIUM
    return ForecastPriority.LOW


def suggested_order_date(
    projection: StockoutProjection,
    today: date,
    lead_time_days: int = DEFAULT_LEAD_TIME_DAYS,
) -> Optional[date]:
    """Latest date to order so stock arrives before running out.

    Already-late items get ``today``.
    """
    if projection.days is None:
        return None
    return add_days(today, max(0, projection.days - lead_time_days))


def build_forecast(
    items: Iterable[InventoryItem],
    today: Optional[date] = None,
    *,
    lead_time_days: int = DEFAULT_LEAD_TIME_DAYS,
    high_priority_days: int = DEFAULT_HIGH_PRIORITY_DAYS,
    medium_priority_days: int = DEFAULT_MEDIUM_PRIORITY_DAYS,
) -> list[ForecastRow]:
    """Build the reorder forecast for ``items``.

    Args:
        items:                Inventory items in caller order.
        today:                Reference date; defaults to today (UTC).
        lead_time_days:       Supplier lead time subtracted from the projection.
        high_priority_days:   Upper bound (inclusive) of the high bucket.
        medium_priority_days: Upper bound (inclusive) of the medium bucket.

    Returns:
        Rows sorted by ascending projection, never-runs-out last.
    """
    ref = today if today is not None else utc_today()

    rows: list[ForecastRow] = []
    for item in items:
        projection = days_until_stockout(item)
        rows.append(
            ForecastRow(
                item=item,
                projection=projection,
                priority=forecast_priority(
                    projection, high_priority_days, medium_priority_days
                ),
                suggested_order_date=suggested_order_date(
                    projection, ref, lead_time_days
                ),
            )
        )

    rows.sort(key=lambda r: r.projection.sort_key)
    return rows
